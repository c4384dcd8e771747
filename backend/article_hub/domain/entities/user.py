"""Domain entities for identity — local users and authenticated sessions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """A local user record, keyed by the identity provider's subject id."""

    id: str
    email: str


@dataclass(frozen=True)
class ExternalIdentity:
    """Claims returned by the identity provider for a valid session token.

    ``email`` may be missing when the provider account has no confirmed
    address; the identity layer refuses such sessions.
    """

    subject_id: str
    email: str | None
    session_id: str


@dataclass(frozen=True)
class ProviderTokens:
    """Tokens minted by the identity provider on sign-in or refresh."""

    access_token: str
    refresh_token: str | None = None


@dataclass(frozen=True)
class AuthSession:
    """Proof of an authenticated caller, passed explicitly into every write.

    ``refreshed_tokens`` is set when the access token had expired and the
    session was renewed with the refresh token; the caller must hand the new
    tokens back to the client.
    """

    user: User
    external_session_id: str
    refreshed_tokens: ProviderTokens | None = None
