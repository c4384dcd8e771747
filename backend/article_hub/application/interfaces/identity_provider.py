"""Abstract identity provider interface — provider-agnostic session handling."""

from abc import ABC, abstractmethod

from article_hub.domain.entities import ExternalIdentity, ProviderTokens


class IdentityProvider(ABC):
    """Port for the external authentication service.

    Implementations translate provider failures into ``AuthProviderError``.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Short identifier used in logs and error messages."""
        ...

    @abstractmethod
    async def get_identity(self, access_token: str) -> ExternalIdentity | None:
        """Validate a session token. Returns ``None`` if the provider rejects it."""
        ...

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> ProviderTokens:
        ...

    @abstractmethod
    async def refresh_session(self, refresh_token: str) -> ProviderTokens | None:
        """Exchange a refresh token for new tokens. ``None`` if the provider refuses it."""
        ...

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> None:
        ...

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        ...
