"""Resolves request credentials into an authenticated session.

The identity provider vouches for the token; the local ``users`` table is
provisioned on first sight of a provider identity (get-or-create by email).
"""

import logging

from article_hub.application.interfaces import IdentityProvider, UserRepository
from article_hub.domain.entities import AuthSession, ExternalIdentity, User
from article_hub.domain.exceptions import (
    DuplicateEntityError,
    IdentityError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)


class IdentityService:
    """Session gate in front of every mutating article operation."""

    def __init__(self, provider: IdentityProvider, user_repository: UserRepository):
        self._provider = provider
        self._users = user_repository

    async def resolve_session(
        self,
        access_token: str | None,
        refresh_token: str | None = None,
    ) -> AuthSession | None:
        """Return the caller's session, or ``None`` when there is no valid one.

        An expired or missing access token is renewed with ``refresh_token``
        when one is supplied; the new tokens ride along on the session.
        """
        identity = None
        if access_token:
            identity = await self._provider.get_identity(access_token)
            if identity is None:
                logger.debug("%s rejected session token", self._provider.provider_name)

        refreshed = None
        if identity is None and refresh_token:
            refreshed = await self._provider.refresh_session(refresh_token)
            if refreshed is not None:
                identity = await self._provider.get_identity(refreshed.access_token)
                logger.debug("%s session refreshed", self._provider.provider_name)

        if identity is None:
            return None

        user = await self._get_or_create_user(identity)
        return AuthSession(
            user=user,
            external_session_id=identity.session_id,
            refreshed_tokens=refreshed,
        )

    async def require_session(
        self,
        access_token: str | None,
        refresh_token: str | None = None,
    ) -> AuthSession:
        session = await self.resolve_session(access_token, refresh_token)
        if session is None:
            raise UnauthenticatedError()
        return session

    async def _get_or_create_user(self, identity: ExternalIdentity) -> User:
        email = (identity.email or "").strip()
        if not email:
            raise IdentityError(
                f"{self._provider.provider_name} session for subject "
                f"'{identity.subject_id}' has no email claim"
            )

        user = await self._users.get_by_email(email)
        if user is not None:
            return user

        try:
            user = await self._users.create(User(id=identity.subject_id, email=email))
        except DuplicateEntityError:
            # Lost a race with a concurrent first login; the other insert won.
            user = await self._users.get_by_email(email)
            if user is None:
                raise IdentityError(
                    f"User for subject '{identity.subject_id}' conflicts with an "
                    "existing account"
                )
            return user

        logger.info("Provisioned local user %s (%s)", user.id, user.email)
        return user
