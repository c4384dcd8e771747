"""Application service for sign-in, sign-up and sign-out against the identity provider."""

import logging

from article_hub.application.interfaces import IdentityProvider
from article_hub.application.schemas import LoginRequest, SignupRequest
from article_hub.domain.entities import ProviderTokens
from article_hub.domain.exceptions import AuthProviderError, ValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

_EMAIL_NOT_CONFIRMED_MESSAGE = (
    "Please confirm your email address before signing in. "
    "Check your inbox for the confirmation link."
)


class AuthService:
    """Thin orchestration over the identity provider with form-level validation."""

    def __init__(self, provider: IdentityProvider):
        self._provider = provider

    async def sign_in(self, data: LoginRequest) -> ProviderTokens:
        email = data.email.strip()
        if not email or not data.password:
            raise ValidationError({"credentials": "Email and password are required"})

        try:
            tokens = await self._provider.sign_in_with_password(email, data.password)
        except AuthProviderError as exc:
            if "email not confirmed" in exc.message.lower():
                raise AuthProviderError(
                    exc.provider, exc.status_code, _EMAIL_NOT_CONFIRMED_MESSAGE
                ) from exc
            raise

        logger.info("Signed in %s", email)
        return tokens

    async def sign_up(self, data: SignupRequest) -> str:
        email = data.email.strip()
        if not email or not data.password or not data.confirm_password:
            raise ValidationError({"credentials": "All fields are required"})
        if data.password != data.confirm_password:
            raise ValidationError({"confirm_password": "Passwords do not match"})
        if len(data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                {"password": f"Password must be at least {MIN_PASSWORD_LENGTH} characters"}
            )

        await self._provider.sign_up(email, data.password)
        logger.info("Registered %s", email)
        return (
            "Account created! Please check your email to confirm your account "
            "before signing in."
        )

    async def sign_out(self, access_token: str | None) -> None:
        if not access_token:
            return
        try:
            await self._provider.sign_out(access_token)
        except AuthProviderError as exc:
            # The cookie is cleared regardless; an already-expired token is not an error.
            logger.warning("Sign-out rejected by %s: %s", exc.provider, exc.message)
