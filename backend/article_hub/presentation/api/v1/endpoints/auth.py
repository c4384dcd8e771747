"""Sign-in, sign-up and sign-out endpoints backed by the identity provider."""

from fastapi import APIRouter, Depends, Response

from article_hub.config import Settings
from article_hub.application.schemas import (
    LoginRequest,
    MessageResponse,
    SessionResponse,
    SignupRequest,
    UserResponse,
)
from article_hub.application.services import AuthService
from article_hub.domain.entities import AuthSession
from article_hub.domain.exceptions import AuthProviderError, ValidationError
from article_hub.infrastructure.dependencies import (
    clear_session_cookies,
    get_access_token,
    get_app_settings,
    get_auth_service,
    require_auth_session,
    set_session_cookies,
)
from article_hub.presentation.api.v1.errors import to_http_exception

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=MessageResponse)
async def login(
    data: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> MessageResponse:
    """Sign in with email and password; sets the session cookies."""
    try:
        tokens = await service.sign_in(data)
    except (ValidationError, AuthProviderError) as e:
        raise to_http_exception(e)

    set_session_cookies(response, tokens, settings)
    return MessageResponse(message="Signed in")


@router.post("/signup", response_model=MessageResponse)
async def signup(
    data: SignupRequest,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Register a new account; the provider sends a confirmation email."""
    try:
        message = await service.sign_up(data)
    except (ValidationError, AuthProviderError) as e:
        raise to_http_exception(e)
    return MessageResponse(message=message)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    token: str | None = Depends(get_access_token),
    service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> MessageResponse:
    """Revoke the provider session and clear the cookies."""
    await service.sign_out(token)
    clear_session_cookies(response, settings)
    return MessageResponse(message="Signed out")


@router.get("/me", response_model=SessionResponse)
async def current_session(
    session: AuthSession = Depends(require_auth_session),
) -> SessionResponse:
    """The authenticated caller."""
    return SessionResponse(user=UserResponse.model_validate(session.user, from_attributes=True))
