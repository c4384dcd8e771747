"""FastAPI dependency injection — wires infrastructure to application layer.

Process-wide resources (the ``Database`` and the identity provider) live on
``app.state``; everything else is built per request on top of one
``AsyncSession``, so the identity lookup and the article write share a
transaction.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from article_hub.config import Settings
from article_hub.application.interfaces import IdentityProvider
from article_hub.application.services import ArticleService, AuthService, IdentityService
from article_hub.domain.entities import AuthSession, ProviderTokens
from article_hub.domain.exceptions import AuthProviderError, IdentityError, UnauthenticatedError
from article_hub.infrastructure.database import Database
from article_hub.infrastructure.database.repositories import (
    SQLAlchemyArticleRepository,
    SQLAlchemyUserRepository,
)
from article_hub.presentation.api.v1.errors import to_http_exception


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity_provider


async def get_db_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Yields an async DB session per request — committed on success."""
    async with database.session() as session:
        yield session


def get_access_token(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
    settings: Settings = Depends(get_app_settings),
) -> str | None:
    """Session token from the HttpOnly cookie, falling back to a Bearer header."""
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token
    if authorization and authorization.startswith("Bearer "):
        bearer = authorization.split(" ", 1)[1].strip()
        return bearer or None
    return None


def get_refresh_token(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> str | None:
    return request.cookies.get(settings.refresh_cookie_name) or None


def set_session_cookies(response: Response, tokens: ProviderTokens, settings: Settings) -> None:
    """Store the provider tokens in HttpOnly cookies."""
    cookies = {settings.session_cookie_name: tokens.access_token}
    if tokens.refresh_token:
        cookies[settings.refresh_cookie_name] = tokens.refresh_token
    for name, value in cookies.items():
        response.set_cookie(
            key=name,
            value=value,
            max_age=settings.session_cookie_max_age,
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite="lax",
        )


def clear_session_cookies(response: Response, settings: Settings) -> None:
    for name in (settings.session_cookie_name, settings.refresh_cookie_name):
        response.delete_cookie(
            key=name,
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite="lax",
        )


async def get_article_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ArticleService, None]:
    """Provides an ArticleService instance with its repository wired up."""
    repository = SQLAlchemyArticleRepository(session)
    yield ArticleService(repository)


async def get_identity_service(
    session: AsyncSession = Depends(get_db_session),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> AsyncGenerator[IdentityService, None]:
    """Provides an IdentityService backed by the shared provider client."""
    yield IdentityService(provider, SQLAlchemyUserRepository(session))


def get_auth_service(
    provider: IdentityProvider = Depends(get_identity_provider),
) -> AuthService:
    return AuthService(provider)


async def require_auth_session(
    response: Response,
    token: str | None = Depends(get_access_token),
    refresh_token: str | None = Depends(get_refresh_token),
    identity: IdentityService = Depends(get_identity_service),
    settings: Settings = Depends(get_app_settings),
) -> AuthSession:
    """Gate for mutating endpoints — 401 without a valid session.

    A renewed session re-issues the cookies on the outgoing response.
    """
    try:
        session = await identity.require_session(token, refresh_token)
    except UnauthenticatedError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": e.message, "login_url": settings.login_url},
            headers={"WWW-Authenticate": "Bearer"},
        )
    except IdentityError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
    except AuthProviderError as e:
        raise to_http_exception(e)

    if session.refreshed_tokens is not None:
        set_session_cookies(response, session.refreshed_tokens, settings)
    return session
