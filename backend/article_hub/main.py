"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from article_hub.config import Settings, get_settings
from article_hub.infrastructure.database import Database
from article_hub.infrastructure.logging.log_config import setup_logging
from article_hub.infrastructure.supabase import SupabaseAuthClient
from article_hub.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _ensure_database_exists(settings: Settings) -> None:
    """Create the PostgreSQL database if it does not yet exist.

    Connects to the default ``postgres`` maintenance database, checks for the
    target database name, and issues ``CREATE DATABASE`` when missing.
    """
    from urllib.parse import urlparse

    import asyncpg

    parsed = urlparse(settings.database_url)
    db_name = parsed.path.lstrip("/")
    if not db_name:
        return

    # Build a connection URL pointing at the default 'postgres' database
    maintenance_url = settings.database_url.rsplit("/", 1)[0] + "/postgres"

    try:
        conn = await asyncpg.connect(maintenance_url)
        try:
            exists = await conn.fetchval(
                "SELECT 1 FROM pg_database WHERE datname = $1", db_name
            )
            if not exists:
                # CREATE DATABASE cannot run inside a transaction block
                await conn.execute(f'CREATE DATABASE "{db_name}"')
                logger.info("Created database '%s'", db_name)
            else:
                logger.debug("Database '%s' already exists", db_name)
        finally:
            await conn.close()
    except Exception as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — open the database and identity client, close them on shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    # 1. Ensure the PostgreSQL database exists (auto-create if missing)
    if settings.database_url.startswith("postgresql://"):
        await _ensure_database_exists(settings)

    # 2. Engine + tables
    database = Database(settings.database_url)
    await database.create_all()
    app.state.database = database

    # 3. Shared HTTP client for the identity provider
    http_client = httpx.AsyncClient(timeout=settings.supabase_timeout)
    app.state.identity_provider = SupabaseAuthClient(
        base_url=settings.supabase_url,
        anon_key=settings.supabase_anon_key,
        timeout=settings.supabase_timeout,
        http_client=http_client,
    )
    if not settings.supabase_anon_key.strip():
        logger.warning("SUPABASE_ANON_KEY is not configured; sign-in will fail.")

    logger.info("%s %s started (%s)", settings.app_title, settings.app_version, settings.app_env)

    yield

    # Shutdown
    await http_client.aclose()
    await database.dispose()


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(Exception, _unhandled_exception_handler)

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "article_hub.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
