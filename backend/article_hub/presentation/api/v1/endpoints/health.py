"""Health check endpoints."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from article_hub.config import Settings
from article_hub.infrastructure.database import Database
from article_hub.infrastructure.dependencies import get_app_settings, get_database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(settings: Settings = Depends(get_app_settings)) -> dict:
    """Returns the current application health status — no database access."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
    }


@router.get("/health/db")
async def database_health(database: Database = Depends(get_database)) -> JSONResponse:
    """Raw ``SELECT 1`` probe against the database."""
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        await database.ping()
    except Exception as exc:
        logger.error("Database health check failed: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"status": "error", "database": "unreachable", "timestamp": timestamp},
        )
    return JSONResponse(
        content={"status": "ok", "database": "connected", "timestamp": timestamp},
    )
