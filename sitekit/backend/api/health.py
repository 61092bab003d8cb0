"""
Health Endpoints.

    GET /health            the process answers
    GET /health/ready      the database answers `SELECT 1` in time (503 if not)
    GET /health/detailed   database, Telegram and upload directory, one by one

Only the database decides readiness. Telegram and the upload directory are
reported but never take the service out of rotation.
"""

import asyncio
import time
from typing import Any

from fastapi import APIRouter, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from sitekit.backend.core.config import get_app_config, get_settings
from sitekit.backend.core.database import get_session_factory
from sitekit.backend.core.logging import get_logger
from sitekit.backend.core.utils import utc_now
from sitekit.backend.gateway.adapters.telegram import get_telegram_breaker
from sitekit.backend.services.storage import resolve_upload_root

router = APIRouter()
logger = get_logger(__name__)


async def check_database() -> dict[str, Any]:
    timeout = get_app_config().application.timeouts.database
    started = time.perf_counter()
    try:
        async with asyncio.timeout(timeout):
            async with get_session_factory()() as session:
                await session.execute(text("SELECT 1"))
    except TimeoutError:
        logger.warning("Database health check timed out", extra={"timeout_seconds": timeout})
        return {"status": "unhealthy", "error": f"timed out after {timeout}s"}
    except SQLAlchemyError as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}

    return {"status": "healthy", "latency_ms": int((time.perf_counter() - started) * 1000)}


def check_telegram() -> dict[str, Any]:
    """Global secrets only; per-site bots in site settings are not checked."""
    settings = get_settings()
    if not (settings.telegram_bot_token and settings.telegram_chat_id):
        return {"status": "not_configured"}
    breaker = get_telegram_breaker(settings.telegram_bot_token)
    return {"status": "configured", "circuit": breaker.current_state.name.lower()}


def check_uploads() -> dict[str, Any]:
    root = resolve_upload_root()
    return {"status": "healthy" if root.is_dir() else "missing", "directory": str(root)}


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check() -> dict[str, Any]:
    checks = {"database": await check_database()}
    body = {
        "status": checks["database"]["status"],
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }
    if body["status"] != "healthy":
        logger.warning("Readiness check failed", extra={"checks": checks})
        raise HTTPException(status_code=503, detail=body)
    return body


@router.get("/health/detailed")
async def detailed_health_check() -> dict[str, Any]:
    application = get_app_config().application
    checks = {
        "database": await check_database(),
        "telegram": check_telegram(),
        "uploads": check_uploads(),
    }
    return {
        "status": checks["database"]["status"],
        "application": {
            "name": application.name,
            "env": application.environment,
            "debug": application.debug,
            "version": application.version,
        },
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }
