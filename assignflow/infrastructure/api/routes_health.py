"""Health check endpoint."""

import logging

from fastapi import APIRouter, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from assignflow.adapters.persistence.database import async_session_factory
from assignflow.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request):
    """Check API and storage connectivity."""
    if settings.storage_backend == "memory":
        db_status = "memory"
    else:
        try:
            async with async_session_factory() as session:
                (await session.execute(text("SELECT 1"))).scalar()
            db_status = "connected"
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Health check: database unavailable: %s", e)
            db_status = f"error: {e}"

    notifications = getattr(request.app.state, "notifications", None)
    return {
        "status": "degraded" if db_status.startswith("error") else "ok",
        "database": db_status,
        "badgePolling": bool(notifications and notifications.running),
        "service": "assignflow - Supplier Assignment Workflow",
    }
