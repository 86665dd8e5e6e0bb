"""assignflow — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from functools import partial

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from assignflow.adapters.badges.assignment_badges import AssignmentBadgeSource
from assignflow.adapters.persistence.database import engine
from assignflow.application.notifications import BadgeApi, NotificationState
from assignflow.config import settings
from assignflow.infrastructure.api.dependencies import (
    assignment_repo_scope,
    init_app_state,
    utc_now,
)
from assignflow.infrastructure.api.errors import register_error_handlers
from assignflow.infrastructure.api.routes_assignments import router as assignments_router
from assignflow.infrastructure.api.routes_badges import router as badges_router
from assignflow.infrastructure.api.routes_health import router as health_router
from assignflow.infrastructure.api.routes_my_assignments import router as my_assignments_router
from assignflow.infrastructure.api.routes_statuses import router as statuses_router
from assignflow.infrastructure.api.routes_suppliers import router as suppliers_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    if settings.storage_backend == "sql":
        try:
            async with engine.begin():
                pass  # Connection pool warmed up
            logger.info("Database connection established")
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Database not available on startup: %s", e)
    else:
        logger.info("Using in-memory storage")

    badge_api = BadgeApi.resolve([
        AssignmentBadgeSource(partial(assignment_repo_scope, app), clock=utc_now),
    ])
    notifications = NotificationState(badge_api, interval_s=settings.badge_poll_interval_s)
    await notifications.init()
    app.state.notifications = notifications

    yield

    app.state.notifications = None
    await notifications.teardown()
    if settings.storage_backend == "sql":
        await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="assignflow — Supplier Assignment Workflow",
        description="Assign business requests to suppliers and drive them through their status workflow",
        version="0.1.0",
        lifespan=lifespan,
    )
    init_app_state(app)
    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(statuses_router, prefix="/api")
    app.include_router(assignments_router, prefix="/api")
    app.include_router(my_assignments_router, prefix="/api")
    app.include_router(suppliers_router, prefix="/api")
    app.include_router(badges_router, prefix="/api")

    return app


app = create_app()
