"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Header, HTTPException, Request

from assignflow.adapters.persistence.database import async_session_factory
from assignflow.adapters.persistence.memory import (
    InMemoryAssignmentRepository,
    InMemoryStore,
    InMemorySupplierRepository,
)
from assignflow.adapters.persistence.repositories import (
    SqlAssignmentRepository,
    SqlSupplierRepository,
)
from assignflow.application.concurrency import KeyedLock
from assignflow.application.notifications import NotificationState
from assignflow.application.ports.assignment_repo import AssignmentRepository
from assignflow.application.ports.supplier_repo import SupplierRepository
from assignflow.application.use_cases.audit_trail import GetAuditTrailUseCase
from assignflow.application.use_cases.create_assignment import CreateAssignmentUseCase
from assignflow.application.use_cases.list_assignments import ListAssignmentsUseCase
from assignflow.application.use_cases.update_priority import UpdatePriorityUseCase
from assignflow.application.use_cases.update_status import UpdateStatusUseCase
from assignflow.config import settings
from assignflow.domain.entities.actor import Actor
from assignflow.domain.value_objects.enums import ActorRole

logger = logging.getLogger(__name__)


def new_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def init_app_state(app: FastAPI) -> None:
    """Process-wide collaborators. Called once by create_app."""
    app.state.locks = KeyedLock()
    app.state.store = InMemoryStore()
    app.state.notifications = None


# ─── Repositories ────────────────────────────────────────────────────


@dataclass
class Repositories:
    assignments: AssignmentRepository
    suppliers: SupplierRepository


@asynccontextmanager
async def repository_scope(app: FastAPI) -> AsyncIterator[Repositories]:
    """One unit of work: repositories sharing a session (or the in-memory store)."""
    if settings.storage_backend == "memory":
        yield Repositories(
            assignments=InMemoryAssignmentRepository(app.state.store),
            suppliers=InMemorySupplierRepository(app.state.store),
        )
        return

    async with async_session_factory() as session:
        try:
            yield Repositories(
                assignments=SqlAssignmentRepository(session),
                suppliers=SqlSupplierRepository(session),
            )
        finally:
            if session.in_transaction():
                await session.rollback()


@asynccontextmanager
async def assignment_repo_scope(app: FastAPI) -> AsyncIterator[AssignmentRepository]:
    async with repository_scope(app) as repos:
        yield repos.assignments


async def get_repositories(request: Request) -> AsyncIterator[Repositories]:
    async with repository_scope(request.app) as repos:
        yield repos


# ─── Actor ───────────────────────────────────────────────────────────


def get_actor(
    x_actor_role: str | None = Header(default=None),
    x_user_id: str | None = Header(default=None),
    x_supplier_id: str | None = Header(default=None),
) -> Actor:
    """Trusted identity headers set by the gateway in front of the API."""
    if not x_actor_role:
        raise HTTPException(status_code=401, detail="X-Actor-Role header is required")
    try:
        role = ActorRole(x_actor_role.strip().upper())
    except ValueError:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown actor role: {x_actor_role}",
        ) from None
    return Actor(role=role, user_id=x_user_id or None, supplier_id=x_supplier_id or None)


def require_admin(actor: Actor = Depends(get_actor)) -> Actor:
    if not actor.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return actor


def require_supplier(actor: Actor = Depends(get_actor)) -> Actor:
    if actor.role != ActorRole.SUPPLIER:
        raise HTTPException(status_code=403, detail="Supplier access required")
    if not actor.supplier_id:
        raise HTTPException(status_code=403, detail="X-Supplier-Id header is required")
    return actor


# ─── Notifications ───────────────────────────────────────────────────


def get_notifications(request: Request) -> NotificationState:
    state = getattr(request.app.state, "notifications", None)
    if state is None:
        raise HTTPException(status_code=503, detail="Badge notifications are not running")
    return state


# ─── Use cases ───────────────────────────────────────────────────────


def get_create_assignment_uc(
    repos: Repositories = Depends(get_repositories),
) -> CreateAssignmentUseCase:
    return CreateAssignmentUseCase(
        repository=repos.assignments,
        suppliers=repos.suppliers,
        id_generator=new_id,
        clock=utc_now,
        timeout_s=settings.persistence_timeout_s,
    )


def get_list_assignments_uc(
    repos: Repositories = Depends(get_repositories),
) -> ListAssignmentsUseCase:
    return ListAssignmentsUseCase(
        repository=repos.assignments,
        max_limit=settings.max_page_size,
        timeout_s=settings.persistence_timeout_s,
    )


def get_update_status_uc(
    request: Request,
    repos: Repositories = Depends(get_repositories),
) -> UpdateStatusUseCase:
    subscribers = []
    notifications = getattr(request.app.state, "notifications", None)
    if notifications is not None:
        subscribers.append(notifications.on_status_changed)
    return UpdateStatusUseCase(
        repository=repos.assignments,
        id_generator=new_id,
        clock=utc_now,
        locks=request.app.state.locks,
        subscribers=subscribers,
        timeout_s=settings.persistence_timeout_s,
    )


def get_update_priority_uc(
    request: Request,
    repos: Repositories = Depends(get_repositories),
) -> UpdatePriorityUseCase:
    return UpdatePriorityUseCase(
        repository=repos.assignments,
        clock=utc_now,
        locks=request.app.state.locks,
        timeout_s=settings.persistence_timeout_s,
    )


def get_audit_trail_uc(
    repos: Repositories = Depends(get_repositories),
) -> GetAuditTrailUseCase:
    return GetAuditTrailUseCase(
        repository=repos.assignments,
        timeout_s=settings.persistence_timeout_s,
    )
