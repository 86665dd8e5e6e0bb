"""SQLAlchemy repository implementations."""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import ParamSpec, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from assignflow.adapters.persistence.models import (
    AssignmentAuditModel,
    AssignmentModel,
    SupplierModel,
)
from assignflow.application.ports.assignment_repo import AssignmentRepository
from assignflow.application.ports.supplier_repo import SupplierRepository
from assignflow.domain.entities.assignment import Assignment
from assignflow.domain.entities.audit_entry import AuditEntry
from assignflow.domain.entities.supplier import Supplier
from assignflow.domain.errors import ConflictError, NotFoundError, TransientError
from assignflow.domain.value_objects.enums import (
    ActorRole,
    AssignmentStatus,
    Priority,
    RequestType,
)
from assignflow.domain.value_objects.filters import AssignmentFilter

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

# ─── Mappers ─────────────────────────────────────────────────────────


def _supplier_to_domain(m: SupplierModel) -> Supplier:
    return Supplier(
        id=m.id,
        company_name=m.company_name,
        contact_name=m.contact_name,
        is_active=m.is_active,
    )


def _assignment_to_domain(m: AssignmentModel) -> Assignment:
    return Assignment(
        id=m.id,
        supplier_id=m.supplier_id,
        request_type=RequestType(m.request_type),
        request_id=m.request_id,
        status=AssignmentStatus(m.status),
        priority=Priority(m.priority),
        supplier_notes=m.supplier_notes,
        created_by=m.created_by,
        version=m.version,
        created_at=m.created_at,
        updated_at=m.updated_at,
    )


def _audit_to_domain(m: AssignmentAuditModel) -> AuditEntry:
    return AuditEntry(
        id=m.id,
        assignment_id=m.assignment_id,
        old_status=AssignmentStatus(m.old_status),
        new_status=AssignmentStatus(m.new_status),
        changed_by_role=ActorRole(m.changed_by_role),
        changed_by=m.changed_by,
        notes=m.notes,
        changed_at=m.changed_at,
    )


def _translate_db_errors(fn: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Connection-level failures become TransientError; everything else propagates."""

    @functools.wraps(fn)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await fn(*args, **kwargs)
        except OperationalError as e:
            logger.warning("Database unavailable in %s: %s", fn.__name__, e)
            raise TransientError("Database is temporarily unavailable") from e
        except DBAPIError as e:
            if e.connection_invalidated:
                logger.warning("Database connection lost in %s: %s", fn.__name__, e)
                raise TransientError("Database connection was lost") from e
            raise

    return wrapper


def _apply_filters(stmt: Select, filters: AssignmentFilter) -> Select:
    if filters.status is not None:
        stmt = stmt.where(AssignmentModel.status == filters.status.value)
    if filters.request_type is not None:
        stmt = stmt.where(AssignmentModel.request_type == filters.request_type.value)
    if filters.supplier_id is not None:
        stmt = stmt.where(AssignmentModel.supplier_id == filters.supplier_id)
    return stmt


# ─── Repositories ────────────────────────────────────────────────────


class SqlAssignmentRepository(AssignmentRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    @_translate_db_errors
    async def save(self, assignment: Assignment) -> Assignment:
        m = AssignmentModel(
            id=assignment.id,
            supplier_id=assignment.supplier_id,
            request_type=assignment.request_type.value,
            request_id=assignment.request_id,
            status=assignment.status.value,
            priority=int(assignment.priority),
            supplier_notes=assignment.supplier_notes,
            created_by=assignment.created_by,
            version=assignment.version,
            created_at=assignment.created_at,
            updated_at=assignment.updated_at,
        )
        self._s.add(m)
        await self._s.flush()
        return assignment

    @_translate_db_errors
    async def get_by_id(self, assignment_id: str) -> Assignment | None:
        m = await self._s.get(AssignmentModel, assignment_id, populate_existing=True)
        return _assignment_to_domain(m) if m else None

    @_translate_db_errors
    async def query(self, filters: AssignmentFilter) -> list[Assignment]:
        stmt = (
            _apply_filters(select(AssignmentModel), filters)
            .order_by(AssignmentModel.created_at.desc(), AssignmentModel.id.desc())
            .offset(filters.offset)
            .limit(filters.limit)
        )
        result = await self._s.execute(stmt)
        return [_assignment_to_domain(m) for m in result.scalars()]

    @_translate_db_errors
    async def count(self, filters: AssignmentFilter) -> int:
        stmt = _apply_filters(select(func.count(AssignmentModel.id)), filters)
        return (await self._s.execute(stmt)).scalar() or 0

    @_translate_db_errors
    async def update(self, assignment: Assignment, expected_version: int) -> Assignment:
        # Row lock: concurrent writers of the same assignment queue up here
        result = await self._s.execute(
            select(AssignmentModel)
            .where(AssignmentModel.id == assignment.id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        m = result.scalar_one_or_none()
        if m is None:
            raise NotFoundError(f"Assignment {assignment.id} not found")
        if m.version != expected_version:
            raise ConflictError(
                f"Assignment {assignment.id} was modified concurrently "
                f"(expected version {expected_version}, found {m.version})"
            )

        m.status = assignment.status.value
        m.priority = int(assignment.priority)
        m.supplier_notes = assignment.supplier_notes
        m.updated_at = assignment.updated_at
        m.version = assignment.version
        await self._s.flush()
        return assignment

    @_translate_db_errors
    async def append_audit(self, entry: AuditEntry) -> AuditEntry:
        self._s.add(
            AssignmentAuditModel(
                id=entry.id,
                assignment_id=entry.assignment_id,
                old_status=entry.old_status.value,
                new_status=entry.new_status.value,
                changed_by_role=entry.changed_by_role.value,
                changed_by=entry.changed_by,
                notes=entry.notes,
                changed_at=entry.changed_at,
            )
        )
        try:
            await self._s.flush()
        except IntegrityError as e:
            raise ConflictError(
                f"Assignment {entry.assignment_id} already left {entry.old_status.value}"
            ) from e
        return entry

    @_translate_db_errors
    async def get_audit_trail(self, assignment_id: str) -> list[AuditEntry]:
        result = await self._s.execute(
            select(AssignmentAuditModel)
            .where(AssignmentAuditModel.assignment_id == assignment_id)
            .order_by(AssignmentAuditModel.seq)
        )
        return [_audit_to_domain(m) for m in result.scalars()]

    @_translate_db_errors
    async def count_created_since(self, request_type: RequestType, since: datetime) -> int:
        result = await self._s.execute(
            select(func.count(AssignmentModel.id)).where(
                AssignmentModel.request_type == request_type.value,
                AssignmentModel.created_at > since,
            )
        )
        return result.scalar() or 0

    @_translate_db_errors
    async def commit(self) -> None:
        await self._s.commit()

    async def rollback(self) -> None:
        await self._s.rollback()


class SqlSupplierRepository(SupplierRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    @_translate_db_errors
    async def save(self, supplier: Supplier) -> Supplier:
        m = SupplierModel(
            id=supplier.id,
            company_name=supplier.company_name,
            contact_name=supplier.contact_name,
            is_active=supplier.is_active,
        )
        self._s.add(m)
        await self._s.flush()
        return supplier

    @_translate_db_errors
    async def get_by_id(self, supplier_id: str) -> Supplier | None:
        m = await self._s.get(SupplierModel, supplier_id)
        return _supplier_to_domain(m) if m else None

    @_translate_db_errors
    async def get_all(self, active_only: bool = False) -> list[Supplier]:
        stmt = select(SupplierModel).order_by(SupplierModel.company_name, SupplierModel.id)
        if active_only:
            stmt = stmt.where(SupplierModel.is_active.is_(True))
        result = await self._s.execute(stmt)
        return [_supplier_to_domain(m) for m in result.scalars()]
