"""Tests for the SQLAlchemy assignment repository against a fake session."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

from assignflow.adapters.persistence.models import AssignmentModel
from assignflow.adapters.persistence.repositories import SqlAssignmentRepository
from assignflow.domain.entities.assignment import Assignment
from assignflow.domain.entities.audit_entry import AuditEntry
from assignflow.domain.errors import ConflictError, NotFoundError, TransientError
from assignflow.domain.value_objects.enums import (
    ActorRole,
    AssignmentStatus,
    Priority,
    RequestType,
)

T0 = datetime(2026, 5, 1, tzinfo=timezone.utc)
T1 = datetime(2026, 5, 1, 0, 5, tzinfo=timezone.utc)

# ─── Fake session ───────────────────────────────────────────────────


class FakeResult:
    def __init__(self, row):
        self._row = row

    def scalar_one_or_none(self):
        return self._row


class FakeSession:
    """Serves one locked row; raises the configured error on execute/flush."""

    def __init__(self, row=None, execute_error=None, flush_error=None):
        self.row = row
        self.execute_error = execute_error
        self.flush_error = flush_error
        self.added = []
        self.flushes = 0
        self.statements = []

    async def execute(self, stmt):
        self.statements.append(stmt)
        if self.execute_error is not None:
            raise self.execute_error
        return FakeResult(self.row)

    def add(self, obj):
        self.added.append(obj)

    async def flush(self):
        if self.flush_error is not None:
            raise self.flush_error
        self.flushes += 1

    async def commit(self):
        pass

    async def rollback(self):
        pass


def _row(version: int = 1, status: AssignmentStatus = AssignmentStatus.NEW) -> AssignmentModel:
    return AssignmentModel(
        id="a1", supplier_id="sup_1", request_type=RequestType.ORDER.value, request_id="req_1",
        status=status.value, priority=int(Priority.NORMAL), version=version,
        created_at=T0, updated_at=T0,
    )


def _accepted(version: int = 2) -> Assignment:
    return Assignment(
        id="a1", supplier_id="sup_1", request_type=RequestType.ORDER, request_id="req_1",
        status=AssignmentStatus.ACCEPTED, priority=Priority.NORMAL, version=version,
        created_at=T0, updated_at=T1,
    )


def _entry() -> AuditEntry:
    return AuditEntry(
        id="e1", assignment_id="a1", old_status=AssignmentStatus.NEW,
        new_status=AssignmentStatus.ACCEPTED, changed_by_role=ActorRole.SUPPLIER,
        changed_by="user_7", changed_at=T1,
    )


def _operational_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


# ─── update ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_update_locks_row_and_writes_new_version():
    row = _row(version=1)
    session = FakeSession(row=row)

    await SqlAssignmentRepository(session).update(_accepted(), expected_version=1)

    assert row.status == "ACCEPTED"
    assert row.version == 2
    assert row.updated_at == T1
    assert session.flushes == 1
    assert session.statements[0]._for_update_arg is not None


@pytest.mark.asyncio
async def test_update_with_stale_version_is_conflict():
    row = _row(version=3, status=AssignmentStatus.CANCELLED)
    session = FakeSession(row=row)

    with pytest.raises(ConflictError):
        await SqlAssignmentRepository(session).update(_accepted(), expected_version=1)

    assert row.status == "CANCELLED"
    assert row.version == 3
    assert session.flushes == 0


@pytest.mark.asyncio
async def test_update_missing_row_is_not_found():
    with pytest.raises(NotFoundError):
        await SqlAssignmentRepository(FakeSession(row=None)).update(_accepted(), expected_version=1)


# ─── append_audit ───────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_append_audit_stages_entry():
    session = FakeSession()
    await SqlAssignmentRepository(session).append_audit(_entry())
    assert [m.old_status for m in session.added] == ["NEW"]
    assert session.flushes == 1


@pytest.mark.asyncio
async def test_duplicate_audit_old_status_is_conflict():
    duplicate = IntegrityError(
        "INSERT INTO supplier_assignment_audit", {},
        Exception("duplicate key value violates unique constraint uq_audit_assignment_old_status"),
    )
    session = FakeSession(flush_error=duplicate)

    with pytest.raises(ConflictError) as exc_info:
        await SqlAssignmentRepository(session).append_audit(_entry())
    assert exc_info.value.__cause__ is duplicate


# ─── Database outages ───────────────────────────────────────────────


@pytest.mark.asyncio
async def test_operational_error_becomes_transient():
    session = FakeSession(execute_error=_operational_error())
    repo = SqlAssignmentRepository(session)

    with pytest.raises(TransientError):
        await repo.update(_accepted(), expected_version=1)
    with pytest.raises(TransientError):
        await repo.get_audit_trail("a1")


@pytest.mark.asyncio
async def test_operational_error_on_flush_becomes_transient():
    session = FakeSession(flush_error=_operational_error())
    with pytest.raises(TransientError):
        await SqlAssignmentRepository(session).append_audit(_entry())


@pytest.mark.asyncio
async def test_invalidated_connection_becomes_transient():
    lost = DBAPIError("SELECT 1", {}, Exception("server closed the connection"), connection_invalidated=True)
    with pytest.raises(TransientError):
        await SqlAssignmentRepository(FakeSession(execute_error=lost)).update(_accepted(), 1)


@pytest.mark.asyncio
async def test_other_dbapi_errors_propagate():
    broken = DBAPIError("SELECT 1", {}, Exception("syntax error"))
    with pytest.raises(DBAPIError) as exc_info:
        await SqlAssignmentRepository(FakeSession(execute_error=broken)).update(_accepted(), 1)
    assert not isinstance(exc_info.value, TransientError)
    assert exc_info.value is broken
