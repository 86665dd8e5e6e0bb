"""Tests for domain entities and value objects."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from assignflow.domain.entities.actor import Actor
from assignflow.domain.entities.assignment import Assignment
from assignflow.domain.entities.audit_entry import AuditEntry
from assignflow.domain.errors import IllegalTransitionError, TransientError, WorkflowError
from assignflow.domain.value_objects.enums import (
    ActorRole,
    AssignmentStatus,
    Priority,
    RequestType,
)
from assignflow.domain.value_objects.filters import AssignmentFilter, Page

NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)


def _assignment(**overrides) -> Assignment:
    fields = dict(
        id="a1", supplier_id="sup_1", request_type=RequestType.QUOTE, request_id="req_42",
        status=AssignmentStatus.NEW, priority=Priority.NORMAL, created_at=NOW, updated_at=NOW,
    )
    fields.update(overrides)
    return Assignment(**fields)


def test_assignment_defaults():
    a = _assignment()
    assert a.version == 1
    assert a.supplier_notes is None


def test_belongs_to():
    a = _assignment()
    assert a.belongs_to("sup_1")
    assert not a.belongs_to("sup_2")
    assert not a.belongs_to(None)


def test_audit_entry_is_immutable():
    entry = AuditEntry(
        id="e1", assignment_id="a1", old_status=AssignmentStatus.NEW,
        new_status=AssignmentStatus.ACCEPTED, changed_by_role=ActorRole.SUPPLIER, changed_at=NOW,
    )
    with pytest.raises(FrozenInstanceError):
        entry.notes = "edited"


def test_actor_is_admin():
    assert Actor(role=ActorRole.ADMIN).is_admin
    assert not Actor(role=ActorRole.SUPPLIER, supplier_id="sup_1").is_admin


def test_filter_offset():
    assert AssignmentFilter(page=1, limit=10).offset == 0
    assert AssignmentFilter(page=3, limit=25).offset == 50


def test_page_count():
    assert Page(items=[], total=0, limit=10).pages == 0
    assert Page(items=[], total=10, limit=10).pages == 1
    assert Page(items=[], total=11, limit=10).pages == 2


def test_illegal_transition_error_default_message():
    err = IllegalTransitionError(
        AssignmentStatus.ACCEPTED, AssignmentStatus.SHIPPED, [AssignmentStatus.IN_PROGRESS]
    )
    assert isinstance(err, WorkflowError)
    assert "IN_PROGRESS" in err.message
    assert err.allowed == (AssignmentStatus.IN_PROGRESS,)


def test_transient_error_is_retryable():
    assert TransientError("timeout").retryable is True
