"""Tests for the per-request-type transition policies."""

import pytest

from assignflow.domain.errors import IllegalTransitionError, ValidationError
from assignflow.domain.policies.transitions import (
    DEFAULT_POLICY,
    IMPORT_CHAIN,
    IMPORT_POLICY,
    Transition,
    TransitionPolicy,
    check_transition,
    is_legal_transition,
    policy_for,
)
from assignflow.domain.value_objects.enums import ActorRole, AssignmentStatus, RequestType

S = AssignmentStatus
ADMIN = ActorRole.ADMIN
SUPPLIER = ActorRole.SUPPLIER

GENERIC_TYPES = [RequestType.QUOTE, RequestType.ORDER, RequestType.INSTALLMENT, RequestType.MISSING]

GENERIC_EDGES = {
    (S.NEW, S.ACCEPTED),
    (S.NEW, S.REJECTED),
    (S.ACCEPTED, S.IN_PROGRESS),
    (S.IN_PROGRESS, S.SHIPPED),
    (S.NEW, S.CANCELLED),
    (S.ACCEPTED, S.CANCELLED),
    (S.IN_PROGRESS, S.CANCELLED),
}


def test_every_request_type_has_a_policy():
    for request_type in RequestType:
        assert policy_for(request_type) is not None


def test_import_uses_override_others_use_default():
    assert policy_for(RequestType.IMPORT) is IMPORT_POLICY
    for request_type in GENERIC_TYPES:
        assert policy_for(request_type) is DEFAULT_POLICY


@pytest.mark.parametrize("request_type", GENERIC_TYPES)
def test_generic_table_is_exactly_the_canonical_edges(request_type):
    """Every (from, to) pair is legal iff it is in the canonical table."""
    for current in S:
        for target in S:
            expected = (current, target) in GENERIC_EDGES
            assert is_legal_transition(request_type, current, target) is expected, (current, target)


def test_cancel_is_admin_only():
    assert is_legal_transition(RequestType.QUOTE, S.ACCEPTED, S.CANCELLED, ADMIN)
    assert not is_legal_transition(RequestType.QUOTE, S.ACCEPTED, S.CANCELLED, SUPPLIER)


def test_supplier_can_walk_generic_happy_path():
    for current, target in [(S.NEW, S.ACCEPTED), (S.ACCEPTED, S.IN_PROGRESS), (S.IN_PROGRESS, S.SHIPPED)]:
        assert is_legal_transition(RequestType.ORDER, current, target, SUPPLIER)


@pytest.mark.parametrize("terminal", [S.SHIPPED, S.REJECTED, S.CANCELLED])
def test_generic_terminal_statuses_have_no_exits(terminal):
    assert DEFAULT_POLICY.is_terminal(terminal)
    assert DEFAULT_POLICY.allowed(terminal) == []


def test_import_chain_is_linear_and_admin_driven():
    for current, target in zip(IMPORT_CHAIN, IMPORT_CHAIN[1:]):
        assert is_legal_transition(RequestType.IMPORT, current, target, ADMIN)
        assert not is_legal_transition(RequestType.IMPORT, current, target, SUPPLIER)


def test_import_cannot_skip_steps():
    assert not is_legal_transition(RequestType.IMPORT, S.WAITING_CUSTOMER_EXCEL, S.DELIVERED, ADMIN)
    assert not is_legal_transition(RequestType.IMPORT, S.NEW, S.PRICING_SENT, ADMIN)


def test_import_cancellable_from_every_non_terminal_step():
    for status in IMPORT_CHAIN[:-1]:
        assert is_legal_transition(RequestType.IMPORT, status, S.CANCELLED, ADMIN)
    assert IMPORT_POLICY.allowed(S.DELIVERED) == []


def test_supplier_can_walk_generic_path_on_import():
    for current, target in [(S.NEW, S.ACCEPTED), (S.ACCEPTED, S.IN_PROGRESS), (S.IN_PROGRESS, S.SHIPPED)]:
        assert is_legal_transition(RequestType.IMPORT, current, target, SUPPLIER)
    check_transition(RequestType.IMPORT, S.NEW, S.REJECTED, SUPPLIER, "no capacity")


def test_import_table_is_a_superset_of_the_generic_one():
    for current, target in GENERIC_EDGES:
        assert is_legal_transition(RequestType.IMPORT, current, target), (current, target)
    assert set(IMPORT_POLICY.allowed(S.NEW, SUPPLIER)) == {S.ACCEPTED, S.REJECTED}
    assert set(IMPORT_POLICY.allowed(S.NEW, ADMIN)) == {
        S.ACCEPTED, S.REJECTED, S.UNDER_REVIEW, S.CANCELLED,
    }


@pytest.mark.parametrize("terminal", [S.SHIPPED, S.REJECTED, S.DELIVERED, S.CANCELLED])
def test_import_terminal_statuses_have_no_exits(terminal):
    assert IMPORT_POLICY.is_terminal(terminal)
    assert IMPORT_POLICY.allowed(terminal) == []


def test_import_generic_steps_stay_cancellable():
    for status in (S.ACCEPTED, S.IN_PROGRESS):
        assert is_legal_transition(RequestType.IMPORT, status, S.CANCELLED, ADMIN)
        assert not is_legal_transition(RequestType.IMPORT, status, S.CANCELLED, SUPPLIER)


def test_check_transition_returns_edge():
    transition = check_transition(RequestType.QUOTE, S.NEW, S.ACCEPTED, SUPPLIER)
    assert transition.target == S.ACCEPTED
    assert not transition.notes_required


def test_check_transition_illegal_carries_allowed_set():
    with pytest.raises(IllegalTransitionError) as exc_info:
        check_transition(RequestType.QUOTE, S.ACCEPTED, S.SHIPPED, SUPPLIER)
    err = exc_info.value
    assert err.current == S.ACCEPTED
    assert err.requested == S.SHIPPED
    assert err.allowed == (S.IN_PROGRESS,)


def test_check_transition_allowed_set_is_role_filtered():
    with pytest.raises(IllegalTransitionError) as exc_info:
        check_transition(RequestType.ORDER, S.NEW, S.SHIPPED, ADMIN)
    assert set(exc_info.value.allowed) == {S.ACCEPTED, S.REJECTED, S.CANCELLED}


def test_check_transition_role_not_permitted():
    with pytest.raises(IllegalTransitionError) as exc_info:
        check_transition(RequestType.ORDER, S.NEW, S.CANCELLED, SUPPLIER)
    assert "ADMIN" in exc_info.value.message


def test_check_transition_terminal_message():
    with pytest.raises(IllegalTransitionError) as exc_info:
        check_transition(RequestType.ORDER, S.SHIPPED, S.IN_PROGRESS, ADMIN)
    assert exc_info.value.allowed == ()
    assert "final" in exc_info.value.message


@pytest.mark.parametrize("notes", [None, "", "   "])
def test_reject_requires_notes(notes):
    with pytest.raises(ValidationError) as exc_info:
        check_transition(RequestType.QUOTE, S.NEW, S.REJECTED, SUPPLIER, notes)
    assert exc_info.value.field == "notes"


def test_reject_with_notes_passes():
    check_transition(RequestType.QUOTE, S.NEW, S.REJECTED, SUPPLIER, "out of stock")


def test_policy_rejects_terminal_with_edges():
    with pytest.raises(ValueError):
        TransitionPolicy(
            name="broken",
            edges={S.NEW: (Transition(S.SHIPPED),), S.SHIPPED: (Transition(S.NEW),)},
            terminal=(S.SHIPPED,),
        )


def test_policy_rejects_dangling_target():
    with pytest.raises(ValueError):
        TransitionPolicy(
            name="broken",
            edges={S.NEW: (Transition(S.ACCEPTED),)},
            terminal=(S.SHIPPED,),
        )
