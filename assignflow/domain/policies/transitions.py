"""TransitionPolicy — legal status changes per request type.

Each request type resolves to one policy: the default supplier workflow, or
an override (IMPORT adds the longer admin-driven import chain on top of the
supplier workflow). A policy is a map from current status to the outgoing
edges, each edge naming the roles allowed to take it and whether notes are
mandatory.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from assignflow.domain.errors import IllegalTransitionError, ValidationError
from assignflow.domain.policies.status_registry import assert_registry_complete
from assignflow.domain.value_objects.enums import ActorRole, AssignmentStatus, RequestType

S = AssignmentStatus

ANY_ROLE = frozenset({ActorRole.ADMIN, ActorRole.SUPPLIER})
ADMIN_ONLY = frozenset({ActorRole.ADMIN})


@dataclass(frozen=True)
class Transition:
    target: AssignmentStatus
    roles: frozenset[ActorRole] = ANY_ROLE
    notes_required: bool = False

    def permits(self, role: ActorRole) -> bool:
        return role in self.roles


class TransitionPolicy:
    """Status graph for one family of request types.

    Every status the policy knows is either a key of *edges* or a member of
    *terminal*; terminal statuses have no outgoing edges.
    """

    def __init__(
        self,
        name: str,
        edges: dict[AssignmentStatus, tuple[Transition, ...]],
        terminal: Iterable[AssignmentStatus],
    ):
        self.name = name
        self._edges = dict(edges)
        self._terminal = frozenset(terminal)

        overlap = self._terminal & self._edges.keys()
        if overlap:
            raise ValueError(
                f"Policy {name}: terminal statuses with outgoing edges: "
                f"{sorted(s.value for s in overlap)}"
            )
        known = self._terminal | self._edges.keys()
        dangling = {
            t.target for ts in self._edges.values() for t in ts
        } - known
        if dangling:
            raise ValueError(
                f"Policy {name}: edges lead to unknown statuses: "
                f"{sorted(s.value for s in dangling)}"
            )
        if S.NEW not in self._edges:
            raise ValueError(f"Policy {name}: NEW must have outgoing edges")

    def statuses(self) -> frozenset[AssignmentStatus]:
        return self._terminal | self._edges.keys()

    def is_terminal(self, status: AssignmentStatus) -> bool:
        return status in self._terminal

    def transitions_from(self, status: AssignmentStatus) -> tuple[Transition, ...]:
        return self._edges.get(status, ())

    def find(self, current: AssignmentStatus, target: AssignmentStatus) -> Transition | None:
        for transition in self.transitions_from(current):
            if transition.target == target:
                return transition
        return None

    def allowed(
        self, current: AssignmentStatus, role: ActorRole | None = None
    ) -> list[AssignmentStatus]:
        """Next statuses reachable from *current*, optionally for one role only."""
        return [
            t.target
            for t in self.transitions_from(current)
            if role is None or t.permits(role)
        ]


def _cancellable(
    edges: dict[AssignmentStatus, tuple[Transition, ...]],
) -> dict[AssignmentStatus, tuple[Transition, ...]]:
    """Add an admin-only edge to CANCELLED from every listed (non-terminal) status."""
    cancel = Transition(S.CANCELLED, roles=ADMIN_ONLY)
    return {status: (*ts, cancel) for status, ts in edges.items()}


def _merge(
    *tables: dict[AssignmentStatus, tuple[Transition, ...]],
) -> dict[AssignmentStatus, tuple[Transition, ...]]:
    """Union of edge tables; a status keeps the outgoing edges of every table."""
    merged: dict[AssignmentStatus, tuple[Transition, ...]] = {}
    for table in tables:
        for status, ts in table.items():
            known = {t.target for t in merged.get(status, ())}
            merged[status] = (*merged.get(status, ()), *(t for t in ts if t.target not in known))
    return merged


def _linear_chain(
    chain: list[AssignmentStatus], roles: frozenset[ActorRole]
) -> dict[AssignmentStatus, tuple[Transition, ...]]:
    return {
        current: (Transition(following, roles=roles),)
        for current, following in zip(chain, chain[1:])
    }


SUPPLIER_EDGES: dict[AssignmentStatus, tuple[Transition, ...]] = {
    S.NEW: (
        Transition(S.ACCEPTED),
        Transition(S.REJECTED, notes_required=True),
    ),
    S.ACCEPTED: (Transition(S.IN_PROGRESS),),
    S.IN_PROGRESS: (Transition(S.SHIPPED),),
}

DEFAULT_POLICY = TransitionPolicy(
    name="default",
    edges=_cancellable(SUPPLIER_EDGES),
    terminal=(S.SHIPPED, S.REJECTED, S.CANCELLED),
)

IMPORT_CHAIN = [
    S.NEW,
    S.UNDER_REVIEW,
    S.WAITING_CUSTOMER_EXCEL,
    S.PRICING_IN_PROGRESS,
    S.PRICING_SENT,
    S.WAITING_CUSTOMER_APPROVAL,
    S.APPROVED_BY_CUSTOMER,
    S.IN_FACTORY,
    S.SHIPMENT_BOOKED,
    S.ON_THE_SEA,
    S.IN_PORT,
    S.CUSTOMS_CLEARED,
    S.ON_THE_WAY,
    S.DELIVERED,
]

IMPORT_POLICY = TransitionPolicy(
    name="import",
    edges=_cancellable(_merge(SUPPLIER_EDGES, _linear_chain(IMPORT_CHAIN, ADMIN_ONLY))),
    terminal=(S.SHIPPED, S.REJECTED, S.DELIVERED, S.CANCELLED),
)

_OVERRIDES: dict[RequestType, TransitionPolicy] = {
    RequestType.IMPORT: IMPORT_POLICY,
}

POLICIES: dict[RequestType, TransitionPolicy] = {
    request_type: _OVERRIDES.get(request_type, DEFAULT_POLICY)
    for request_type in RequestType
}


def policy_for(request_type: RequestType) -> TransitionPolicy:
    return POLICIES[request_type]


def is_legal_transition(
    request_type: RequestType,
    current: AssignmentStatus,
    target: AssignmentStatus,
    role: ActorRole | None = None,
) -> bool:
    """Pure check: is *current* → *target* an edge of the type's policy (for *role*)?"""
    transition = policy_for(request_type).find(current, target)
    if transition is None:
        return False
    return role is None or transition.permits(role)


def check_transition(
    request_type: RequestType,
    current: AssignmentStatus,
    target: AssignmentStatus,
    role: ActorRole,
    notes: str | None = None,
) -> Transition:
    """Validate a requested status change before anything is mutated.

    Raises:
        IllegalTransitionError: no such edge, or *role* may not take it.
        ValidationError: the edge requires notes and none were given.
    """
    policy = policy_for(request_type)
    allowed = policy.allowed(current, role)
    transition = policy.find(current, target)

    if transition is None:
        if policy.is_terminal(current):
            message = f"{current.value} is final; the assignment can no longer change status"
        else:
            message = None
        raise IllegalTransitionError(current, target, allowed, message)

    if not transition.permits(role):
        roles = " or ".join(sorted(r.value for r in transition.roles))
        raise IllegalTransitionError(
            current, target, allowed,
            f"Only {roles} may move an assignment from {current.value} to {target.value}",
        )

    if transition.notes_required and not (notes and notes.strip()):
        raise ValidationError(
            f"A reason is required to move an assignment to {target.value}",
            field="notes",
        )

    return transition


def _covered_statuses() -> set[AssignmentStatus]:
    covered: set[AssignmentStatus] = set()
    for policy in POLICIES.values():
        covered |= policy.statuses()
    return covered


_unhandled = set(AssignmentStatus) - _covered_statuses()
if _unhandled:
    raise RuntimeError(
        f"Statuses not handled by any transition policy: {sorted(s.value for s in _unhandled)}"
    )
assert_registry_complete(_covered_statuses())
