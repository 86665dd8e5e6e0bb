"""ListAssignmentsUseCase — role-scoped, filtered, paginated listing."""

from __future__ import annotations

from dataclasses import dataclass

from assignflow.application.concurrency import bounded
from assignflow.application.ports.assignment_repo import AssignmentRepository
from assignflow.domain.entities.actor import Actor
from assignflow.domain.entities.assignment import Assignment
from assignflow.domain.errors import ForbiddenError
from assignflow.domain.value_objects.enums import ActorRole, AssignmentStatus, RequestType
from assignflow.domain.value_objects.filters import AssignmentFilter, Page


@dataclass(frozen=True)
class ListAssignmentsQuery:
    status: AssignmentStatus | None = None
    request_type: RequestType | None = None
    supplier_id: str | None = None
    page: int = 1
    limit: int = 10


class ListAssignmentsUseCase:
    """Read-only; safe to abandon mid-flight."""

    def __init__(
        self,
        repository: AssignmentRepository,
        max_limit: int = 100,
        timeout_s: float | None = None,
    ):
        self._repo = repository
        self._max_limit = max_limit
        self._timeout = timeout_s

    async def execute(self, query: ListAssignmentsQuery, actor: Actor) -> Page[Assignment]:
        supplier_id = query.supplier_id
        if actor.role == ActorRole.SUPPLIER:
            if not actor.supplier_id:
                raise ForbiddenError("No supplier account is linked to this user")
            # Suppliers only ever see their own assignments
            supplier_id = actor.supplier_id

        filters = AssignmentFilter(
            status=query.status,
            request_type=query.request_type,
            supplier_id=supplier_id,
            page=max(1, query.page),
            limit=max(1, min(query.limit, self._max_limit)),
        )

        items = await bounded(self._repo.query(filters), self._timeout, "listing assignments")
        total = await bounded(self._repo.count(filters), self._timeout, "counting assignments")
        return Page(items=items, total=total, page=filters.page, limit=filters.limit)
