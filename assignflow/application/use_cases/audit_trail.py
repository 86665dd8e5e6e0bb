"""GetAuditTrailUseCase — status history of one assignment."""

from __future__ import annotations

from assignflow.application.concurrency import bounded
from assignflow.application.ports.assignment_repo import AssignmentRepository
from assignflow.domain.entities.actor import Actor
from assignflow.domain.entities.audit_entry import AuditEntry
from assignflow.domain.errors import ForbiddenError, NotFoundError
from assignflow.domain.value_objects.enums import ActorRole


class GetAuditTrailUseCase:
    def __init__(self, repository: AssignmentRepository, timeout_s: float | None = None):
        self._repo = repository
        self._timeout = timeout_s

    async def execute(self, assignment_id: str, actor: Actor) -> list[AuditEntry]:
        """Return the audit entries oldest-first.

        Suppliers may only read the history of their own assignments.
        """
        assignment = await bounded(
            self._repo.get_by_id(assignment_id), self._timeout, "loading assignment"
        )
        if assignment is None:
            raise NotFoundError(f"Assignment {assignment_id} not found")
        if actor.role == ActorRole.SUPPLIER and not assignment.belongs_to(actor.supplier_id):
            raise ForbiddenError("You cannot view another supplier's assignment history")

        return await bounded(
            self._repo.get_audit_trail(assignment_id), self._timeout, "loading audit trail"
        )
