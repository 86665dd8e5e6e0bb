"""CreateAssignmentUseCase — bind a business request to a supplier."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from assignflow.application.concurrency import bounded
from assignflow.application.ports.assignment_repo import AssignmentRepository
from assignflow.application.ports.request_directory import RequestDirectory
from assignflow.application.ports.supplier_repo import SupplierRepository
from assignflow.application.types import Clock, IdGenerator
from assignflow.domain.entities.actor import Actor
from assignflow.domain.entities.assignment import Assignment
from assignflow.domain.errors import ForbiddenError, ValidationError
from assignflow.domain.value_objects.enums import AssignmentStatus, Priority, RequestType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateAssignmentCommand:
    supplier_id: str
    request_type: RequestType
    request_id: str
    priority: int = Priority.NORMAL
    supplier_notes: str | None = None


class CreateAssignmentUseCase:
    """Creates an Assignment in status NEW.

    Reassignment is a new Assignment; supplier, request type and request id
    never change after creation.
    """

    def __init__(
        self,
        repository: AssignmentRepository,
        suppliers: SupplierRepository,
        id_generator: IdGenerator,
        clock: Clock,
        requests: RequestDirectory | None = None,
        timeout_s: float | None = None,
    ):
        self._repo = repository
        self._suppliers = suppliers
        self._id_generator = id_generator
        self._clock = clock
        self._requests = requests
        self._timeout = timeout_s

    async def execute(self, command: CreateAssignmentCommand, actor: Actor) -> Assignment:
        if not actor.is_admin:
            raise ForbiddenError("Only an admin can create assignments")

        supplier_id = (command.supplier_id or "").strip()
        request_id = (command.request_id or "").strip()
        if not supplier_id:
            raise ValidationError("supplierId is required", field="supplierId")
        if not request_id:
            raise ValidationError("requestId is required", field="requestId")

        try:
            priority = Priority(command.priority)
        except ValueError:
            raise ValidationError(
                f"priority must be one of {[p.value for p in Priority]}", field="priority"
            ) from None

        supplier = await bounded(
            self._suppliers.get_by_id(supplier_id), self._timeout, "loading supplier"
        )
        if supplier is None or not supplier.is_active:
            raise ValidationError(f"Unknown supplier: {supplier_id}", field="supplierId")

        if self._requests is not None:
            known = await bounded(
                self._requests.exists(command.request_type, request_id),
                self._timeout,
                "looking up request",
            )
            if not known:
                raise ValidationError(
                    f"Unknown {command.request_type.value} request: {request_id}",
                    field="requestId",
                )

        now = self._clock()
        notes = command.supplier_notes.strip() if command.supplier_notes else None
        assignment = Assignment(
            id=self._id_generator(),
            supplier_id=supplier_id,
            request_type=command.request_type,
            request_id=request_id,
            status=AssignmentStatus.NEW,
            priority=priority,
            supplier_notes=notes or None,
            created_at=now,
            updated_at=now,
            created_by=actor.user_id,
        )

        try:
            await bounded(self._repo.save(assignment), self._timeout, "saving assignment")
            await bounded(self._repo.commit(), self._timeout, "committing assignment")
        except BaseException:
            await self._repo.rollback()
            raise

        logger.info(
            "Assignment %s created: %s %s → supplier %s (priority=%s)",
            assignment.id, assignment.request_type.value, assignment.request_id,
            assignment.supplier_id, priority.name,
        )
        return assignment
