"""Admin assignment endpoints — create, list, change status and priority, history."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from assignflow.application.use_cases.audit_trail import GetAuditTrailUseCase
from assignflow.application.use_cases.create_assignment import (
    CreateAssignmentCommand,
    CreateAssignmentUseCase,
)
from assignflow.application.use_cases.list_assignments import (
    ListAssignmentsQuery,
    ListAssignmentsUseCase,
)
from assignflow.application.use_cases.update_priority import UpdatePriorityUseCase
from assignflow.application.use_cases.update_status import UpdateStatusUseCase
from assignflow.config import settings
from assignflow.domain.entities.actor import Actor
from assignflow.domain.value_objects.enums import AssignmentStatus, RequestType
from assignflow.infrastructure.api.dependencies import (
    get_audit_trail_uc,
    get_create_assignment_uc,
    get_list_assignments_uc,
    get_update_priority_uc,
    get_update_status_uc,
    require_admin,
)
from assignflow.infrastructure.api.schemas import (
    CreateAssignmentRequest,
    PriorityChangeRequest,
    StatusChangeRequest,
)
from assignflow.infrastructure.api.serializers import (
    serialize_assignment,
    serialize_audit_entry,
    serialize_page,
)

router = APIRouter(prefix="/assignments", tags=["assignments"])


@router.get("")
async def list_assignments(
    status: AssignmentStatus | None = None,
    type: RequestType | None = None,
    supplier_id: str | None = Query(default=None, alias="supplierId"),
    page: int = 1,
    limit: int = settings.default_page_size,
    actor: Actor = Depends(require_admin),
    uc: ListAssignmentsUseCase = Depends(get_list_assignments_uc),
):
    """Paginated list, newest first. Filters are ANDed."""
    result = await uc.execute(
        ListAssignmentsQuery(
            status=status,
            request_type=type,
            supplier_id=supplier_id,
            page=page,
            limit=limit,
        ),
        actor,
    )
    return serialize_page(result, actor.role)


@router.post("", status_code=201)
async def create_assignment(
    body: CreateAssignmentRequest,
    actor: Actor = Depends(require_admin),
    uc: CreateAssignmentUseCase = Depends(get_create_assignment_uc),
):
    assignment = await uc.execute(
        CreateAssignmentCommand(
            supplier_id=body.supplier_id,
            request_type=body.request_type,
            request_id=body.request_id,
            priority=body.priority,
            supplier_notes=body.supplier_notes,
        ),
        actor,
    )
    return serialize_assignment(assignment, actor.role)


@router.patch("/{assignment_id}/status")
async def update_status(
    assignment_id: str,
    body: StatusChangeRequest,
    actor: Actor = Depends(require_admin),
    uc: UpdateStatusUseCase = Depends(get_update_status_uc),
):
    assignment = await uc.execute(assignment_id, body.status, actor, body.notes)
    return serialize_assignment(assignment, actor.role)


@router.patch("/{assignment_id}/priority")
async def update_priority(
    assignment_id: str,
    body: PriorityChangeRequest,
    actor: Actor = Depends(require_admin),
    uc: UpdatePriorityUseCase = Depends(get_update_priority_uc),
):
    assignment = await uc.execute(assignment_id, body.priority, actor)
    return serialize_assignment(assignment, actor.role)


@router.get("/{assignment_id}/audit")
async def get_audit_trail(
    assignment_id: str,
    actor: Actor = Depends(require_admin),
    uc: GetAuditTrailUseCase = Depends(get_audit_trail_uc),
):
    """Status history, oldest first."""
    entries = await uc.execute(assignment_id, actor)
    return [serialize_audit_entry(e) for e in entries]
