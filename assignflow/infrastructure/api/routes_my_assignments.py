"""Supplier endpoints — a supplier's own assignments only."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from assignflow.application.use_cases.audit_trail import GetAuditTrailUseCase
from assignflow.application.use_cases.list_assignments import (
    ListAssignmentsQuery,
    ListAssignmentsUseCase,
)
from assignflow.application.use_cases.update_status import UpdateStatusUseCase
from assignflow.config import settings
from assignflow.domain.entities.actor import Actor
from assignflow.domain.value_objects.enums import AssignmentStatus, RequestType
from assignflow.infrastructure.api.dependencies import (
    get_audit_trail_uc,
    get_list_assignments_uc,
    get_update_status_uc,
    require_supplier,
)
from assignflow.infrastructure.api.schemas import StatusChangeRequest
from assignflow.infrastructure.api.serializers import (
    serialize_assignment,
    serialize_audit_entry,
    serialize_page,
)

router = APIRouter(prefix="/my-assignments", tags=["supplier"])


@router.get("")
async def list_my_assignments(
    status: AssignmentStatus | None = None,
    type: RequestType | None = None,
    page: int = 1,
    limit: int = settings.default_page_size,
    actor: Actor = Depends(require_supplier),
    uc: ListAssignmentsUseCase = Depends(get_list_assignments_uc),
):
    result = await uc.execute(
        ListAssignmentsQuery(status=status, request_type=type, page=page, limit=limit),
        actor,
    )
    return serialize_page(result, actor.role)


@router.patch("/{assignment_id}/status")
async def update_my_assignment_status(
    assignment_id: str,
    body: StatusChangeRequest,
    actor: Actor = Depends(require_supplier),
    uc: UpdateStatusUseCase = Depends(get_update_status_uc),
):
    assignment = await uc.execute(assignment_id, body.status, actor, body.notes)
    return serialize_assignment(assignment, actor.role)


@router.get("/{assignment_id}/audit")
async def get_my_assignment_audit(
    assignment_id: str,
    actor: Actor = Depends(require_supplier),
    uc: GetAuditTrailUseCase = Depends(get_audit_trail_uc),
):
    entries = await uc.execute(assignment_id, actor)
    return [serialize_audit_entry(e) for e in entries]
