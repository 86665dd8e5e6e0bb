"""Domain objects → camelCase API response dicts."""

from __future__ import annotations

from assignflow.domain.entities.assignment import Assignment
from assignflow.domain.entities.audit_entry import AuditEntry
from assignflow.domain.entities.supplier import Supplier
from assignflow.domain.policies.status_registry import (
    priority_label,
    request_type_label,
    status_info,
)
from assignflow.domain.policies.transitions import policy_for
from assignflow.domain.value_objects.enums import ActorRole
from assignflow.domain.value_objects.filters import Page


def serialize_assignment(a: Assignment, role: ActorRole | None = None) -> dict:
    """Assignment with display labels and the next statuses the caller may pick."""
    info = status_info(a.status)
    return {
        "id": a.id,
        "supplierId": a.supplier_id,
        "requestType": a.request_type.value,
        "requestTypeLabel": request_type_label(a.request_type),
        "requestId": a.request_id,
        "status": a.status.value,
        "statusLabel": info.label,
        "statusTone": info.tone.value,
        "priority": int(a.priority),
        "priorityLabel": priority_label(a.priority),
        "supplierNotes": a.supplier_notes,
        "createdBy": a.created_by,
        "version": a.version,
        "createdAt": a.created_at.isoformat(),
        "updatedAt": a.updated_at.isoformat(),
        "allowedNextStatuses": [
            s.value for s in policy_for(a.request_type).allowed(a.status, role)
        ],
    }


def serialize_page(page: Page[Assignment], role: ActorRole | None = None) -> dict:
    return {
        "items": [serialize_assignment(a, role) for a in page.items],
        "total": page.total,
        "page": page.page,
        "limit": page.limit,
        "pages": page.pages,
    }


def serialize_audit_entry(e: AuditEntry) -> dict:
    return {
        "id": e.id,
        "assignmentId": e.assignment_id,
        "oldStatus": e.old_status.value,
        "newStatus": e.new_status.value,
        "changedByRole": e.changed_by_role.value,
        "changedBy": e.changed_by,
        "notes": e.notes,
        "changedAt": e.changed_at.isoformat(),
    }


def serialize_supplier(s: Supplier) -> dict:
    return {
        "id": s.id,
        "companyName": s.company_name,
        "contactName": s.contact_name,
        "isActive": s.is_active,
    }
