"""AuditEntry — immutable record of one assignment status change."""

from dataclasses import dataclass
from datetime import datetime

from assignflow.domain.value_objects.enums import ActorRole, AssignmentStatus


@dataclass(frozen=True)
class AuditEntry:
    id: str
    assignment_id: str
    old_status: AssignmentStatus
    new_status: AssignmentStatus
    changed_by_role: ActorRole
    changed_at: datetime
    notes: str | None = None
    changed_by: str | None = None
