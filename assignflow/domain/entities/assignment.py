"""Assignment entity — binds a business request to a responsible supplier."""

from dataclasses import dataclass
from datetime import datetime

from assignflow.domain.value_objects.enums import AssignmentStatus, Priority, RequestType


@dataclass
class Assignment:
    id: str
    supplier_id: str
    request_type: RequestType
    request_id: str
    status: AssignmentStatus
    priority: Priority
    created_at: datetime
    updated_at: datetime
    supplier_notes: str | None = None
    created_by: str | None = None
    version: int = 1

    def belongs_to(self, supplier_id: str | None) -> bool:
        return supplier_id is not None and self.supplier_id == supplier_id
