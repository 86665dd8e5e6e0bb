"""Request bodies shared by the admin and supplier routers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel

from assignflow.domain.value_objects.enums import AssignmentStatus, Priority, RequestType


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateAssignmentRequest(_CamelModel):
    supplier_id: str
    request_type: RequestType
    request_id: str
    priority: StrictInt = Priority.NORMAL
    supplier_notes: str | None = None


class StatusChangeRequest(_CamelModel):
    status: AssignmentStatus
    notes: str | None = Field(default=None, max_length=2000)


class PriorityChangeRequest(_CamelModel):
    priority: StrictInt
