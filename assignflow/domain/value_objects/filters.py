"""Query value objects — assignment filter and page."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from assignflow.domain.value_objects.enums import AssignmentStatus, RequestType

T = TypeVar("T")


@dataclass(frozen=True)
class AssignmentFilter:
    """AND of the provided criteria; all None matches everything.

    page is 1-indexed.
    """

    status: AssignmentStatus | None = None
    request_type: RequestType | None = None
    supplier_id: str | None = None
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0
