"""Port interface for assignment and audit persistence."""

from abc import ABC, abstractmethod
from datetime import datetime

from assignflow.domain.entities.assignment import Assignment
from assignflow.domain.entities.audit_entry import AuditEntry
from assignflow.domain.value_objects.enums import RequestType
from assignflow.domain.value_objects.filters import AssignmentFilter


class AssignmentRepository(ABC):
    """Sole owner of Assignment and AuditEntry state.

    Writes (save / update / append_audit) are staged in the current unit of
    work and become visible only after commit(); rollback() discards them.
    """

    @abstractmethod
    async def save(self, assignment: Assignment) -> Assignment:
        ...

    @abstractmethod
    async def get_by_id(self, assignment_id: str) -> Assignment | None:
        ...

    @abstractmethod
    async def query(self, filters: AssignmentFilter) -> list[Assignment]:
        """Return one page matching *filters*, newest first (createdAt desc, id desc)."""
        ...

    @abstractmethod
    async def count(self, filters: AssignmentFilter) -> int:
        """Total matching *filters*, ignoring pagination."""
        ...

    @abstractmethod
    async def update(self, assignment: Assignment, expected_version: int) -> Assignment:
        """Compare-and-set: write *assignment* only if the stored version is *expected_version*.

        The stored version becomes assignment.version.

        Raises:
            NotFoundError: the assignment does not exist.
            ConflictError: the stored version differs.
        """
        ...

    @abstractmethod
    async def append_audit(self, entry: AuditEntry) -> AuditEntry:
        ...

    @abstractmethod
    async def get_audit_trail(self, assignment_id: str) -> list[AuditEntry]:
        """Audit entries of one assignment, oldest first."""
        ...

    @abstractmethod
    async def count_created_since(self, request_type: RequestType, since: datetime) -> int:
        """Count assignments of *request_type* created strictly after *since*."""
        ...

    @abstractmethod
    async def commit(self) -> None:
        ...

    @abstractmethod
    async def rollback(self) -> None:
        ...
