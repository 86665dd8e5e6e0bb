"""In-memory repository implementations — tests and STORAGE_BACKEND=memory.

One InMemoryStore holds committed state for the whole process; each
repository instance is a unit of work whose writes stay staged until
commit(). Commit re-checks versions against the store, so two units of work
that both read version N cannot both commit.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from assignflow.application.ports.assignment_repo import AssignmentRepository
from assignflow.application.ports.supplier_repo import SupplierRepository
from assignflow.domain.entities.assignment import Assignment
from assignflow.domain.entities.audit_entry import AuditEntry
from assignflow.domain.entities.supplier import Supplier
from assignflow.domain.errors import ConflictError, NotFoundError, ValidationError
from assignflow.domain.value_objects.enums import RequestType
from assignflow.domain.value_objects.filters import AssignmentFilter


@dataclass
class InMemoryStore:
    assignments: dict[str, Assignment] = field(default_factory=dict)
    audit: dict[str, list[AuditEntry]] = field(default_factory=dict)
    suppliers: dict[str, Supplier] = field(default_factory=dict)


def _matches(a: Assignment, filters: AssignmentFilter) -> bool:
    if filters.status is not None and a.status != filters.status:
        return False
    if filters.request_type is not None and a.request_type != filters.request_type:
        return False
    if filters.supplier_id is not None and a.supplier_id != filters.supplier_id:
        return False
    return True


class InMemoryAssignmentRepository(AssignmentRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store
        self._new: dict[str, Assignment] = {}
        self._updates: dict[str, tuple[Assignment, int]] = {}
        self._audit: list[AuditEntry] = []

    def _visible(self) -> dict[str, Assignment]:
        merged = dict(self._store.assignments)
        merged.update(self._new)
        merged.update({aid: a for aid, (a, _) in self._updates.items()})
        return merged

    async def save(self, assignment: Assignment) -> Assignment:
        if assignment.id in self._store.assignments or assignment.id in self._new:
            raise ValidationError(f"Assignment {assignment.id} already exists", field="id")
        self._new[assignment.id] = replace(assignment)
        return assignment

    async def get_by_id(self, assignment_id: str) -> Assignment | None:
        a = self._visible().get(assignment_id)
        return replace(a) if a else None

    async def query(self, filters: AssignmentFilter) -> list[Assignment]:
        matching = [a for a in self._visible().values() if _matches(a, filters)]
        matching.sort(key=lambda a: (a.created_at, a.id), reverse=True)
        page = matching[filters.offset:filters.offset + filters.limit]
        return [replace(a) for a in page]

    async def count(self, filters: AssignmentFilter) -> int:
        return sum(1 for a in self._visible().values() if _matches(a, filters))

    async def update(self, assignment: Assignment, expected_version: int) -> Assignment:
        stored = self._visible().get(assignment.id)
        if stored is None:
            raise NotFoundError(f"Assignment {assignment.id} not found")
        if stored.version != expected_version:
            raise ConflictError(
                f"Assignment {assignment.id} was modified concurrently "
                f"(expected version {expected_version}, found {stored.version})"
            )
        base_version = self._updates.get(assignment.id, (None, expected_version))[1]
        self._updates[assignment.id] = (replace(assignment), base_version)
        return assignment

    async def append_audit(self, entry: AuditEntry) -> AuditEntry:
        self._audit.append(entry)
        return entry

    async def get_audit_trail(self, assignment_id: str) -> list[AuditEntry]:
        committed = self._store.audit.get(assignment_id, [])
        staged = [e for e in self._audit if e.assignment_id == assignment_id]
        return list(committed) + staged

    async def count_created_since(self, request_type: RequestType, since: datetime) -> int:
        return sum(
            1 for a in self._visible().values()
            if a.request_type == request_type and a.created_at > since
        )

    async def commit(self) -> None:
        # Validate everything first; nothing is applied unless all of it can be
        for aid, (_, base_version) in self._updates.items():
            current = self._store.assignments.get(aid)
            if aid in self._new:
                continue
            if current is None:
                self._discard()
                raise NotFoundError(f"Assignment {aid} not found")
            if current.version != base_version:
                self._discard()
                raise ConflictError(f"Assignment {aid} was modified concurrently")
        for entry in self._audit:
            history = self._store.audit.get(entry.assignment_id, [])
            if any(e.old_status == entry.old_status for e in history):
                self._discard()
                raise ConflictError(
                    f"Assignment {entry.assignment_id} already left {entry.old_status.value}"
                )

        self._store.assignments.update(self._new)
        self._store.assignments.update({aid: a for aid, (a, _) in self._updates.items()})
        for entry in self._audit:
            self._store.audit.setdefault(entry.assignment_id, []).append(entry)
        self._discard()

    async def rollback(self) -> None:
        self._discard()

    def _discard(self) -> None:
        self._new.clear()
        self._updates.clear()
        self._audit.clear()


class InMemorySupplierRepository(SupplierRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def save(self, supplier: Supplier) -> Supplier:
        self._store.suppliers[supplier.id] = replace(supplier)
        return supplier

    async def get_by_id(self, supplier_id: str) -> Supplier | None:
        s = self._store.suppliers.get(supplier_id)
        return replace(s) if s else None

    async def get_all(self, active_only: bool = False) -> list[Supplier]:
        suppliers = sorted(self._store.suppliers.values(), key=lambda s: (s.company_name, s.id))
        return [replace(s) for s in suppliers if s.is_active or not active_only]
