"""Domain events published after a committed state change."""

from dataclasses import dataclass

from assignflow.domain.entities.assignment import Assignment
from assignflow.domain.entities.audit_entry import AuditEntry


@dataclass(frozen=True)
class StatusChanged:
    assignment: Assignment
    entry: AuditEntry
