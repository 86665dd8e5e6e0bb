"""Typed workflow errors — callers branch on the class, never on the message."""

from __future__ import annotations

from collections.abc import Iterable

from assignflow.domain.value_objects.enums import AssignmentStatus


class WorkflowError(Exception):
    """Base domain error with a user-facing message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(WorkflowError):
    """Malformed input or a missing mandatory field. Client-fixable, never retried."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(WorkflowError):
    """A referenced assignment, request or supplier does not exist."""


class ForbiddenError(WorkflowError):
    """The actor may not perform this operation on this assignment."""


class IllegalTransitionError(WorkflowError):
    """The requested status change is not permitted from the current status."""

    def __init__(
        self,
        current: AssignmentStatus,
        requested: AssignmentStatus,
        allowed: Iterable[AssignmentStatus],
        message: str | None = None,
    ) -> None:
        self.current = current
        self.requested = requested
        self.allowed = tuple(allowed)
        if message is None:
            allowed_str = ", ".join(s.value for s in self.allowed) or "none"
            message = (
                f"Cannot move from {current.value} to {requested.value}. "
                f"Allowed: {allowed_str}"
            )
        super().__init__(message)


class ConflictError(WorkflowError):
    """The assignment changed between read and write; reload and retry."""


class TransientError(WorkflowError):
    """Persistence timed out or is unavailable. Safe to retry with backoff."""

    retryable = True
