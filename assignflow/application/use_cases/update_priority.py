"""UpdatePriorityUseCase — admin re-ranks an assignment, whatever its status."""

from __future__ import annotations

import logging
from dataclasses import replace

from assignflow.application.concurrency import KeyedLock, bounded
from assignflow.application.ports.assignment_repo import AssignmentRepository
from assignflow.application.types import Clock
from assignflow.domain.entities.actor import Actor
from assignflow.domain.entities.assignment import Assignment
from assignflow.domain.errors import ForbiddenError, NotFoundError, ValidationError
from assignflow.domain.value_objects.enums import Priority

logger = logging.getLogger(__name__)


class UpdatePriorityUseCase:
    def __init__(
        self,
        repository: AssignmentRepository,
        clock: Clock,
        locks: KeyedLock,
        timeout_s: float | None = None,
    ):
        self._repo = repository
        self._clock = clock
        self._locks = locks
        self._timeout = timeout_s

    async def execute(self, assignment_id: str, priority: int, actor: Actor) -> Assignment:
        if not actor.is_admin:
            raise ForbiddenError("Only an admin can change assignment priority")
        try:
            new_priority = Priority(priority)
        except ValueError:
            raise ValidationError(
                f"priority must be one of {[p.value for p in Priority]}", field="priority"
            ) from None

        async with self._locks.hold(assignment_id):
            current = await bounded(
                self._repo.get_by_id(assignment_id), self._timeout, "loading assignment"
            )
            if current is None:
                raise NotFoundError(f"Assignment {assignment_id} not found")

            updated = replace(
                current,
                priority=new_priority,
                updated_at=self._clock(),
                version=current.version + 1,
            )
            try:
                await bounded(
                    self._repo.update(updated, expected_version=current.version),
                    self._timeout, "writing priority",
                )
                await bounded(self._repo.commit(), self._timeout, "committing priority")
            except BaseException:
                await self._repo.rollback()
                raise

        logger.info(
            "Assignment %s: priority %s → %s",
            assignment_id, current.priority.name, new_priority.name,
        )
        return updated
