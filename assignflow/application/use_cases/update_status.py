"""UpdateStatusUseCase — drive an assignment through its transition policy."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from assignflow.application.concurrency import KeyedLock, bounded
from assignflow.application.ports.assignment_repo import AssignmentRepository
from assignflow.application.types import Clock, IdGenerator, StatusSubscriber
from assignflow.domain.entities.actor import Actor
from assignflow.domain.entities.assignment import Assignment
from assignflow.domain.entities.audit_entry import AuditEntry
from assignflow.domain.entities.events import StatusChanged
from assignflow.domain.errors import (
    ConflictError,
    ForbiddenError,
    IllegalTransitionError,
    NotFoundError,
    ValidationError,
)
from assignflow.domain.policies.transitions import check_transition
from assignflow.domain.value_objects.enums import ActorRole, AssignmentStatus

logger = logging.getLogger(__name__)


class UpdateStatusUseCase:
    """Validates and applies one status change, recording it in the audit trail.

    The status write and its audit entry are committed together or not at
    all. Writes are serialized per assignment and guarded by the assignment
    version: a caller that validated against a status that has since changed
    gets ConflictError and nothing is written.
    """

    def __init__(
        self,
        repository: AssignmentRepository,
        id_generator: IdGenerator,
        clock: Clock,
        locks: KeyedLock,
        subscribers: Iterable[StatusSubscriber] = (),
        timeout_s: float | None = None,
    ):
        self._repo = repository
        self._id_generator = id_generator
        self._clock = clock
        self._locks = locks
        self._subscribers = list(subscribers)
        self._timeout = timeout_s

    async def execute(
        self,
        assignment_id: str,
        new_status: AssignmentStatus,
        actor: Actor,
        notes: str | None = None,
    ) -> Assignment:
        """Apply *new_status* to the assignment.

        Steps:
        1. Load the assignment (NotFoundError if absent)
        2. Suppliers may only touch their own assignments (ForbiddenError)
        3. Check the transition policy for the request type
           (IllegalTransitionError / ValidationError)
        4. Under the per-assignment lock: compare-and-set the status,
           append the audit entry, commit (ConflictError on a stale read)
        5. Publish StatusChanged to subscribers
        """
        notes = notes.strip() if notes and notes.strip() else None

        current = await bounded(
            self._repo.get_by_id(assignment_id), self._timeout, "loading assignment"
        )
        if current is None:
            raise NotFoundError(f"Assignment {assignment_id} not found")

        if actor.role == ActorRole.SUPPLIER and not current.belongs_to(actor.supplier_id):
            raise ForbiddenError("You cannot update another supplier's assignment")

        try:
            check_transition(
                current.request_type, current.status, new_status, actor.role, notes
            )
        except (IllegalTransitionError, ValidationError) as e:
            logger.warning(
                "Assignment %s: %s → %s by %s rejected: %s",
                assignment_id, current.status.value, new_status.value,
                actor.role.value, e.message,
            )
            raise

        now = self._clock()
        updated = replace(
            current,
            status=new_status,
            updated_at=now,
            supplier_notes=notes or current.supplier_notes,
            version=current.version + 1,
        )
        entry = AuditEntry(
            id=self._id_generator(),
            assignment_id=current.id,
            old_status=current.status,
            new_status=new_status,
            changed_by_role=actor.role,
            changed_by=actor.user_id,
            notes=notes,
            changed_at=now,
        )

        async with self._locks.hold(assignment_id):
            try:
                await bounded(
                    self._repo.update(updated, expected_version=current.version),
                    self._timeout, "writing status",
                )
                await bounded(self._repo.append_audit(entry), self._timeout, "writing audit entry")
                await bounded(self._repo.commit(), self._timeout, "committing status change")
            except ConflictError:
                await self._repo.rollback()
                logger.warning(
                    "Assignment %s: concurrent change detected while moving %s → %s",
                    assignment_id, current.status.value, new_status.value,
                )
                raise
            except BaseException:
                await self._repo.rollback()
                raise

        logger.info(
            "Assignment %s: %s → %s by %s",
            assignment_id, current.status.value, new_status.value, actor.role.value,
        )
        await self._publish(StatusChanged(assignment=updated, entry=entry))
        return updated

    async def _publish(self, event: StatusChanged) -> None:
        # The change is already committed; a failing subscriber must not undo it.
        for subscriber in self._subscribers:
            try:
                await subscriber(event)
            except Exception:
                logger.exception(
                    "Status subscriber %r failed for assignment %s",
                    subscriber, event.assignment.id,
                )
