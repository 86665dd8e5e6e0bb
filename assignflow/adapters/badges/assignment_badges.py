"""Badge source backed by the assignment store.

Counts assignments created after the per-category "last seen" watermark.
Watermarks live for the session only and start at the epoch, so the first
refresh reports every assignment as unseen.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime, timezone

from assignflow.application.ports.assignment_repo import AssignmentRepository
from assignflow.application.ports.badge_source import BadgeSource
from assignflow.application.types import Clock
from assignflow.domain.value_objects.enums import BadgeCategory, RequestType

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# accounts and orderShortages are counted by other subsystems
CATEGORY_REQUEST_TYPES: dict[BadgeCategory, RequestType] = {
    BadgeCategory.ORDERS: RequestType.ORDER,
    BadgeCategory.QUOTES: RequestType.QUOTE,
    BadgeCategory.IMPORTS: RequestType.IMPORT,
    BadgeCategory.MISSING: RequestType.MISSING,
}

RepositoryScope = Callable[[], AbstractAsyncContextManager[AssignmentRepository]]


class AssignmentBadgeSource(BadgeSource):
    def __init__(self, repository_scope: RepositoryScope, clock: Clock):
        self._scope = repository_scope
        self._clock = clock
        self._watermarks: dict[BadgeCategory, datetime] = {
            c: EPOCH for c in CATEGORY_REQUEST_TYPES
        }

    def supported_categories(self) -> frozenset[BadgeCategory]:
        return frozenset(CATEGORY_REQUEST_TYPES)

    def watermark(self, category: BadgeCategory) -> datetime:
        return self._watermarks.get(category, EPOCH)

    async def get_new_item_counts(self) -> dict[BadgeCategory, int]:
        counts: dict[BadgeCategory, int] = {}
        async with self._scope() as repo:
            for category, request_type in CATEGORY_REQUEST_TYPES.items():
                counts[category] = await repo.count_created_since(
                    request_type, self._watermarks[category]
                )
        return counts

    async def mark_seen(self, category: BadgeCategory) -> None:
        if category not in self._watermarks:
            return
        self._watermarks[category] = self._clock()
        logger.debug("Watermark for %s advanced to %s", category.value, self._watermarks[category])
