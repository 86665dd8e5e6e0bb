"""NotificationState — admin sidebar badges with an explicit session lifecycle.

Badges are derived data: unseen item counts per category, recomputed by a
periodic poll. Marking a category as seen advances the source's watermark and
zeroes the badge; a refresh that was already in flight when the mark happened
is not allowed to write that category back.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from assignflow.application.ports.badge_source import BadgeSource
from assignflow.domain.entities.events import StatusChanged
from assignflow.domain.value_objects.enums import BadgeCategory

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_S = 30.0


@dataclass(frozen=True)
class BadgeApi:
    """Which source serves each category, resolved once at startup.

    Categories nobody serves simply stay at zero.
    """

    owners: dict[BadgeCategory, BadgeSource]

    @classmethod
    def resolve(cls, sources: Iterable[BadgeSource]) -> BadgeApi:
        owners: dict[BadgeCategory, BadgeSource] = {}
        for source in sources:
            for category in source.supported_categories():
                owners.setdefault(category, source)
        return cls(owners=owners)

    def owner(self, category: BadgeCategory) -> BadgeSource | None:
        return self.owners.get(category)

    def sources(self) -> list[BadgeSource]:
        unique: list[BadgeSource] = []
        for source in self.owners.values():
            if all(source is not seen for seen in unique):
                unique.append(source)
        return unique


class NotificationState:
    """Per admin session. init() → refresh()/mark_as_seen() → teardown()."""

    def __init__(self, api: BadgeApi, interval_s: float = DEFAULT_POLL_INTERVAL_S):
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")
        self._api = api
        self._interval = interval_s
        self._badges: dict[BadgeCategory, int] = {c: 0 for c in BadgeCategory}
        self._generations: dict[BadgeCategory, int] = {c: 0 for c in BadgeCategory}
        self._task: asyncio.Task | None = None

    @property
    def badges(self) -> dict[BadgeCategory, int]:
        return dict(self._badges)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def init(self) -> None:
        """Load the first counts and start polling."""
        if self.running:
            return
        await self.refresh()
        self._task = asyncio.create_task(self._poll(), name="badge-refresh")
        logger.info("Badge polling started (every %.0fs)", self._interval)

    async def teardown(self) -> None:
        """Stop polling and reset the badges (end of admin session)."""
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
            logger.info("Badge polling stopped")
        self._badges = {c: 0 for c in BadgeCategory}

    async def refresh(self) -> dict[BadgeCategory, int]:
        """Recompute every badge from its source. Idempotent.

        A source that fails keeps its previous counts.
        """
        started = dict(self._generations)
        for source in self._api.sources():
            try:
                counts = await source.get_new_item_counts()
            except Exception:
                logger.warning(
                    "Badge refresh failed for %s, keeping previous counts",
                    type(source).__name__, exc_info=True,
                )
                continue

            for category, count in counts.items():
                if self._api.owner(category) is not source:
                    continue
                if self._generations[category] != started[category]:
                    # Marked as seen while this refresh was in flight
                    continue
                self._badges[category] = max(0, int(count))
        return self.badges

    async def mark_as_seen(self, category: BadgeCategory) -> None:
        """Advance the category's watermark to now and zero its badge."""
        self._generations[category] += 1
        source = self._api.owner(category)
        if source is not None:
            await source.mark_seen(category)
        # Second bump drops refreshes that read counts before the watermark moved
        self._generations[category] += 1
        self._badges[category] = 0
        logger.debug("Badge %s marked as seen", category.value)

    async def on_status_changed(self, event: StatusChanged) -> None:
        await self.refresh()

    async def _poll(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.refresh()
            except Exception:
                logger.exception("Badge poll failed")
