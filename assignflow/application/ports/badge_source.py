"""Port interface for the store behind the admin sidebar badges."""

from abc import ABC, abstractmethod

from assignflow.domain.value_objects.enums import BadgeCategory


class BadgeSource(ABC):
    @abstractmethod
    async def get_new_item_counts(self) -> dict[BadgeCategory, int]:
        """Unseen item count per category the source knows about."""
        ...

    @abstractmethod
    async def mark_seen(self, category: BadgeCategory) -> None:
        """Advance the category's watermark to now."""
        ...

    def supported_categories(self) -> frozenset[BadgeCategory]:
        return frozenset(BadgeCategory)
