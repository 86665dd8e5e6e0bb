"""Admin sidebar badges — unseen counts per category."""

from fastapi import APIRouter, Depends

from assignflow.application.notifications import NotificationState
from assignflow.domain.entities.actor import Actor
from assignflow.domain.value_objects.enums import BadgeCategory
from assignflow.infrastructure.api.dependencies import get_notifications, require_admin

router = APIRouter(prefix="/badges", tags=["badges"])


def _serialize_badges(badges: dict[BadgeCategory, int]) -> dict:
    return {c.value: badges.get(c, 0) for c in BadgeCategory}


@router.get("")
async def get_badges(
    actor: Actor = Depends(require_admin),
    state: NotificationState = Depends(get_notifications),
):
    """Last polled counts; does not hit the store."""
    return _serialize_badges(state.badges)


@router.post("/refresh")
async def refresh_badges(
    actor: Actor = Depends(require_admin),
    state: NotificationState = Depends(get_notifications),
):
    return _serialize_badges(await state.refresh())


@router.post("/{category}/seen")
async def mark_badge_seen(
    category: BadgeCategory,
    actor: Actor = Depends(require_admin),
    state: NotificationState = Depends(get_notifications),
):
    await state.mark_as_seen(category)
    return _serialize_badges(state.badges)
