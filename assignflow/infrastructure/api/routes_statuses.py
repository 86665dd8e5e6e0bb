"""Status registry and transition map, for UIs that render status pickers."""

from fastapi import APIRouter

from assignflow.domain.policies.status_registry import (
    PRIORITY_LABELS,
    REQUEST_TYPE_LABELS,
    STATUS_INFO,
)
from assignflow.domain.policies.transitions import policy_for
from assignflow.domain.value_objects.enums import RequestType

router = APIRouter(prefix="/statuses", tags=["statuses"])


@router.get("")
async def get_statuses():
    return {
        "statuses": {
            status.value: {"label": info.label, "tone": info.tone.value, "icon": info.icon}
            for status, info in STATUS_INFO.items()
        },
        "requestTypes": {t.value: label for t, label in REQUEST_TYPE_LABELS.items()},
        "priorities": {str(int(p)): label for p, label in PRIORITY_LABELS.items()},
        "transitions": {t.value: _transition_map(t) for t in RequestType},
    }


def _transition_map(request_type: RequestType) -> dict:
    policy = policy_for(request_type)
    return {
        status.value: [
            {
                "to": tr.target.value,
                "roles": sorted(r.value for r in tr.roles),
                "notesRequired": tr.notes_required,
            }
            for tr in policy.transitions_from(status)
        ]
        for status in sorted(policy.statuses(), key=lambda s: s.value)
    }
