"""Status registry — display label, tone and icon tag for every status.

Pure lookup tables. The transition policies refer to statuses by enum only;
everything a UI needs to render a status comes from here.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from assignflow.domain.value_objects.enums import (
    AssignmentStatus,
    Priority,
    RequestType,
    StatusTone,
)


@dataclass(frozen=True)
class StatusInfo:
    label: str
    tone: StatusTone
    icon: str


S = AssignmentStatus

STATUS_INFO: dict[AssignmentStatus, StatusInfo] = {
    S.NEW: StatusInfo("جديد", StatusTone.DANGER, "clock"),
    S.ACCEPTED: StatusInfo("مقبول", StatusTone.INFO, "check-circle"),
    S.IN_PROGRESS: StatusInfo("قيد التنفيذ", StatusTone.WARNING, "loader"),
    S.SHIPPED: StatusInfo("تم الشحن", StatusTone.SUCCESS, "truck"),
    S.REJECTED: StatusInfo("مرفوض", StatusTone.NEUTRAL, "x-circle"),
    S.CANCELLED: StatusInfo("ملغي", StatusTone.MUTED, "x"),
    S.UNDER_REVIEW: StatusInfo("قيد المراجعة", StatusTone.INFO, "search"),
    S.WAITING_CUSTOMER_EXCEL: StatusInfo("في انتظار ملف Excel من العميل", StatusTone.WARNING, "file-spreadsheet"),
    S.PRICING_IN_PROGRESS: StatusInfo("يتم إعداد عرض السعر", StatusTone.WARNING, "calculator"),
    S.PRICING_SENT: StatusInfo("تم إرسال عرض السعر", StatusTone.INFO, "send"),
    S.WAITING_CUSTOMER_APPROVAL: StatusInfo("في انتظار موافقة العميل", StatusTone.WARNING, "hourglass"),
    S.APPROVED_BY_CUSTOMER: StatusInfo("وافق العميل على العرض", StatusTone.SUCCESS, "thumbs-up"),
    S.IN_FACTORY: StatusInfo("في المصنع", StatusTone.INFO, "factory"),
    S.SHIPMENT_BOOKED: StatusInfo("تم حجز الشحن", StatusTone.INFO, "calendar-check"),
    S.ON_THE_SEA: StatusInfo("الشحنة في البحر", StatusTone.INFO, "ship"),
    S.IN_PORT: StatusInfo("الشحنة في الميناء", StatusTone.INFO, "anchor"),
    S.CUSTOMS_CLEARED: StatusInfo("تم التخليص الجمركي", StatusTone.INFO, "stamp"),
    S.ON_THE_WAY: StatusInfo("في الطريق", StatusTone.WARNING, "truck"),
    S.DELIVERED: StatusInfo("تم التسليم", StatusTone.SUCCESS, "package-check"),
}

REQUEST_TYPE_LABELS: dict[RequestType, str] = {
    RequestType.QUOTE: "طلب عرض سعر",
    RequestType.ORDER: "طلب شراء",
    RequestType.INSTALLMENT: "طلب تقسيط",
    RequestType.IMPORT: "طلب استيراد",
    RequestType.MISSING: "طلب قطع مفقودة",
}

PRIORITY_LABELS: dict[Priority, str] = {
    Priority.LOW: "منخفض",
    Priority.NORMAL: "عادي",
    Priority.HIGH: "عالي",
    Priority.URGENT: "عاجل",
}


def status_info(status: AssignmentStatus) -> StatusInfo:
    return STATUS_INFO[status]


def request_type_label(request_type: RequestType) -> str:
    return REQUEST_TYPE_LABELS[request_type]


def priority_label(priority: Priority) -> str:
    return PRIORITY_LABELS[priority]


def missing_entries(statuses: Iterable[AssignmentStatus]) -> list[AssignmentStatus]:
    """Return the statuses that have no registry entry."""
    return [s for s in statuses if s not in STATUS_INFO]


def assert_registry_complete(statuses: Iterable[AssignmentStatus]) -> None:
    """Raise if any of *statuses* lacks a registry entry.

    Also checks the request type and priority tables against their enums.

    Raises:
        RuntimeError: listing what is missing.
    """
    problems: list[str] = [s.value for s in missing_entries(statuses)]
    problems += [t.value for t in RequestType if t not in REQUEST_TYPE_LABELS]
    problems += [p.name for p in Priority if p not in PRIORITY_LABELS]
    if problems:
        raise RuntimeError(f"Status registry is missing entries for: {', '.join(problems)}")
