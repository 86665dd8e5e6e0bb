"""Domain enums — pure Python, no external dependencies."""

from enum import Enum, IntEnum


class RequestType(str, Enum):
    QUOTE = "QUOTE"
    ORDER = "ORDER"
    INSTALLMENT = "INSTALLMENT"
    IMPORT = "IMPORT"
    MISSING = "MISSING"


class AssignmentStatus(str, Enum):
    # Generic supplier workflow
    NEW = "NEW"
    ACCEPTED = "ACCEPTED"
    IN_PROGRESS = "IN_PROGRESS"
    SHIPPED = "SHIPPED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"

    # Import workflow (admin import manager)
    UNDER_REVIEW = "UNDER_REVIEW"
    WAITING_CUSTOMER_EXCEL = "WAITING_CUSTOMER_EXCEL"
    PRICING_IN_PROGRESS = "PRICING_IN_PROGRESS"
    PRICING_SENT = "PRICING_SENT"
    WAITING_CUSTOMER_APPROVAL = "WAITING_CUSTOMER_APPROVAL"
    APPROVED_BY_CUSTOMER = "APPROVED_BY_CUSTOMER"
    IN_FACTORY = "IN_FACTORY"
    SHIPMENT_BOOKED = "SHIPMENT_BOOKED"
    ON_THE_SEA = "ON_THE_SEA"
    IN_PORT = "IN_PORT"
    CUSTOMS_CLEARED = "CUSTOMS_CLEARED"
    ON_THE_WAY = "ON_THE_WAY"
    DELIVERED = "DELIVERED"


class ActorRole(str, Enum):
    ADMIN = "ADMIN"
    SUPPLIER = "SUPPLIER"


class Priority(IntEnum):
    LOW = 0
    NORMAL = 1
    HIGH = 2
    URGENT = 3


class BadgeCategory(str, Enum):
    ORDERS = "orders"
    ACCOUNTS = "accounts"
    QUOTES = "quotes"
    IMPORTS = "imports"
    MISSING = "missing"
    ORDER_SHORTAGES = "orderShortages"


class StatusTone(str, Enum):
    DANGER = "danger"
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    NEUTRAL = "neutral"
    MUTED = "muted"
