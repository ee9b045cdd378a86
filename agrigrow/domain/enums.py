# agrigrow/domain/enums.py
from enum import Enum


class OrderStatus(str, Enum):
    PENDING_VERIFICATION = "Pending Verification"
    PAID = "Paid"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    FAILED = "Failed"
    CANCELLED = "Cancelled"


TERMINAL_STATUSES = frozenset(
    {OrderStatus.DELIVERED, OrderStatus.FAILED, OrderStatus.CANCELLED}
)


def is_terminal(status: str) -> bool:
    return status in {s.value for s in TERMINAL_STATUSES}


class ProductType(str, Enum):
    SOIL = "Soil"
    NUTRIENTS = "Nutrients"
    TOOLS = "Tools"
    IRRIGATION = "Irrigation"
