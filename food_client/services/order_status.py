"""Display semantics and forward transitions for order statuses"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from ..models.order import Order, OrderStatus

# Lifecycle order; CANCELLED is a side exit reachable only from PENDING
LIFECYCLE = [
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
]

ALL_STATUSES = LIFECYCLE + [OrderStatus.CANCELLED]

ALL = "ALL"


@dataclass(frozen=True)
class StatusDisplay:
    label: str
    color: str


STATUS_DISPLAY = {
    OrderStatus.PENDING: StatusDisplay("Pending", "yellow"),
    OrderStatus.CONFIRMED: StatusDisplay("Confirmed", "blue"),
    OrderStatus.PREPARING: StatusDisplay("Preparing", "orange"),
    OrderStatus.OUT_FOR_DELIVERY: StatusDisplay("Out for Delivery", "purple"),
    OrderStatus.DELIVERED: StatusDisplay("Delivered", "green"),
    OrderStatus.CANCELLED: StatusDisplay("Cancelled", "red"),
}


def parse_status(status) -> Optional[OrderStatus]:
    """Known status for a code, None for codes this client does not know"""
    try:
        return OrderStatus(status)
    except ValueError:
        return None


def status_code(status) -> str:
    return status.value if isinstance(status, OrderStatus) else str(status)


def display_for(status) -> StatusDisplay:
    """Label and color for a status code; unknown codes show as pending"""
    return STATUS_DISPLAY[parse_status(status) or OrderStatus.PENDING]


def next_status(current: OrderStatus) -> Optional[OrderStatus]:
    """Next forward step, or None once delivered or cancelled"""
    current = parse_status(current)
    if current not in LIFECYCLE or current == OrderStatus.DELIVERED:
        return None
    return LIFECYCLE[LIFECYCLE.index(current) + 1]


def allowed_manual_transitions(current: OrderStatus) -> list[OrderStatus]:
    """Statuses an admin may set by hand: all but the current one and CANCELLED"""
    current = parse_status(current)
    return [s for s in LIFECYCLE if s != current]


def is_cancellable(status: OrderStatus) -> bool:
    return parse_status(status) == OrderStatus.PENDING


def is_active(status: OrderStatus) -> bool:
    return parse_status(status) not in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


# ==================== Dashboard aggregates ====================

def active_orders(orders: Iterable[Order]) -> list[Order]:
    return [o for o in orders if is_active(o.status)]


def revenue(orders: Iterable[Order]) -> Decimal:
    """Sum of totals over delivered orders"""
    return sum(
        (o.total_amount for o in orders if o.status == OrderStatus.DELIVERED),
        Decimal("0"),
    )


def filter_by_status(orders: Iterable[Order], status: str = ALL) -> list[Order]:
    if status == ALL:
        return list(orders)
    wanted = OrderStatus(status)
    return [o for o in orders if o.status == wanted]


def count_by_status(orders: Iterable[Order]) -> dict[str, int]:
    counts = {s.value: 0 for s in ALL_STATUSES}
    for order in orders:
        code = status_code(order.status)
        counts[code] = counts.get(code, 0) + 1
    return counts


def deliveries_in_progress(orders: Iterable[Order]) -> list[Order]:
    return [o for o in orders if o.status == OrderStatus.OUT_FOR_DELIVERY]


def completed_deliveries(orders: Iterable[Order], limit: int = 10) -> list[Order]:
    return [o for o in orders if o.status == OrderStatus.DELIVERED][:limit]


def present_order(order: Order) -> dict:
    """Order as JSON with its display label, color and available actions"""
    display = display_for(order.status)
    upcoming = next_status(order.status)
    return {
        **order.model_dump(mode="json"),
        "status_label": display.label,
        "status_color": display.color,
        "cancellable": is_cancellable(order.status),
        "next_status": upcoming.value if upcoming else None,
    }
