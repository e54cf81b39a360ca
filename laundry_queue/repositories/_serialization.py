from __future__ import annotations

from typing import Final, Sequence

from laundry_queue.models.fee_schedule import ServiceCategory
from laundry_queue.models.order import Customer, LaundryOrder

ORDER_HEADER: Final[list[str]] = [
    "OrderID",
    "Name",
    "Contact",
    "Weight",
    "Service",
    "Status",
]
LEDGER_HEADER: Final[list[str]] = [
    "OrderID",
    "Customer",
    "Service",
    "Weight(kg)",
    "Fee(₱)",
    "DateCompleted",
]


def format_weight(weight_kg: float) -> str:
    """Render a weight without a trailing ``.0`` for whole kilograms."""

    weight_kg = float(weight_kg)
    return str(int(weight_kg)) if weight_kg.is_integer() else repr(weight_kg)


def order_to_row(order: LaundryOrder) -> list[str]:
    """Flatten an order into the persisted column order.

    Args:
        order: Order to serialize.

    Returns:
        Cell values matching ``ORDER_HEADER``.
    """

    return [
        str(order.order_id),
        order.customer.name,
        order.customer.contact,
        format_weight(order.weight_kg),
        str(order.service),
        order.status,
    ]


def row_to_order(row: Sequence[str]) -> LaundryOrder:
    """Rebuild an order from an already length-checked row.

    The persisted status is restored verbatim. Id and weight parsing errors
    surface as ``ValueError`` so callers can report the offending cell.
    """

    order_id = int(row[0])
    weight_kg = float(row[3])
    return LaundryOrder(
        order_id=order_id,
        customer=Customer(name=row[1], contact=row[2]),
        weight_kg=weight_kg,
        service=ServiceCategory.parse(row[4]),
        status=row[5],
    )
