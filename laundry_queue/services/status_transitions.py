from __future__ import annotations

from typing import Final

from laundry_queue.exceptions import InvalidTransitionError
from laundry_queue.models.order import OrderStatus

ALLOWED_TRANSITIONS: Final[dict[OrderStatus, frozenset[OrderStatus]]] = {
    OrderStatus.FOR_WASHING: frozenset(
        {OrderStatus.WASHING, OrderStatus.DRYING, OrderStatus.READY_FOR_PICKUP}
    ),
    OrderStatus.WASHING: frozenset(
        {OrderStatus.DRYING, OrderStatus.READY_FOR_PICKUP}
    ),
    OrderStatus.DRYING: frozenset({OrderStatus.READY_FOR_PICKUP}),
    OrderStatus.READY_FOR_PICKUP: frozenset(),
    OrderStatus.FINISHED: frozenset(),
}

# Orders loaded with a label outside OrderStatus may rejoin the lifecycle here.
RECOVERY_TARGETS: Final[frozenset[OrderStatus]] = frozenset(
    {
        OrderStatus.FOR_WASHING,
        OrderStatus.WASHING,
        OrderStatus.DRYING,
        OrderStatus.READY_FOR_PICKUP,
    }
)


def resolve_transition(
    order_id: int, current: str, requested: str, *, strict: bool = True
) -> str:
    """Decide the label to store for a requested status change.

    In legacy mode any label is stored verbatim. In strict mode the requested
    label must name a canonical status reachable from the current one;
    ``Finished`` is never reachable here because finishing also bills the
    order.

    Args:
        order_id: Order being updated, used in error messages.
        current: Label currently stored on the order.
        requested: Label supplied by the caller.
        strict: Whether to enforce the transition table.

    Returns:
        The label to store.

    Raises:
        InvalidTransitionError: If strict mode rejects the change.
    """

    if not strict:
        return requested

    target = OrderStatus.lookup(requested)
    if target is None:
        raise InvalidTransitionError(order_id, current, requested)

    source = OrderStatus.lookup(current)
    allowed = RECOVERY_TARGETS if source is None else ALLOWED_TRANSITIONS[source]
    if target not in allowed:
        raise InvalidTransitionError(order_id, current, requested)
    return target.value
