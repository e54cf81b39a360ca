from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, PrivateAttr

from laundry_queue.exceptions import OrderNotFoundError
from laundry_queue.models.fee_schedule import FeeSchedule, ServiceCategory
from laundry_queue.models.order import Customer, LaundryOrder, OrderStatus
from laundry_queue.services.status_transitions import resolve_transition

logger = logging.getLogger(__name__)


class QueueManager(BaseModel):
    """In-memory store of open laundry orders.

    Orders keep insertion order. Ids come from a counter that only grows, so
    an id is never handed out twice in one process even after ``clear``.
    The store is single-session and not thread-safe; callers persist it after
    every mutating call.
    """

    strict_transitions: bool = True

    _orders: list[LaundryOrder] = PrivateAttr(default_factory=list)
    _next_id: int = PrivateAttr(default=1)

    @classmethod
    def from_orders(
        cls, orders: Iterable[LaundryOrder], *, strict_transitions: bool = True
    ) -> QueueManager:
        """Build a store from previously persisted orders.

        Args:
            orders: Orders in their persisted order.
            strict_transitions: Whether status updates follow the transition table.

        Returns:
            A store whose next id is one past the highest loaded id.
        """

        manager = cls(strict_transitions=strict_transitions)
        manager._orders = list(orders)
        if manager._orders:
            manager._next_id = max(o.order_id for o in manager._orders) + 1
        return manager

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._orders)

    def create(
        self, customer: Customer, weight_kg: float, category: ServiceCategory | str
    ) -> LaundryOrder:
        """Queue a new order with status ``For Washing``.

        Every call creates a distinct order, even for identical customer data.
        """

        order = LaundryOrder(
            order_id=self._next_id,
            customer=customer,
            weight_kg=weight_kg,
            service=ServiceCategory.parse(category),
            status=OrderStatus.FOR_WASHING.value,
        )
        self._next_id += 1
        self._orders.append(order)
        logger.info("Added order %d for %s", order.order_id, customer.name)
        return order

    def get(self, order_id: int) -> LaundryOrder:
        for order in self._orders:
            if order.order_id == order_id:
                return order
        raise OrderNotFoundError(order_id)

    def update_status(self, order_id: int, new_status: str) -> LaundryOrder:
        """Change the status label of an open order.

        Raises:
            OrderNotFoundError: If no open order has ``order_id``.
            InvalidTransitionError: If strict transitions reject the change.
        """

        order = self.get(order_id)
        order.status = resolve_transition(
            order_id, order.status, new_status, strict=self.strict_transitions
        )
        logger.info("Order %d is now %r", order_id, order.status)
        return order

    def finish(
        self, order_id: int, fee_schedule: FeeSchedule
    ) -> tuple[LaundryOrder, float]:
        """Mark an order finished, bill it, and drop it from the queue.

        Returns:
            The finished order as it was just before removal, and its fee.

        Raises:
            OrderNotFoundError: If no open order has ``order_id``.
        """

        order = self.get(order_id)
        order.status = OrderStatus.FINISHED.value
        fee = order.calculate_fee(fee_schedule)
        self._orders.remove(order)
        logger.info("Finished order %d, fee %.2f", order_id, fee)
        return order, fee

    def find_by_identifier(self, name_or_contact: str) -> list[LaundryOrder]:
        """Return orders whose customer name (any case) or exact contact matches."""

        wanted = name_or_contact.casefold()
        return [
            order
            for order in self._orders
            if order.customer.name.casefold() == wanted
            or order.customer.contact == name_or_contact
        ]

    def list_orders(self) -> list[LaundryOrder]:
        return list(self._orders)

    def clear(self) -> None:
        """Drop every open order; the id counter keeps its high-water mark."""

        self._orders.clear()
        logger.info("Cleared all orders, next id stays %d", self._next_id)
