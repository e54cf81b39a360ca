from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from laundry_queue.config import LaundryConfig
from laundry_queue.exceptions import (
    InvalidCategoryError,
    InvalidCustomerError,
    InvalidWeightError,
)
from laundry_queue.models.fee_schedule import FeeSchedule, ServiceCategory
from laundry_queue.models.order import Customer, LaundryOrder, OrderStatus
from laundry_queue.models.persistence import SaveOutcome
from laundry_queue.models.sales import SalesSummary
from laundry_queue.repositories.order_file import OrderFileRepository
from laundry_queue.repositories.sales_ledger import SalesLedgerRepository
from laundry_queue.services.queue_manager import QueueManager
from laundry_queue.services.sales_report import SalesReportService

logger = logging.getLogger(__name__)


class CustomerOrderView(BaseModel):
    """An order as shown to the customer who owns it."""

    order: LaundryOrder
    amount_due: float | None = None


class FinishedOrder(BaseModel):
    """Result of finishing an order.

    When ``recorded`` is False the ledger refused the sale, the order is still
    open, and ``save`` is None because the queue was not touched.
    """

    order: LaundryOrder
    fee: float
    recorded: bool
    save: SaveOutcome | None = None


def _is_single_line(value: str) -> bool:
    return "".join(value.splitlines()) == value


class FrontDeskService(BaseModel):
    """Counter operations over the order queue.

    Validates input before it reaches the queue, records finished orders in
    the sales ledger, and checkpoints the queue file after every change.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    queue: QueueManager
    fee_schedule: FeeSchedule
    order_repository: OrderFileRepository
    sales_ledger: SalesLedgerRepository
    sales_report: SalesReportService

    @classmethod
    def open(cls, config: LaundryConfig | None = None) -> FrontDeskService:
        """Load the persisted queue and wire every collaborator from ``config``."""
        config = config or LaundryConfig()
        order_repository = OrderFileRepository(config.data_file, config.fallback_file)
        queue = QueueManager.from_orders(
            order_repository.load(), strict_transitions=config.strict_transitions
        )
        return cls(
            queue=queue,
            fee_schedule=config.fee_schedule(),
            order_repository=order_repository,
            sales_ledger=SalesLedgerRepository(config.sales_dir),
            sales_report=SalesReportService(directory=config.sales_dir),
        )

    def save(self) -> SaveOutcome:
        return self.order_repository.save(self.queue.list_orders())

    def add_order(
        self, name: str, contact: str, weight_kg: float, category: str
    ) -> tuple[LaundryOrder, SaveOutcome]:
        """Validate and queue a new order, then persist the queue.

        Raises:
            InvalidWeightError: If the weight is not a positive number.
            InvalidCategoryError: If the service is not wash/dry/fold/combo.
            InvalidCustomerError: If the name or contact contains a line break.
        """
        if not (_is_single_line(name) and _is_single_line(contact)):
            raise InvalidCustomerError(
                "Customer name and contact must each fit on one line"
            )
        if not weight_kg > 0:
            raise InvalidWeightError(
                f"Invalid weight {weight_kg!r}; enter a positive number"
            )
        if not self.fee_schedule.is_valid_category(category):
            raise InvalidCategoryError(category)

        order = self.queue.create(
            Customer(name=name, contact=contact),
            weight_kg,
            ServiceCategory.parse(category),
        )
        return order, self.save()

    def update_status(
        self, order_id: int, new_status: str
    ) -> tuple[LaundryOrder, SaveOutcome]:
        order = self.queue.update_status(order_id, new_status)
        return order, self.save()

    def finish_order(self, order_id: int) -> FinishedOrder:
        """Bill an order, record it in the ledger, and persist the shorter queue.

        The order leaves the queue only after its ledger line is written. If
        the ledger cannot be appended the order stays open, status unchanged.

        Raises:
            OrderNotFoundError: If no open order has ``order_id``.
        """
        pending = self.queue.get(order_id)
        fee = pending.calculate_fee(self.fee_schedule)
        if not self.sales_ledger.record_finished(pending, fee):
            logger.warning("Order %d kept open: sale not recorded", order_id)
            return FinishedOrder(order=pending, fee=fee, recorded=False)

        order, fee = self.queue.finish(order_id, self.fee_schedule)
        return FinishedOrder(order=order, fee=fee, recorded=True, save=self.save())

    def customer_lookup(self, name_or_contact: str) -> list[CustomerOrderView]:
        views: list[CustomerOrderView] = []
        for order in self.queue.find_by_identifier(name_or_contact):
            amount_due = None
            if OrderStatus.lookup(order.status) is OrderStatus.READY_FOR_PICKUP:
                amount_due = order.calculate_fee(self.fee_schedule)
            views.append(CustomerOrderView(order=order, amount_due=amount_due))
        return views

    def generate_report(self) -> SalesSummary:
        return self.sales_report.generate_summary(
            self.queue.list_orders(), self.fee_schedule
        )

    def clear_all(self) -> bool:
        """Empty the queue and delete its file for a new batch."""
        self.queue.clear()
        logger.info("All orders cleared for a new batch")
        return self.order_repository.delete_store()
