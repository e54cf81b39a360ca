"""Tests for the in-memory order store."""

from __future__ import annotations

import pytest

from laundry_queue.exceptions import InvalidTransitionError, OrderNotFoundError
from laundry_queue.models.fee_schedule import FeeSchedule, ServiceCategory
from laundry_queue.models.order import Customer, LaundryOrder, OrderStatus
from laundry_queue.services.queue_manager import QueueManager


def _order(order_id: int, status: str = "For Washing") -> LaundryOrder:
    return LaundryOrder(
        order_id=order_id,
        customer=Customer(name=f"Customer {order_id}", contact=f"0917{order_id:07d}"),
        weight_kg=3.0,
        service=ServiceCategory.WASH,
        status=status,
    )


def test_create__assigns_increasing_ids_and_initial_status(customer: Customer) -> None:
    queue = QueueManager()

    first = queue.create(customer, 5.0, "wash")
    second = queue.create(customer, 2.0, "DRY")

    assert (first.order_id, second.order_id) == (1, 2)
    assert first.status == OrderStatus.FOR_WASHING
    assert second.service is ServiceCategory.DRY
    assert queue.list_orders() == [first, second]


def test_create__same_customer_twice__creates_distinct_orders(customer: Customer) -> None:
    queue = QueueManager()

    queue.create(customer, 5.0, "wash")
    queue.create(customer, 5.0, "wash")

    assert len(queue) == 2
    assert [o.order_id for o in queue.list_orders()] == [1, 2]


def test_clear__keeps_id_high_water_mark(customer: Customer) -> None:
    queue = QueueManager()
    queue.create(customer, 1.0, "fold")
    queue.create(customer, 1.0, "fold")

    queue.clear()
    after = queue.create(customer, 1.0, "fold")

    assert after.order_id == 3
    assert queue.list_orders() == [after]


def test_from_orders__recomputes_next_id() -> None:
    queue = QueueManager.from_orders([_order(4), _order(9), _order(2)])

    assert queue.next_id == 10
    assert [o.order_id for o in queue.list_orders()] == [4, 9, 2]
    assert QueueManager.from_orders([]).next_id == 1


def test_update_status__on_missing_id__raises_and_leaves_queue_unchanged(
    customer: Customer,
) -> None:
    queue = QueueManager()
    queue.create(customer, 5.0, "wash")
    before = [o.model_copy() for o in queue.list_orders()]

    with pytest.raises(OrderNotFoundError) as excinfo:
        queue.update_status(42, "Drying")

    assert excinfo.value.order_id == 42
    assert queue.list_orders() == before


def test_update_status__strict__normalises_canonical_labels(customer: Customer) -> None:
    queue = QueueManager()
    order = queue.create(customer, 5.0, "wash")

    queue.update_status(order.order_id, "drying")
    assert order.status == "Drying"

    queue.update_status(order.order_id, "READY FOR PICKUP")
    assert order.status == "Ready for Pickup"


@pytest.mark.parametrize(
    ("current", "requested"),
    [
        ("Ready for Pickup", "Washing"),
        ("Drying", "For Washing"),
        ("For Washing", "Finished"),
        ("For Washing", "Lost"),
    ],
)
def test_update_status__strict__rejects_illegal_transitions(
    current: str, requested: str
) -> None:
    queue = QueueManager.from_orders([_order(1, status=current)])

    with pytest.raises(InvalidTransitionError):
        queue.update_status(1, requested)

    assert queue.get(1).status == current


def test_update_status__strict__lets_legacy_label_rejoin_lifecycle() -> None:
    queue = QueueManager.from_orders([_order(1, status="Soaking")])

    queue.update_status(1, "Drying")

    assert queue.get(1).status == "Drying"


def test_update_status__legacy__accepts_any_label() -> None:
    queue = QueueManager.from_orders(
        [_order(1, status="Ready for Pickup")], strict_transitions=False
    )

    queue.update_status(1, "waiting on stain remover")

    assert queue.get(1).status == "waiting on stain remover"


def test_finish__removes_order_and_returns_fee(
    customer: Customer, fee_schedule: FeeSchedule
) -> None:
    queue = QueueManager()
    keep = queue.create(customer, 1.0, "dry")
    done = queue.create(customer, 5.0, "wash")

    order, fee = queue.finish(done.order_id, fee_schedule)

    assert order.order_id == done.order_id
    assert order.status == OrderStatus.FINISHED
    assert fee == 100.0
    assert queue.list_orders() == [keep]
    with pytest.raises(OrderNotFoundError):
        queue.get(done.order_id)


def test_finish__on_missing_id__raises(fee_schedule: FeeSchedule) -> None:
    queue = QueueManager.from_orders([_order(1)])

    with pytest.raises(OrderNotFoundError):
        queue.finish(2, fee_schedule)

    assert len(queue) == 1


def test_find_by_identifier__matches_name_any_case_or_exact_contact() -> None:
    a = LaundryOrder(
        order_id=1,
        customer=Customer(name="Juan Dela Cruz", contact="0917"),
        weight_kg=1.0,
        service=ServiceCategory.WASH,
    )
    b = LaundryOrder(
        order_id=2,
        customer=Customer(name="Ana", contact="0999"),
        weight_kg=1.0,
        service=ServiceCategory.FOLD,
    )
    queue = QueueManager.from_orders([a, b])

    assert queue.find_by_identifier("juan dela cruz") == [a]
    assert queue.find_by_identifier("0999") == [b]
    assert queue.find_by_identifier("Pedro") == []
    assert len(queue) == 2
