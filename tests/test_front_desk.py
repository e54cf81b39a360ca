"""End-to-end tests for counter operations over the persisted queue."""

from __future__ import annotations

import pytest

from laundry_queue.config import LaundryConfig
from laundry_queue.exceptions import (
    InvalidCategoryError,
    InvalidCustomerError,
    InvalidWeightError,
    OrderNotFoundError,
)
from laundry_queue.services.front_desk import FrontDeskService
from tests.consts import LEDGER_HEADER_LINE


def test_finish_scenario__five_kg_wash__bills_one_hundred(
    front_desk: FrontDeskService,
) -> None:
    order, outcome = front_desk.add_order("Maria Santos", "0917", 5.0, "wash")
    assert outcome.saved
    assert order.calculate_fee(front_desk.fee_schedule) == 100.0

    finished = front_desk.finish_order(order.order_id)

    assert finished.fee == 100.0
    assert finished.recorded and finished.save.saved
    assert front_desk.queue.list_orders() == []
    assert front_desk.order_repository.load() == []
    ledger_lines = front_desk.sales_ledger.path.read_text(encoding="utf-8").splitlines()
    assert ledger_lines[0] == LEDGER_HEADER_LINE
    assert len(ledger_lines) == 2
    assert ledger_lines[1].split(",")[4] == "100.00"


def test_finish__on_missing_order__writes_nothing(front_desk: FrontDeskService) -> None:
    with pytest.raises(OrderNotFoundError):
        front_desk.finish_order(99)

    assert front_desk.sales_ledger.read_entries() == []


def test_finish__on_unwritable_ledger__keeps_order_open(
    front_desk: FrontDeskService, config: LaundryConfig
) -> None:
    order, _ = front_desk.add_order("Maria Santos", "0917", 5.0, "wash")
    ledger_path = front_desk.sales_ledger.path
    ledger_path.unlink()
    ledger_path.mkdir()

    finished = front_desk.finish_order(order.order_id)

    assert not finished.recorded
    assert finished.save is None
    assert front_desk.queue.get(order.order_id).status == "For Washing"
    reopened = FrontDeskService.open(config)
    assert [o.order_id for o in reopened.queue.list_orders()] == [order.order_id]
    assert reopened.queue.next_id == 2


@pytest.mark.parametrize(
    ("name", "contact"),
    [
        ("Maria\nSantos", "0917"),
        ("Maria\rSantos", "0917"),
        ("Maria\u2028Santos", "0917"),
        ("Maria Santos", "0917\x0b0918"),
    ],
)
def test_add_order__on_multiline_customer__rejects_before_queueing(
    front_desk: FrontDeskService, name: str, contact: str
) -> None:
    with pytest.raises(InvalidCustomerError):
        front_desk.add_order(name, contact, 2.0, "wash")

    assert len(front_desk.queue) == 0


@pytest.mark.parametrize("weight", [0.0, -2.0, float("nan")])
def test_add_order__on_bad_weight__rejects_before_queueing(
    front_desk: FrontDeskService, weight: float
) -> None:
    with pytest.raises(InvalidWeightError):
        front_desk.add_order("Ana", "0917", weight, "wash")

    assert len(front_desk.queue) == 0
    assert not front_desk.order_repository.path.exists()


def test_add_order__on_bad_category__rejects_before_queueing(
    front_desk: FrontDeskService,
) -> None:
    with pytest.raises(InvalidCategoryError):
        front_desk.add_order("Ana", "0917", 2.0, "dryclean")

    assert len(front_desk.queue) == 0
    assert front_desk.queue.next_id == 1


def test_every_mutation_is_checkpointed(
    front_desk: FrontDeskService, config: LaundryConfig
) -> None:
    first, _ = front_desk.add_order("Ana", "0917", 2.0, "fold")
    front_desk.add_order("Ben", "0918", 3.0, "Combo")
    front_desk.update_status(first.order_id, "Washing")

    reopened = FrontDeskService.open(config)

    assert [o.order_id for o in reopened.queue.list_orders()] == [1, 2]
    assert reopened.queue.get(1).status == "Washing"
    assert reopened.queue.next_id == 3


def test_open__without_any_file__starts_empty(config: LaundryConfig) -> None:
    desk = FrontDeskService.open(config)

    assert desk.queue.list_orders() == []
    assert desk.queue.next_id == 1
    assert desk.sales_ledger.path.exists()


def test_open__uses_configured_rates_and_mode(config: LaundryConfig) -> None:
    desk = FrontDeskService.open(
        config.model_copy(update={"wash_rate": 30.0, "strict_transitions": False})
    )
    order, _ = desk.add_order("Ana", "0917", 2.0, "wash")

    desk.update_status(order.order_id, "anything goes")

    assert order.calculate_fee(desk.fee_schedule) == 60.0
    assert desk.queue.get(order.order_id).status == "anything goes"


def test_customer_lookup__shows_amount_due_when_ready(
    front_desk: FrontDeskService,
) -> None:
    ready, _ = front_desk.add_order("Maria Santos", "0917", 2.0, "combo")
    front_desk.add_order("maria santos", "0999", 1.0, "dry")
    front_desk.update_status(ready.order_id, "Ready for Pickup")

    views = front_desk.customer_lookup("MARIA SANTOS")

    assert [v.order.order_id for v in views] == [1, 2]
    assert views[0].amount_due == 80.0
    assert views[1].amount_due is None
    assert front_desk.customer_lookup("0999")[0].order.order_id == 2


def test_generate_report__covers_open_orders_only(
    front_desk: FrontDeskService,
) -> None:
    front_desk.add_order("Ana", "0917", 5.0, "wash")
    done, _ = front_desk.add_order("Ben", "0918", 1.0, "dry")
    front_desk.finish_order(done.order_id)

    summary = front_desk.generate_report()

    assert [row.order_id for row in summary.rows] == [1]
    assert summary.total == 100.0
    assert summary.path is not None and summary.path.exists()


def test_clear_all__deletes_file_and_keeps_ids_moving(
    front_desk: FrontDeskService,
) -> None:
    front_desk.add_order("Ana", "0917", 5.0, "wash")

    assert front_desk.clear_all()
    assert not front_desk.order_repository.path.exists()

    order, _ = front_desk.add_order("Ben", "0918", 1.0, "dry")
    assert order.order_id == 2
