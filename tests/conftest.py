from __future__ import annotations

from pathlib import Path

import pytest

from laundry_queue.config import LaundryConfig
from laundry_queue.models.fee_schedule import FeeSchedule
from laundry_queue.models.order import Customer
from laundry_queue.repositories.order_file import OrderFileRepository
from laundry_queue.repositories.sales_ledger import SalesLedgerRepository
from laundry_queue.services.front_desk import FrontDeskService
from laundry_queue.services.queue_manager import QueueManager
from laundry_queue.services.sales_report import SalesReportService
from tests.consts import fixed_clock


@pytest.fixture
def fee_schedule() -> FeeSchedule:
    return FeeSchedule()


@pytest.fixture
def customer() -> Customer:
    return Customer(name="Maria Santos", contact="09171234567")


@pytest.fixture
def config(tmp_path: Path) -> LaundryConfig:
    """Configuration with every file location inside ``tmp_path``."""

    return LaundryConfig(
        data_file=tmp_path / "data" / "LaundryQueueData.csv",
        fallback_dir=tmp_path / "documents",
        sales_dir=tmp_path / "sales",
        strict_transitions=True,
    )


@pytest.fixture
def order_repository(config: LaundryConfig) -> OrderFileRepository:
    return OrderFileRepository(config.data_file, config.fallback_file)


@pytest.fixture
def sales_ledger(config: LaundryConfig) -> SalesLedgerRepository:
    return SalesLedgerRepository(config.sales_dir, clock=fixed_clock)


@pytest.fixture
def front_desk(
    config: LaundryConfig,
    order_repository: OrderFileRepository,
    sales_ledger: SalesLedgerRepository,
) -> FrontDeskService:
    return FrontDeskService(
        queue=QueueManager(strict_transitions=config.strict_transitions),
        fee_schedule=config.fee_schedule(),
        order_repository=order_repository,
        sales_ledger=sales_ledger,
        sales_report=SalesReportService(directory=config.sales_dir, clock=fixed_clock),
    )
