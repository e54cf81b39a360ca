from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path
from typing import Final

from pydantic import BaseModel, Field

from laundry_queue.models.fee_schedule import FeeSchedule
from laundry_queue.models.order import LaundryOrder
from laundry_queue.models.sales import SalesSummary, SalesSummaryRow

logger = logging.getLogger(__name__)

SUMMARY_FILE_PATTERN: Final[str] = "SalesSummary_{ts:%Y%m%d_%H%M%S}"
RULE: Final[str] = "-" * 47


class SalesReportService(BaseModel):
    """Write projected-sales summaries for the orders still in the queue."""

    directory: Path
    clock: Callable[[], datetime] = Field(default=datetime.now)

    def summarize(
        self, orders: Sequence[LaundryOrder], fee_schedule: FeeSchedule
    ) -> SalesSummary:
        rows: list[SalesSummaryRow] = []
        total = 0.0
        for order in orders:
            fee = order.calculate_fee(fee_schedule)
            rows.append(
                SalesSummaryRow(
                    order_id=order.order_id,
                    customer_name=order.customer.name,
                    service=str(order.service),
                    fee=fee,
                )
            )
            total += fee
        return SalesSummary(generated_at=self.clock(), rows=rows, total=total)

    @staticmethod
    def render(summary: SalesSummary) -> str:
        lines = [
            "===== LAUNDRY EXPRESS SALES REPORT =====",
            f"Date Generated: {summary.generated_at:%Y-%m-%d %H:%M:%S}",
            RULE,
            "OrderID | Customer        | Service  | Fee (₱)",
            RULE,
        ]
        for row in summary.rows:
            lines.append(
                f"{row.order_id:>7} | {row.customer_name:<15} | "
                f"{row.service:<8} | ₱{row.fee:8.2f}"
            )
        lines.append(RULE)
        lines.append(f"TOTAL SALES: ₱{summary.total:.2f}")
        return "\n".join(lines) + "\n"

    def _unique_path(self, generated_at: datetime) -> Path:
        stem = SUMMARY_FILE_PATTERN.format(ts=generated_at)
        candidate = self.directory / f"{stem}.txt"
        suffix = 1
        while candidate.exists():
            candidate = self.directory / f"{stem}_{suffix}.txt"
            suffix += 1
        return candidate

    def generate_summary(
        self, orders: Sequence[LaundryOrder], fee_schedule: FeeSchedule
    ) -> SalesSummary:
        """Write a new summary file for the given open orders.

        Every call produces its own file; an existing report is never
        overwritten.

        Args:
            orders: Current (not yet finished) orders.
            fee_schedule: Rates used to price each order.

        Returns:
            The computed summary. ``path`` is None if the file could not be written.
        """
        summary = self.summarize(orders, fee_schedule)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path = self._unique_path(summary.generated_at)
            with path.open("x", encoding="utf-8") as f:
                f.write(self.render(summary))
        except OSError as e:
            logger.error("Sales summary not written to %s: %s", self.directory, e)
            return summary

        logger.info("Sales summary saved: %s", path)
        return summary.model_copy(update={"path": path})
