from __future__ import annotations

import csv
import logging
from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path
from typing import Final

from laundry_queue.models.order import LaundryOrder
from laundry_queue.models.sales import SalesLedgerEntry
from laundry_queue.repositories._serialization import LEDGER_HEADER, format_weight

logger = logging.getLogger(__name__)

LEDGER_FILE_PATTERN: Final[str] = "SalesReport_{day:%Y%m%d}.csv"
TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

Clock = Callable[[], datetime]


class SalesLedgerRepository:
    """Append-only daily CSV of finished orders.

    One file per calendar day, named ``SalesReport_YYYYMMDD.csv``. Lines are
    never rewritten or removed, and nothing here deduplicates: recording the
    same order twice yields two lines.
    """

    def __init__(self, directory: str | Path, clock: Clock = datetime.now) -> None:
        """Create the ledger directory and today's file if they are missing.

        Args:
            directory: Directory that holds the daily ledgers.
            clock: Source of the current time.
        """
        self.directory: Path = Path(directory)
        self.clock: Clock = clock
        self._ensure_ledger(self.path_for(self.clock().date()))

    def path_for(self, day: date) -> Path:
        return self.directory / LEDGER_FILE_PATTERN.format(day=day)

    @property
    def path(self) -> Path:
        """Ledger file for the current day."""
        return self.path_for(self.clock().date())

    def _ensure_ledger(self, path: Path) -> bool:
        if path.exists():
            return True
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Cannot create sales ledger directory %s: %s", path.parent, e)
            return False
        try:
            with path.open("x", encoding="utf-8", newline="") as f:
                csv.writer(f, lineterminator="\n").writerow(LEDGER_HEADER)
        except FileExistsError:
            return True
        except OSError as e:
            logger.error("Cannot create sales ledger %s: %s", path, e)
            return False
        return True

    def record_finished(self, order: LaundryOrder, fee: float) -> bool:
        """Append one ledger line for a finished order.

        Args:
            order: The order as it was when finished.
            fee: Amount charged.

        Returns:
            True if the line was written.
        """
        now = self.clock()
        path = self.path_for(now.date())
        if not self._ensure_ledger(path):
            return False
        row = [
            str(order.order_id),
            order.customer.name,
            str(order.service),
            format_weight(order.weight_kg),
            f"{fee:.2f}",
            now.strftime(TIMESTAMP_FORMAT),
        ]
        try:
            with path.open("a", encoding="utf-8", newline="") as f:
                csv.writer(f, lineterminator="\n").writerow(row)
        except OSError as e:
            logger.error("Failed to record order %d in %s: %s", order.order_id, path, e)
            return False
        logger.info("Recorded order %d in sales ledger %s", order.order_id, path)
        return True

    def read_entries(self, day: date | None = None) -> list[SalesLedgerEntry]:
        """Parse one day's ledger back into entries.

        Args:
            day: Calendar day to read; defaults to today.

        Returns:
            Entries in file order. Malformed lines are skipped with a warning.
        """
        path = self.path_for(day or self.clock().date())
        entries: list[SalesLedgerEntry] = []
        try:
            with path.open("r", encoding="utf-8", newline="") as f:
                rows = list(csv.reader(f))
        except FileNotFoundError:
            return entries
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            logger.error("Cannot read sales ledger %s: %s", path, e)
            return entries

        for line_no, row in enumerate(rows[1:], start=1):
            if len(row) < len(LEDGER_HEADER):
                continue
            try:
                entries.append(
                    SalesLedgerEntry(
                        order_id=int(row[0]),
                        customer_name=row[1],
                        service=row[2],
                        weight_kg=float(row[3]),
                        fee=float(row[4]),
                        completed_at=datetime.strptime(row[5], TIMESTAMP_FORMAT),
                    )
                )
            except ValueError as e:
                logger.warning("Skipping ledger line %d in %s: %s", line_no, path, e)
        return entries
