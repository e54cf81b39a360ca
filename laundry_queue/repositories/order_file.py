from __future__ import annotations

import contextlib
import csv
import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence

from laundry_queue.models.order import LaundryOrder
from laundry_queue.models.persistence import SaveOutcome
from laundry_queue.repositories._serialization import (
    ORDER_HEADER,
    order_to_row,
    row_to_order,
)

logger = logging.getLogger(__name__)


class OrderFileRepository:
    """Persist the open order queue as a UTF-8 CSV file.

    The file holds a header row followed by one row per open order in queue
    order. Cells are quoted only when they contain a delimiter or quote, so
    files written by older unquoted versions load unchanged.

    I/O failures never escape: saves degrade to a fallback location or a
    failed ``SaveOutcome``, loads degrade to an empty or partial queue.
    """

    def __init__(self, path: str | Path, fallback_path: str | Path | None = None) -> None:
        """Create an order file repository.

        Args:
            path: Primary location of the queue file.
            fallback_path: Location tried once when the primary is refused.
        """
        self.path: Path = Path(path)
        self.fallback_path: Path | None = (
            Path(fallback_path) if fallback_path is not None else None
        )

    def save(self, orders: Sequence[LaundryOrder]) -> SaveOutcome:
        """Overwrite the queue file with a full snapshot of ``orders``.

        Args:
            orders: Open orders in queue order.

        Returns:
            Where the snapshot landed, or why it could not be written.
        """
        try:
            self._write(self.path, orders)
        except PermissionError as e:
            logger.warning("Access denied saving queue to %s: %s", self.path, e)
            return self._save_to_fallback(orders, e)
        except OSError as e:
            logger.error("Queue not saved, file error on %s: %s", self.path, e)
            return SaveOutcome(saved=False, error=str(e))

        logger.info("Queue saved to %s", self.path)
        self._discard_fallback()
        return SaveOutcome(saved=True, path=self.path)

    def _discard_fallback(self) -> None:
        """Remove a fallback copy made obsolete by a successful primary save."""
        if self.fallback_path is None or not self.fallback_path.exists():
            return
        try:
            self.fallback_path.unlink()
        except OSError as e:
            logger.warning("Stale fallback queue %s not removed: %s", self.fallback_path, e)
        else:
            logger.info("Removed stale fallback queue %s", self.fallback_path)

    def _save_to_fallback(
        self, orders: Sequence[LaundryOrder], cause: OSError
    ) -> SaveOutcome:
        if self.fallback_path is None:
            return SaveOutcome(saved=False, error=str(cause))
        try:
            self._write(self.fallback_path, orders)
        except OSError as e:
            logger.error("Could not save queue to any location: %s", e)
            return SaveOutcome(saved=False, used_fallback=True, error=str(e))

        logger.warning(
            "Queue saved to alternative location %s; fix permissions on %s",
            self.fallback_path,
            self.path,
        )
        return SaveOutcome(
            saved=True, path=self.fallback_path, used_fallback=True, error=str(cause)
        )

    def _write(self, target: Path, orders: Sequence[LaundryOrder]) -> None:
        """Write a snapshot next to ``target`` and swap it into place."""
        # Render every row first so a bad record cannot leave a partial file.
        rows: list[list[str]] = [ORDER_HEADER, *(order_to_row(o) for o in orders)]

        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f, lineterminator="\n")
                writer.writerows(rows)
            os.replace(tmp_name, target)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise

    def _source(self) -> Path | None:
        """Pick the most recently written copy of the queue.

        The fallback comes first so it wins a modification-time tie; a
        successful primary save removes it.
        """
        newest: Path | None = None
        newest_mtime = 0.0
        for candidate in (self.fallback_path, self.path):
            if candidate is None:
                continue
            try:
                mtime = candidate.stat().st_mtime
            except OSError:
                continue
            if newest is None or mtime > newest_mtime:
                newest, newest_mtime = candidate, mtime
        if newest is not None and newest == self.fallback_path:
            logger.info("Reading queue from fallback copy %s", newest)
        return newest

    def load(self) -> list[LaundryOrder]:
        """Read the persisted queue, keeping every row that parses.

        Returns:
            Orders in file order. Empty when no file exists or it cannot be read.
        """
        orders: list[LaundryOrder] = []
        source = self._source()
        if source is None:
            logger.info("Data file not found. Starting fresh.")
            return orders

        try:
            with source.open("r", encoding="utf-8", newline="") as f:
                # Only "\n" ends a row; other line-break characters are field data.
                lines = f.read().split("\n")
        except PermissionError as e:
            logger.error("Access denied reading %s: %s; starting empty", source, e)
            return orders
        except (OSError, UnicodeDecodeError) as e:
            logger.error("File error reading %s: %s; starting empty", source, e)
            return orders

        # Line 0 is the header.
        for line_no, line in enumerate(lines[1:], start=1):
            order = self._parse_line(line_no, line)
            if order is not None:
                orders.append(order)

        logger.info("Loaded %d orders from %s", len(orders), source)
        return orders

    @staticmethod
    def _parse_line(line_no: int, line: str) -> LaundryOrder | None:
        try:
            parts = next(csv.reader([line]), [])
            if len(parts) < len(ORDER_HEADER):
                return None
            try:
                int(parts[0])
            except ValueError:
                logger.warning("Skipping invalid OrderID: %s", parts[0])
                return None
            try:
                float(parts[3])
            except ValueError:
                logger.warning("Skipping invalid weight: %s", parts[3])
                return None
            return row_to_order(parts)
        except Exception as e:
            logger.warning("Error parsing line %d: %s", line_no, e)
            return None

    def delete_store(self) -> bool:
        """Remove the persisted queue file and any fallback copy.

        Returns:
            True when no queue file remains, False if a removal failed.
        """
        removed_all = True
        for path in (self.path, self.fallback_path):
            if path is None or not path.exists():
                continue
            try:
                path.unlink()
            except PermissionError as e:
                logger.error("Cannot delete %s: access denied (%s)", path, e)
                removed_all = False
            except OSError as e:
                logger.error("Error deleting %s: %s", path, e)
                removed_all = False
            else:
                logger.info("Queue file %s deleted", path)
        return removed_all
