from __future__ import annotations

import os
from pathlib import Path
from typing import Final

from pydantic import BaseModel, Field

from laundry_queue.exceptions import InvalidRateError
from laundry_queue.models.fee_schedule import FeeSchedule

DATA_FILE_NAME: Final[str] = "LaundryQueueData.csv"
DEFAULT_HOME: Final[Path] = Path.home() / "LaundryExpress"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_rate(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise InvalidRateError(name, raw) from e


class LaundryConfig(BaseModel):
    """Locations and policy for one laundry queue session.

    Defaults come from ``LAUNDRY_*`` environment variables so that tests and
    deployments can redirect every file without touching code.
    """

    data_file: Path = Field(
        default_factory=lambda: Path(
            os.getenv("LAUNDRY_DATA_FILE", str(DEFAULT_HOME / DATA_FILE_NAME))
        ),
        description="Primary location of the persisted order queue",
    )
    fallback_dir: Path = Field(
        default_factory=lambda: Path(
            os.getenv("LAUNDRY_FALLBACK_DIR", str(Path.home() / "Documents"))
        ),
        description="User-writable directory used when the primary is refused",
    )
    sales_dir: Path = Field(
        default_factory=lambda: Path(
            os.getenv("LAUNDRY_SALES_DIR", str(DEFAULT_HOME / "SalesReport"))
        ),
        description="Directory holding daily sales ledgers and summaries",
    )
    strict_transitions: bool = Field(
        default_factory=lambda: _env_flag("LAUNDRY_STRICT_TRANSITIONS", True),
        description="Reject status changes outside the allowed transition table",
    )
    wash_rate: float = Field(
        default_factory=lambda: _env_rate("LAUNDRY_RATE_WASH", 20.0), ge=0
    )
    dry_rate: float = Field(
        default_factory=lambda: _env_rate("LAUNDRY_RATE_DRY", 10.0), ge=0
    )
    fold_rate: float = Field(
        default_factory=lambda: _env_rate("LAUNDRY_RATE_FOLD", 15.0), ge=0
    )
    combo_rate: float = Field(
        default_factory=lambda: _env_rate("LAUNDRY_RATE_COMBO", 40.0), ge=0
    )

    @property
    def fallback_file(self) -> Path:
        return self.fallback_dir / self.data_file.name

    def fee_schedule(self) -> FeeSchedule:
        return FeeSchedule(
            wash_rate=self.wash_rate,
            dry_rate=self.dry_rate,
            fold_rate=self.fold_rate,
            combo_rate=self.combo_rate,
        )
