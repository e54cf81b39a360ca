from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field


class SalesLedgerEntry(BaseModel):
    """A finished order as recorded in the daily sales ledger."""

    order_id: int = Field(..., gt=0, description="Id of the finished order")
    customer_name: str = Field(..., description="Customer name at completion")
    service: str = Field(..., description="Service category billed")
    weight_kg: float = Field(..., description="Weight billed in kilograms")
    fee: float = Field(..., ge=0, description="Fee charged")
    completed_at: datetime = Field(..., description="When the order was finished")


class SalesSummaryRow(BaseModel):
    order_id: int
    customer_name: str
    service: str
    fee: float


class SalesSummary(BaseModel):
    """Projected sales for the orders still in the queue."""

    generated_at: datetime
    rows: list[SalesSummaryRow] = Field(default_factory=list)
    total: float = Field(default=0.0, ge=0)
    path: Path | None = Field(default=None, description="Where the report was written")
