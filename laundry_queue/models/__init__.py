from .fee_schedule import FeeSchedule, ServiceCategory
from .order import Customer, LaundryOrder, OrderStatus
from .persistence import SaveOutcome
from .sales import SalesLedgerEntry, SalesSummary, SalesSummaryRow

__all__ = [
    "Customer",
    "FeeSchedule",
    "LaundryOrder",
    "OrderStatus",
    "SalesLedgerEntry",
    "SalesSummary",
    "SalesSummaryRow",
    "SaveOutcome",
    "ServiceCategory",
]
