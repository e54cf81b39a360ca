from .order_file import OrderFileRepository
from .sales_ledger import SalesLedgerRepository

__all__ = ["OrderFileRepository", "SalesLedgerRepository"]
