from .front_desk import CustomerOrderView, FinishedOrder, FrontDeskService
from .queue_manager import QueueManager
from .sales_report import SalesReportService

__all__ = [
    "CustomerOrderView",
    "FinishedOrder",
    "FrontDeskService",
    "QueueManager",
    "SalesReportService",
]
