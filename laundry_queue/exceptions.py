"""
Exception classes for the laundry order queue.

Persistence problems are deliberately absent: the file repositories recover
from them locally and report through their return values instead.
"""


class LaundryQueueError(Exception):
    """Base class for all order queue errors."""


class OrderNotFoundError(LaundryQueueError, LookupError):
    """Raised when no open order carries the requested id."""

    def __init__(self, order_id: int) -> None:
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class ValidationFailure(LaundryQueueError, ValueError):
    """Raised when user-supplied input is malformed."""


class InvalidCategoryError(ValidationFailure):
    """Raised when a service category is not one of wash/dry/fold/combo."""

    def __init__(self, category: str) -> None:
        self.category = category
        super().__init__(
            f"Invalid service type {category!r}; choose from wash, dry, fold, or combo"
        )


class InvalidWeightError(ValidationFailure):
    """Raised when a laundry weight is not a positive number."""


class InvalidTransitionError(ValidationFailure):
    """Raised when a status change is not allowed from the current status."""

    def __init__(self, order_id: int, current: str, requested: str) -> None:
        self.order_id = order_id
        self.current = current
        self.requested = requested
        super().__init__(
            f"Order {order_id} cannot move from {current!r} to {requested!r}"
        )


class InvalidCustomerError(ValidationFailure):
    """Raised when a customer name or contact spans more than one line."""


class InvalidRateError(ValidationFailure):
    """Raised when a configured service rate is not a number."""

    def __init__(self, variable: str, raw: str) -> None:
        self.variable = variable
        self.raw = raw
        super().__init__(f"Invalid rate {raw!r} in {variable}; expected a number")
