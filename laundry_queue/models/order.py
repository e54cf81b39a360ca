from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from laundry_queue.models.fee_schedule import FeeSchedule, ServiceCategory


class OrderStatus(StrEnum):
    """Canonical progress labels shown to customers."""

    FOR_WASHING = "For Washing"
    WASHING = "Washing"
    DRYING = "Drying"
    READY_FOR_PICKUP = "Ready for Pickup"
    FINISHED = "Finished"

    @classmethod
    def lookup(cls, label: str) -> "OrderStatus | None":
        """Match a label case-insensitively, ignoring surrounding whitespace."""

        normalized = label.strip().casefold()
        for status in cls:
            if status.value.casefold() == normalized:
                return status
        return None


class Customer(BaseModel):
    """Customer who dropped off an order."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Customer name as given at the counter")
    contact: str = Field(..., description="Contact number")

    def details(self) -> str:
        return f"{self.name} ({self.contact})"


class LaundryOrder(BaseModel):
    """One laundry job waiting in the queue."""

    model_config = ConfigDict(validate_assignment=True)

    order_id: int = Field(..., gt=0, description="Identifier unique within the store")
    customer: Customer
    weight_kg: float = Field(..., gt=0, description="Weight of the load in kilograms")
    service: ServiceCategory = Field(..., description="Requested service")
    status: str = Field(
        default=OrderStatus.FOR_WASHING.value, description="Progress label"
    )

    def calculate_fee(self, schedule: FeeSchedule) -> float:
        return schedule.compute_fee(self.weight_kg, self.service)
