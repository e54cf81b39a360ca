from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from laundry_queue.exceptions import InvalidCategoryError


class ServiceCategory(StrEnum):
    """Services offered by the shop, billed per kilogram."""

    WASH = "wash"
    DRY = "dry"
    FOLD = "fold"
    COMBO = "combo"

    @classmethod
    def parse(cls, value: str) -> "ServiceCategory":
        """Normalise user input into a category.

        Args:
            value: Raw category text, any case, surrounding whitespace allowed.

        Returns:
            The matching category.

        Raises:
            InvalidCategoryError: If the text names no known service.
        """

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as e:
            raise InvalidCategoryError(str(value)) from e


class FeeSchedule(BaseModel):
    """Per-kilogram rates for each service category."""

    model_config = ConfigDict(frozen=True)

    wash_rate: float = Field(default=20.0, ge=0, description="Wash rate per kg")
    dry_rate: float = Field(default=10.0, ge=0, description="Dry rate per kg")
    fold_rate: float = Field(default=15.0, ge=0, description="Fold rate per kg")
    combo_rate: float = Field(
        default=40.0, ge=0, description="All-in-one wash, dry and fold rate per kg"
    )

    def is_valid_category(self, category: str) -> bool:
        try:
            ServiceCategory.parse(category)
        except InvalidCategoryError:
            return False
        return True

    def rate_for(self, category: str) -> float:
        """Return the rate for a category, or 0 when the category is unknown."""

        try:
            service = ServiceCategory.parse(category)
        except InvalidCategoryError:
            return 0.0
        return self.rates()[service]

    def rates(self) -> dict[ServiceCategory, float]:
        return {
            ServiceCategory.WASH: self.wash_rate,
            ServiceCategory.DRY: self.dry_rate,
            ServiceCategory.FOLD: self.fold_rate,
            ServiceCategory.COMBO: self.combo_rate,
        }

    def compute_fee(self, weight_kg: float, category: str) -> float:
        """Compute the fee for a load of laundry.

        Unknown categories are billed at 0 rather than rejected, so callers
        must validate with ``is_valid_category`` first.

        Args:
            weight_kg: Weight of the load in kilograms.
            category: Service category name.

        Returns:
            ``weight_kg`` multiplied by the category rate.
        """

        return weight_kg * self.rate_for(category)
