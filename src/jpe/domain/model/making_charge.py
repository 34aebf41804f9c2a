"""CategoryMakingCharge: per-category fabrication fee policy."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from jpe.domain.exceptions import ValidationError


@dataclass
class CategoryMakingCharge:
    """Making charge percentage and minimum floor for one category.

    The category is the identity and never changes; the values are
    edited by admins through ``update()``.
    """

    category: str
    making_charge_percent: Decimal
    min_making_charge: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        if not self.category or not self.category.strip():
            raise ValidationError("Category is required")
        self._validate(self.making_charge_percent, self.min_making_charge)

    def update(self, percent: Decimal, minimum: Decimal) -> None:
        self._validate(percent, minimum)
        self.making_charge_percent = percent
        self.min_making_charge = minimum

    @staticmethod
    def _validate(percent: Decimal, minimum: Decimal) -> None:
        if percent < 0:
            raise ValidationError(f"Making charge percent cannot be negative, got {percent}")
        if minimum < 0:
            raise ValidationError(f"Minimum making charge cannot be negative, got {minimum}")
