"""Product aggregate.

Products are owned by the catalog admin.  The pricing engine only reads
them: a gold-rate change never rewrites a product.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from jpe.domain.exceptions import ValidationError
from jpe.domain.model.gold_rate import MetalType


@dataclass(frozen=True)
class Product:
    """A piece of jewellery as far as pricing is concerned.

    ``making_charge_percent`` is an optional override of the category
    policy; ``None`` means "use the category".
    """

    id: str
    name: str
    weight_grams: Decimal
    metal_type: MetalType
    category: str
    diamond_cost: Decimal = Decimal("0")
    stone_cost: Decimal = Decimal("0")
    making_charge_percent: Decimal | None = None
    is_active: bool = True

    def __post_init__(self) -> None:
        if self.weight_grams < 0:
            raise ValidationError(f"Product weight cannot be negative, got {self.weight_grams}")
        if self.diamond_cost < 0 or self.stone_cost < 0:
            raise ValidationError("Diamond and stone costs cannot be negative")
