"""GoldRate record and the metal purities it prices.

Rates are append-only: a new admin update inserts a new current record and
demotes the previous one.  Nothing else about a stored rate ever changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum

from jpe.domain.exceptions import ConfigurationError, ValidationError


class MetalType(Enum):
    GOLD_22K = "gold_22k"
    GOLD_24K = "gold_24k"
    GOLD_18K = "gold_18k"
    SILVER = "silver"
    PLATINUM = "platinum"


@dataclass(frozen=True)
class GoldRate:
    """Per-gram metal rates effective from ``effective_date``.

    Invariants:
    - ``rate_22k`` and ``rate_24k`` are always positive
    - optional rates, when present, are positive
    """

    id: int | None
    rate_22k: Decimal
    rate_24k: Decimal
    rate_18k: Decimal | None = None
    silver_rate: Decimal | None = None
    effective_date: date = field(default_factory=date.today)
    is_current: bool = False
    source: str = "manual"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        for name in ("rate_22k", "rate_24k"):
            value = getattr(self, name)
            if not isinstance(value, Decimal) or value <= 0:
                raise ValidationError(f"{name} must be a positive amount, got {value!r}")
        for name in ("rate_18k", "silver_rate"):
            value = getattr(self, name)
            if value is not None and (not isinstance(value, Decimal) or value <= 0):
                raise ValidationError(f"{name} must be positive when given, got {value!r}")

    def rate_for(self, metal: MetalType) -> Decimal:
        """Return the per-gram rate for *metal*.

        Never substitutes the rate of a different metal or purity: a
        missing field is a configuration problem, not a pricing default.
        """
        if metal is MetalType.GOLD_22K:
            return self.rate_22k
        if metal is MetalType.GOLD_24K:
            return self.rate_24k
        if metal is MetalType.GOLD_18K:
            if self.rate_18k is None:
                raise ConfigurationError(
                    f"Gold rate #{self.id} has no 18k rate; 18k products cannot be priced"
                )
            return self.rate_18k
        if metal is MetalType.SILVER:
            if self.silver_rate is None:
                raise ConfigurationError(
                    f"Gold rate #{self.id} has no silver rate; silver products cannot be priced"
                )
            return self.silver_rate
        raise ConfigurationError(f"Unsupported metal for rate pricing: {metal.value}")

    def demoted(self) -> GoldRate:
        return replace(self, is_current=False)
