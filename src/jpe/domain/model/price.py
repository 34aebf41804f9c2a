"""CalculatedPrice: the ephemeral result of pricing one product."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from jpe.domain.model.value_objects import Money


@dataclass(frozen=True)
class CalculatedPrice:
    """Price breakdown for one unit of a product.

    Never persisted on its own and has no identity: it is rebuilt from
    its inputs on every read.  Money fields are already rounded to whole
    rupees; ``gold_rate_applied`` and ``weight_grams`` are exact.
    """

    gold_value: Money
    making_charges: Money
    subtotal: Money
    gst: Money
    total: Money
    gold_rate_applied: Decimal
    weight_grams: Decimal
