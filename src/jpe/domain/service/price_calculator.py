"""Domain service: Price Calculator.

``calculate`` is a pure function of its inputs.  All arithmetic is done
on unrounded Decimals and every money field is rounded half-up to whole
rupees exactly once, at the end.  Rounding step by step would let the
same inputs drift by a rupee depending on evaluation order.
"""

from __future__ import annotations

from decimal import Decimal

from jpe.domain.exceptions import ConfigurationError
from jpe.domain.model.gold_rate import GoldRate
from jpe.domain.model.price import CalculatedPrice
from jpe.domain.model.product import Product
from jpe.domain.model.value_objects import Money, round_half_up
from jpe.domain.model.variation import VariationDelta
from jpe.domain.service.making_charge_policy import MakingChargePolicy

HUNDRED = Decimal("100")
ZERO = Decimal("0")


def calculate(
    product: Product,
    rate: GoldRate,
    policy: MakingChargePolicy,
    delta: VariationDelta,
    gst_percent: Decimal,
) -> CalculatedPrice:
    """Price one unit of *product* with the given variations applied.

    Steps:
    1. Pick the per-gram rate for the product's metal.
    2. Effective weight = base weight + variation weight, never below 0.
    3. Gold value = effective weight x rate.
    4. Making = max(gold value x percent, category floor).
    5. Subtotal = gold + making + diamond + stone + variation price.
    6. GST on the subtotal, total = subtotal + GST.
    7. Round once.
    """
    if gst_percent is None or gst_percent < 0:
        raise ConfigurationError(f"Invalid GST rate: {gst_percent!r}")

    rate_applied = rate.rate_for(product.metal_type)

    effective_weight = max(ZERO, product.weight_grams + delta.weight_delta)
    gold_value = effective_weight * rate_applied

    percent = policy.resolve_percent(product)
    floor = policy.resolve_floor(product)
    making = max(gold_value * percent / HUNDRED, floor)

    subtotal = (
        gold_value
        + making
        + product.diamond_cost
        + product.stone_cost
        + delta.price_delta
    )
    if subtotal < 0:
        raise ConfigurationError(
            f"Variation discounts push '{product.name}' below zero ({subtotal})"
        )

    gst = subtotal * gst_percent / HUNDRED
    total = subtotal + gst

    return CalculatedPrice(
        gold_value=Money(round_half_up(gold_value)),
        making_charges=Money(round_half_up(making)),
        subtotal=Money(round_half_up(subtotal)),
        gst=Money(round_half_up(gst)),
        total=Money(round_half_up(total)),
        gold_rate_applied=rate_applied,
        weight_grams=effective_weight,
    )
