"""Order aggregate — the frozen record of a checkout.

The Order is an aggregate root that owns its items.  Every pricing field
on an item is copied at checkout time and never recomputed: later gold
rate or variation changes cannot reach a placed order.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from jpe.domain.exceptions import ValidationError
from jpe.domain.model.gold_rate import GoldRate, MetalType
from jpe.domain.model.price import CalculatedPrice
from jpe.domain.model.product import Product
from jpe.domain.model.value_objects import Money, Quantity
from jpe.domain.model.variation import SelectedVariation, VariationDelta


@dataclass(frozen=True)
class OrderItem:
    """Price snapshot of one cart line at the moment of purchase.

    Frozen: ``unit_price`` and ``total_price`` are what the customer was
    charged, whatever happens to rates or variations afterwards.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    metal_type: MetalType
    weight_grams: Decimal  # includes variation weight adjustments
    gold_rate_applied: Decimal
    making_charges: Money
    diamond_cost: Decimal
    stone_cost: Decimal
    unit_subtotal: Money
    gst: Money
    unit_price: Money
    total_price: Money
    selected_variations: tuple[SelectedVariation, ...] = ()
    variation_price_adjustment: Decimal = Decimal("0")
    variation_weight_adjustment: Decimal = Decimal("0")

    @staticmethod
    def snapshot(
        product: Product,
        quantity: Quantity,
        price: CalculatedPrice,
        delta: VariationDelta,
    ) -> OrderItem:
        return OrderItem(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            metal_type=product.metal_type,
            weight_grams=price.weight_grams,
            gold_rate_applied=price.gold_rate_applied,
            making_charges=price.making_charges,
            diamond_cost=product.diamond_cost,
            stone_cost=product.stone_cost,
            unit_subtotal=price.subtotal,
            gst=price.gst,
            unit_price=price.total,
            total_price=price.total * quantity.value,
            selected_variations=delta.selected,
            variation_price_adjustment=delta.price_delta,
            variation_weight_adjustment=delta.weight_delta,
        )


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_LINE_ITEMS = 50
ORDER_NUMBER_PREFIX = "KRT"


def generate_order_number(now: datetime | None = None, rng: random.Random | None = None) -> str:
    """Build a human-facing order number such as ``KRT26100042``."""
    now = now or datetime.now(timezone.utc)
    rng = rng or random.Random()
    return f"{ORDER_NUMBER_PREFIX}{now:%y%m}{rng.randrange(10000):04d}"


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    order_number: str
    customer_name: str
    gold_rate_id: int
    gold_rate_at_order: Decimal
    items: tuple[OrderItem, ...]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_name: str,
        items: list[OrderItem],
        rate: GoldRate,
        order_number: str | None = None,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        if rate.id is None:
            raise ValidationError("Orders must reference a stored gold rate")

        return Order(
            id=None,
            order_number=order_number or generate_order_number(),
            customer_name=customer_name.strip(),
            gold_rate_id=rate.id,
            gold_rate_at_order=rate.rate_22k,
            items=tuple(items),
        )

    # --- Computed properties --------------------------------------------------

    @property
    def subtotal(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.unit_subtotal * item.quantity.value
        return result

    @property
    def gst_amount(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.gst * item.quantity.value
        return result

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.total_price
        return result
