"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CartLineSpec:
    """Input: one cart line as submitted at checkout.

    Carries only what the customer chose.  Prices shown in the cart are
    deliberately absent: checkout recomputes everything server-side.
    """

    product_id: str
    quantity: int
    selections: dict[str, tuple[str, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class PriceQuoteDTO:
    """Output: a live price for display, never persisted."""

    product_id: str
    product_name: str
    gold_rate_id: int
    weight_grams: str
    gold_rate_applied: str
    gold_value: str  # formatted, e.g. "₹60,000"
    making_charges: str
    subtotal: str
    gst: str
    total: str
    selected: list[str]
    warnings: list[str]


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single order item as displayed to the user."""

    product_name: str
    quantity: int
    weight_grams: str
    gold_rate_applied: str
    making_charges: str
    unit_price: str
    total_price: str
    variations: list[str]


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    customer_name: str
    gold_rate_at_order: str
    items: list[OrderItemDTO]
    subtotal: str
    gst_amount: str
    total: str
    created_at: str
