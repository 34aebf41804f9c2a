"""Application service: Place Order (checkout snapshot) use case.

The price captured in an order is the one computed from the rate that is
current when the order is committed, not the one the customer last saw.
So checkout:

1. reads the current rate itself (never a client-held value),
2. re-resolves and re-prices every cart line exactly once,
3. checks variation stock against the whole cart,
4. re-reads the current rate while holding it, refuses to commit if an
   admin update landed in between, and writes the order and all of its
   items in a single repository call before letting go.

Any failure after the rate read leaves nothing behind and is reported as
a retryable ConcurrencyError.
"""

from __future__ import annotations

import logging
from collections import Counter
from decimal import Decimal

from jpe.application.dto import CartLineSpec, OrderDTO
from jpe.application.pricing import LinePricer
from jpe.application.show_order import to_order_dto
from jpe.application.tax_settings import resolve_gst_percent
from jpe.domain.exceptions import ConcurrencyError, SelectionError, ValidationError
from jpe.domain.model.order import Order, OrderItem
from jpe.domain.model.value_objects import Quantity
from jpe.domain.repository.order_repository import OrderRepository
from jpe.domain.repository.rate_store import RateStore
from jpe.domain.repository.settings_repository import SiteSettingsRepository

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3


class OrderSnapshotWriter:

    def __init__(
        self,
        order_repo: OrderRepository,
        rate_store: RateStore,
        pricer: LinePricer,
        settings_repo: SiteSettingsRepository,
        default_gst_percent: Decimal,
    ) -> None:
        self._order_repo = order_repo
        self._rate_store = rate_store
        self._pricer = pricer
        self._settings_repo = settings_repo
        self._default_gst_percent = default_gst_percent

    def handle(self, customer_name: str, lines: list[CartLineSpec]) -> OrderDTO:
        """Price every cart line at the current rate and persist the snapshot."""
        if not lines:
            raise ValidationError("Order must contain at least one item")

        rate = self._rate_store.get_current_rate()
        gst_percent = resolve_gst_percent(self._settings_repo, self._default_gst_percent)

        items: list[OrderItem] = []
        demand: Counter[str] = Counter()
        available: dict[str, tuple[int, str, str]] = {}
        for spec in lines:
            quantity = Quantity(spec.quantity)
            line = self._pricer.price(spec.product_id, spec.selections, rate, gst_percent)

            stock = {v.id: v.stock_quantity for v in line.variations}
            for selected in line.delta.selected:
                demand[selected.id] += quantity.value
                available[selected.id] = (
                    stock.get(selected.id, 0), selected.label, line.product.name,
                )

            items.append(OrderItem.snapshot(line.product, quantity, line.price, line.delta))

        # The same variation may be picked on several lines of one cart.
        for variation_id, wanted in demand.items():
            in_stock, label, product_name = available[variation_id]
            if in_stock < wanted:
                raise SelectionError(
                    f"Only {in_stock} of '{label}' left for '{product_name}'"
                )

        order = Order.create(customer_name=customer_name, items=items, rate=rate)

        with self._rate_store.holding_current() as committed_rate:
            if committed_rate.id != rate.id:
                raise ConcurrencyError(
                    f"Gold rate changed during checkout (#{rate.id} -> #{committed_rate.id}); "
                    f"please retry"
                )
            try:
                self._order_repo.add(order)
            except OSError as exc:
                raise ConcurrencyError(
                    f"Order could not be saved, nothing was charged: {exc}"
                ) from exc

        logger.info(
            "order %s placed for %s: %d item(s), total %s at gold rate #%s",
            order.order_number, order.customer_name, len(order.items), order.total, rate.id,
        )
        return to_order_dto(order)


def place_order_with_retry(
    writer: OrderSnapshotWriter,
    customer_name: str,
    lines: list[CartLineSpec],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> OrderDTO:
    """Run the whole checkout again, with a fresh rate read, on ConcurrencyError.

    Safe because a failed attempt persists nothing.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    for attempt in range(1, max_attempts):
        try:
            return writer.handle(customer_name, lines)
        except ConcurrencyError as exc:
            logger.warning("checkout attempt %d/%d failed: %s", attempt, max_attempts, exc)
    return writer.handle(customer_name, lines)
