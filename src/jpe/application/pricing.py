"""Prices a single product line against an explicit gold rate.

Shared by the live price quote and by checkout so both run exactly the
same resolution and calculation.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal

from jpe.domain.exceptions import EntityNotFoundError
from jpe.domain.model.gold_rate import GoldRate
from jpe.domain.model.price import CalculatedPrice
from jpe.domain.model.product import Product
from jpe.domain.model.variation import ProductVariation, VariationDelta
from jpe.domain.repository.product_repository import ProductRepository
from jpe.domain.repository.variation_repository import VariationRepository
from jpe.domain.service.making_charge_policy import MakingChargePolicy
from jpe.domain.service.price_calculator import calculate
from jpe.domain.service.variation_resolver import VariationResolver


@dataclass(frozen=True)
class PricedLine:
    product: Product
    variations: list[ProductVariation]
    delta: VariationDelta
    price: CalculatedPrice


class LinePricer:

    def __init__(
        self,
        product_repo: ProductRepository,
        variation_repo: VariationRepository,
        policy: MakingChargePolicy,
        resolver: VariationResolver | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._variation_repo = variation_repo
        self._policy = policy
        self._resolver = resolver or VariationResolver()

    def price(
        self,
        product_id: str,
        selections: Mapping[str, Sequence[str]],
        rate: GoldRate,
        gst_percent: Decimal,
    ) -> PricedLine:
        product = self._product_repo.get_by_id(product_id)
        if product is None or not product.is_active:
            raise EntityNotFoundError(f"Product not found: '{product_id}'")

        variations = self._variation_repo.list_for_product(product.id)
        delta = self._resolver.resolve(product, variations, selections)
        price = calculate(product, rate, self._policy, delta, gst_percent)
        return PricedLine(product=product, variations=variations, delta=delta, price=price)
