"""Application service: Quote Price use case (query).

Computes the price shown on product and cart pages from the current
rate.  The quote is ephemeral: checkout never trusts it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal

from jpe.application.dto import PriceQuoteDTO
from jpe.application.pricing import LinePricer, PricedLine
from jpe.application.tax_settings import resolve_gst_percent
from jpe.domain.model.gold_rate import GoldRate
from jpe.domain.repository.rate_store import RateStore
from jpe.domain.repository.settings_repository import SiteSettingsRepository


class QuotePriceHandler:

    def __init__(
        self,
        pricer: LinePricer,
        rate_store: RateStore,
        settings_repo: SiteSettingsRepository,
        default_gst_percent: Decimal,
    ) -> None:
        self._pricer = pricer
        self._rate_store = rate_store
        self._settings_repo = settings_repo
        self._default_gst_percent = default_gst_percent

    def handle(
        self,
        product_id: str,
        selections: Mapping[str, Sequence[str]] | None = None,
    ) -> PriceQuoteDTO:
        """Price *product_id* with *selections* at the current rate.

        Raises ConfigurationError when pricing is unavailable; callers
        must disable purchase rather than show a zero or stale price.
        """
        rate = self._rate_store.get_current_rate()
        gst_percent = resolve_gst_percent(self._settings_repo, self._default_gst_percent)
        line = self._pricer.price(product_id, selections or {}, rate, gst_percent)
        return self._to_dto(line, rate)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(line: PricedLine, rate: GoldRate) -> PriceQuoteDTO:
        price = line.price
        return PriceQuoteDTO(
            product_id=line.product.id,
            product_name=line.product.name,
            gold_rate_id=rate.id,  # type: ignore[arg-type]
            weight_grams=str(price.weight_grams),
            gold_rate_applied=str(price.gold_rate_applied),
            gold_value=str(price.gold_value),
            making_charges=str(price.making_charges),
            subtotal=str(price.subtotal),
            gst=str(price.gst),
            total=str(price.total),
            selected=[f"{s.group}: {s.label}" for s in line.delta.selected],
            warnings=list(line.delta.warnings),
        )
