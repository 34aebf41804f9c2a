"""Application service: Set Gold Rate use case.

Stores a new current rate and, only once it is committed, tells every
listener that displayed prices are stale.  Products are not touched:
their prices are derived, not stored.
"""

from __future__ import annotations

import logging
from datetime import date

from jpe.domain.events import EventPublisher, RateChanged
from jpe.domain.model.gold_rate import GoldRate
from jpe.domain.model.value_objects import to_decimal
from jpe.domain.repository.rate_store import RateStore

logger = logging.getLogger(__name__)


class SetGoldRateHandler:

    def __init__(self, rate_store: RateStore, publisher: EventPublisher) -> None:
        self._rate_store = rate_store
        self._publisher = publisher

    def handle(
        self,
        rate_22k: str,
        rate_24k: str,
        rate_18k: str | None = None,
        silver_rate: str | None = None,
        source: str = "manual",
        effective_date: date | None = None,
    ) -> GoldRate:
        rate = self._rate_store.set_new_rate(
            rate_22k=to_decimal(rate_22k, "22k rate"),
            rate_24k=to_decimal(rate_24k, "24k rate"),
            rate_18k=to_decimal(rate_18k, "18k rate") if rate_18k is not None else None,
            silver_rate=(
                to_decimal(silver_rate, "silver rate") if silver_rate is not None else None
            ),
            source=source,
            effective_date=effective_date,
        )
        logger.info(
            "gold rate #%s is now current (22k=%s, 24k=%s, source=%s)",
            rate.id, rate.rate_22k, rate.rate_24k, rate.source,
        )
        self._publisher.publish(RateChanged(rate_id=rate.id))  # type: ignore[arg-type]
        return rate
