"""Live price synchronisation.

Keeps displayed prices consistent with the backend by explicit cache
invalidation: every committed change that can move a price arrives as an
event, and the affected cached quotes are dropped.  The next read
recomputes.  Stored products and variations are never written here.

Invalidation scope:
- RateChanged, MakingChargesChanged, GstRateChanged: everything
  (a rate change touches every product of that metal, and there is no
  per-metal key)
- VariationsChanged: only that product's quotes
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence

from jpe.application.dto import PriceQuoteDTO
from jpe.application.quote_price import QuotePriceHandler
from jpe.domain.events import (
    GstRateChanged,
    MakingChargesChanged,
    PriceEvent,
    RateChanged,
    VariationsChanged,
)

logger = logging.getLogger(__name__)

CacheKey = tuple[str, tuple[tuple[str, tuple[str, ...]], ...]]
Subscribe = Callable[[Callable[[PriceEvent], None]], Callable[[], None]]


def _cache_key(product_id: str, selections: Mapping[str, Sequence[str]] | None) -> CacheKey:
    frozen = tuple(
        sorted(
            (group, tuple(sorted([ids] if isinstance(ids, str) else ids)))
            for group, ids in (selections or {}).items()
        )
    )
    return product_id, frozen


class LiveSyncCoordinator:

    def __init__(self, quote_handler: QuotePriceHandler) -> None:
        self._quote_handler = quote_handler
        self._cache: dict[CacheKey, PriceQuoteDTO] = {}

    def attach(self, subscribe: Subscribe) -> Callable[[], None]:
        """Subscribe to a realtime channel; returns the unsubscribe function."""
        return subscribe(self.on_event)

    def price_for(
        self,
        product_id: str,
        selections: Mapping[str, Sequence[str]] | None = None,
    ) -> PriceQuoteDTO:
        key = _cache_key(product_id, selections)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        # Errors propagate and are not cached: a missing rate must keep
        # blocking the price until it is fixed.
        quote = self._quote_handler.handle(product_id, selections)
        self._cache[key] = quote
        return quote

    def on_event(self, event: PriceEvent) -> None:
        if isinstance(event, (RateChanged, MakingChargesChanged, GstRateChanged)):
            dropped = len(self._cache)
            self._cache.clear()
        elif isinstance(event, VariationsChanged):
            stale = [key for key in self._cache if key[0] == event.product_id]
            for key in stale:
                del self._cache[key]
            dropped = len(stale)
        else:
            raise TypeError(f"Unhandled price event: {event!r}")
        logger.debug("%s invalidated %d cached price(s)", event, dropped)

    @property
    def cached_count(self) -> int:
        return len(self._cache)
