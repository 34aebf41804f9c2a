"""Application service: Show Gold Rate queries."""

from __future__ import annotations

from datetime import date, timedelta

from jpe.domain.model.gold_rate import GoldRate
from jpe.domain.repository.rate_store import RateStore


class ShowGoldRateHandler:

    def __init__(self, rate_store: RateStore) -> None:
        self._rate_store = rate_store

    def current(self) -> GoldRate:
        return self._rate_store.get_current_rate()

    def as_of(self, day: date) -> GoldRate | None:
        """Rate effective on *day*; for reports, never for live pricing."""
        return self._rate_store.get_rate_as_of(day)

    def history(self, days: int = 30, today: date | None = None) -> list[GoldRate]:
        today = today or date.today()
        return self._rate_store.history(today - timedelta(days=days))
