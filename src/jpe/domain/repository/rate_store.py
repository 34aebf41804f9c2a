"""Abstract store for GoldRate records.

Defined in the domain layer so the domain never depends on
infrastructure.  Implementations must keep exactly one current rate
visible to readers at all times.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date
from decimal import Decimal

from jpe.domain.model.gold_rate import GoldRate


class RateStore(ABC):

    @abstractmethod
    def get_current_rate(self) -> GoldRate:
        """Return the current rate.

        Raises ConfigurationError when there is no current rate.
        """

    @abstractmethod
    def holding_current(self) -> AbstractContextManager[GoldRate]:
        """Yield the current rate and keep it current until the block exits.

        A concurrent ``set_new_rate`` waits until the holder is done, so
        whatever the holder commits inside the block was priced at the
        rate that was current at commit time.
        """

    @abstractmethod
    def get_rate_as_of(self, day: date) -> GoldRate | None:
        """Return the rate that was effective on *day*, for reporting."""

    @abstractmethod
    def get_by_id(self, rate_id: int) -> GoldRate | None:
        """Return a rate by its ID, or None if not found."""

    @abstractmethod
    def history(self, since: date) -> list[GoldRate]:
        """Return every rate effective on or after *since*, oldest first."""

    @abstractmethod
    def set_new_rate(
        self,
        rate_22k: Decimal,
        rate_24k: Decimal,
        rate_18k: Decimal | None = None,
        silver_rate: Decimal | None = None,
        source: str = "manual",
        effective_date: date | None = None,
    ) -> GoldRate:
        """Demote the current rate and insert a new current one atomically."""
