"""Change notifications that affect displayed prices.

Published on the realtime channel after the change is committed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateChanged:
    rate_id: int


@dataclass(frozen=True)
class VariationsChanged:
    product_id: str


@dataclass(frozen=True)
class MakingChargesChanged:
    category: str


@dataclass(frozen=True)
class GstRateChanged:
    pass


PriceEvent = RateChanged | VariationsChanged | MakingChargesChanged | GstRateChanged


class EventPublisher(ABC):

    @abstractmethod
    def publish(self, event: PriceEvent) -> None:
        """Deliver *event* to every subscriber."""
