"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from jpe.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order together with all of its items.

        Either the order and every item are stored, or nothing is.
        Placed orders are never updated.
        """
