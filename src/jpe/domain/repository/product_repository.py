"""Abstract repository for the Product catalog.

The engine only reads products; catalog editing happens elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from jpe.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""
