"""Abstract repository for ProductVariation records (read-only)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from jpe.domain.model.variation import ProductVariation


class VariationRepository(ABC):

    @abstractmethod
    def list_for_product(self, product_id: str) -> list[ProductVariation]:
        """Return every variation of a product, available or not."""
