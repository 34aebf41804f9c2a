"""Abstract repository for CategoryMakingCharge records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from jpe.domain.model.making_charge import CategoryMakingCharge


class MakingChargeRepository(ABC):

    @abstractmethod
    def get_by_category(self, category: str) -> CategoryMakingCharge | None:
        """Return the policy row for a category, or None."""

    @abstractmethod
    def list_all(self) -> list[CategoryMakingCharge]:
        """Return every category policy."""

    @abstractmethod
    def save(self, charge: CategoryMakingCharge) -> None:
        """Persist a new or updated category policy."""
