"""JSON-file-backed implementation of MakingChargeRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from jpe.domain.model.making_charge import CategoryMakingCharge
from jpe.domain.repository.making_charge_repository import MakingChargeRepository
from jpe.infrastructure.persistence.json_file import JsonFile


class JsonMakingChargeRepository(MakingChargeRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- MakingChargeRepository interface -------------------------------------

    def get_by_category(self, category: str) -> CategoryMakingCharge | None:
        for raw in self._file.read():
            if raw["category"] == category:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[CategoryMakingCharge]:
        return [self._to_domain(raw) for raw in self._file.read()]

    def save(self, charge: CategoryMakingCharge) -> None:
        with self._file.transaction() as records:
            for i, raw in enumerate(records):
                if raw["category"] == charge.category:
                    records[i] = self._to_raw(charge)
                    break
            else:
                records.append(self._to_raw(charge))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(charge: CategoryMakingCharge) -> dict:
        return {
            "category": charge.category,
            "making_charge_percent": str(charge.making_charge_percent),
            "min_making_charge": str(charge.min_making_charge),
        }

    @staticmethod
    def _to_domain(raw: dict) -> CategoryMakingCharge:
        return CategoryMakingCharge(
            category=raw["category"],
            making_charge_percent=Decimal(str(raw["making_charge_percent"])),
            min_making_charge=Decimal(str(raw.get("min_making_charge") or "0")),
        )
