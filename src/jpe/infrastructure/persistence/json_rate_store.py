"""JSON-file-backed implementation of RateStore."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

from jpe.domain.exceptions import ConfigurationError
from jpe.domain.model.gold_rate import GoldRate
from jpe.domain.repository.rate_store import RateStore
from jpe.infrastructure.persistence.json_file import JsonFile


class JsonRateStore(RateStore):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- RateStore interface --------------------------------------------------

    def get_current_rate(self) -> GoldRate:
        current = [raw for raw in self._file.read() if raw["is_current"]]
        if not current:
            raise ConfigurationError("No current gold rate")
        if len(current) > 1:
            ids = ", ".join(f"#{raw['id']}" for raw in current)
            raise ConfigurationError(f"Gold rate store is inconsistent: {ids} are all current")
        return self._to_domain(current[0])

    @contextmanager
    def holding_current(self) -> Iterator[GoldRate]:
        # set_new_rate takes the same lock through JsonFile.transaction().
        with self._file.locked():
            yield self.get_current_rate()

    def get_rate_as_of(self, day: date) -> GoldRate | None:
        candidates = [
            self._to_domain(raw)
            for raw in self._file.read()
            if date.fromisoformat(raw["effective_date"]) <= day
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda r: (r.effective_date, r.id))

    def get_by_id(self, rate_id: int) -> GoldRate | None:
        for raw in self._file.read():
            if raw["id"] == rate_id:
                return self._to_domain(raw)
        return None

    def history(self, since: date) -> list[GoldRate]:
        rates = [
            self._to_domain(raw)
            for raw in self._file.read()
            if date.fromisoformat(raw["effective_date"]) >= since
        ]
        return sorted(rates, key=lambda r: (r.effective_date, r.id))

    def set_new_rate(
        self,
        rate_22k: Decimal,
        rate_24k: Decimal,
        rate_18k: Decimal | None = None,
        silver_rate: Decimal | None = None,
        source: str = "manual",
        effective_date: date | None = None,
    ) -> GoldRate:
        # Demote and insert are applied to one in-memory document that
        # replaces the file in a single atomic write.
        with self._file.transaction() as records:
            next_id = max((raw["id"] for raw in records), default=0) + 1
            rate = GoldRate(
                id=next_id,
                rate_22k=rate_22k,
                rate_24k=rate_24k,
                rate_18k=rate_18k,
                silver_rate=silver_rate,
                effective_date=effective_date or date.today(),
                is_current=True,
                source=source,
            )
            for raw in records:
                raw["is_current"] = False
            records.append(self._to_raw(rate))
        return rate

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(rate: GoldRate) -> dict:
        return {
            "id": rate.id,
            "rate_22k": str(rate.rate_22k),
            "rate_24k": str(rate.rate_24k),
            "rate_18k": None if rate.rate_18k is None else str(rate.rate_18k),
            "silver_rate": None if rate.silver_rate is None else str(rate.silver_rate),
            "effective_date": rate.effective_date.isoformat(),
            "is_current": rate.is_current,
            "source": rate.source,
            "created_at": rate.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> GoldRate:
        def optional(key: str) -> Decimal | None:
            value = raw.get(key)
            return None if value is None else Decimal(value)

        return GoldRate(
            id=raw["id"],
            rate_22k=Decimal(raw["rate_22k"]),
            rate_24k=Decimal(raw["rate_24k"]),
            rate_18k=optional("rate_18k"),
            silver_rate=optional("silver_rate"),
            effective_date=date.fromisoformat(raw["effective_date"]),
            is_current=raw["is_current"],
            source=raw.get("source", "manual"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
