"""Application service: Set Making Charge use case."""

from __future__ import annotations

import logging

from jpe.domain.events import EventPublisher, MakingChargesChanged
from jpe.domain.model.making_charge import CategoryMakingCharge
from jpe.domain.model.value_objects import to_decimal
from jpe.domain.repository.making_charge_repository import MakingChargeRepository

logger = logging.getLogger(__name__)


class SetMakingChargeHandler:

    def __init__(
        self,
        charge_repo: MakingChargeRepository,
        publisher: EventPublisher,
    ) -> None:
        self._charge_repo = charge_repo
        self._publisher = publisher

    def handle(self, category: str, percent: str, minimum: str = "0") -> CategoryMakingCharge:
        """Create or update the policy row for *category*."""
        percent_value = to_decimal(percent, "making charge percent")
        minimum_value = to_decimal(minimum, "minimum making charge")

        charge = self._charge_repo.get_by_category(category)
        if charge is None:
            charge = CategoryMakingCharge(
                category=category.strip(),
                making_charge_percent=percent_value,
                min_making_charge=minimum_value,
            )
        else:
            charge.update(percent_value, minimum_value)

        self._charge_repo.save(charge)
        logger.info(
            "making charge for %s set to %s%% (min %s)",
            charge.category, charge.making_charge_percent, charge.min_making_charge,
        )
        self._publisher.publish(MakingChargesChanged(category=charge.category))
        return charge
