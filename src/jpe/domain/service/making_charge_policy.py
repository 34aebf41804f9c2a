"""Domain service: Making Charge Policy.

Resolves the making charge percentage and minimum floor for a product
from, in order: the product's own override, its category's policy row,
and the system default.
"""

from __future__ import annotations

from decimal import Decimal

from jpe.domain.exceptions import ConfigurationError
from jpe.domain.model.product import Product
from jpe.domain.repository.making_charge_repository import MakingChargeRepository

DEFAULT_MAKING_CHARGE_PERCENT = Decimal("12")


class MakingChargePolicy:

    def __init__(
        self,
        charge_repo: MakingChargeRepository,
        default_percent: Decimal | None = DEFAULT_MAKING_CHARGE_PERCENT,
    ) -> None:
        self._charge_repo = charge_repo
        self._default_percent = default_percent

    def resolve_percent(self, product: Product) -> Decimal:
        """Return the making charge percentage for *product*.

        An explicit override of 0 is honoured.  Falling through to 0%
        because nothing is configured would under-charge, so a category
        with no row and no system default is an error.
        """
        if product.making_charge_percent is not None:
            percent = product.making_charge_percent
        else:
            charge = self._charge_repo.get_by_category(product.category)
            if charge is not None:
                percent = charge.making_charge_percent
            elif self._default_percent is not None:
                percent = self._default_percent
            else:
                raise ConfigurationError(
                    f"No making charge policy for category '{product.category}' "
                    f"and no system default"
                )

        if percent < 0:
            raise ConfigurationError(
                f"Making charge percent for '{product.id}' is negative ({percent})"
            )
        return percent

    def resolve_floor(self, product: Product) -> Decimal:
        """Return the minimum making charge for *product*'s category (0 if none)."""
        charge = self._charge_repo.get_by_category(product.category)
        if charge is None:
            return Decimal("0")
        return charge.min_making_charge
