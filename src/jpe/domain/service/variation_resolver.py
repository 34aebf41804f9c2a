"""Domain service: Variation Resolver.

Turns a product's variation records plus the customer's per-group
selections into one effective VariationDelta.

Selections map a group name to the ids picked in that group.  Single
groups take at most one id and fall back to the group's default; multi
groups are exactly what was picked.  Validation happens before any delta
is summed, so an invalid pick never yields a partial price.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from decimal import Decimal

from jpe.domain.exceptions import ConfigurationError, SelectionError
from jpe.domain.model.product import Product
from jpe.domain.model.variation import (
    ProductVariation,
    SelectedVariation,
    SelectionMode,
    VariationDelta,
)

logger = logging.getLogger(__name__)

Selections = Mapping[str, Sequence[str]]


class VariationResolver:

    def resolve(
        self,
        product: Product,
        variations: Sequence[ProductVariation],
        selections: Selections | None = None,
    ) -> VariationDelta:
        selections = {
            group: [ids] if isinstance(ids, str) else list(ids)
            for group, ids in (selections or {}).items()
        }
        own = [v for v in variations if v.product_id == product.id]
        by_id = {v.id: v for v in own}

        groups: dict[str, list[ProductVariation]] = {}
        for variation in own:
            if variation.is_available:
                groups.setdefault(variation.group, []).append(variation)

        unknown_groups = set(selections) - set(groups)
        for group in sorted(unknown_groups):
            if selections[group]:
                raise SelectionError(
                    f"'{product.name}' has no selectable '{group}' options"
                )

        active: list[ProductVariation] = []
        warnings: list[str] = []

        for group, members in groups.items():
            mode = self._group_mode(group, members)
            picked = [
                self._validate_pick(product, group, vid, by_id)
                for vid in selections.get(group, ())
            ]

            if mode is SelectionMode.SINGLE:
                if len(picked) > 1:
                    raise SelectionError(f"Only one '{group}' option can be selected")
                if picked:
                    active.append(picked[0])
                    continue
                default = self._default_for(group, members)
                if default is None:
                    continue
                if not default.in_stock:
                    message = (
                        f"Default '{group}' option {default.id} for '{product.name}' "
                        f"is out of stock and was not applied"
                    )
                    logger.warning(message)
                    warnings.append(message)
                    continue
                active.append(default)
            else:
                seen: set[str] = set()
                for variation in picked:
                    if variation.id in seen:
                        raise SelectionError(
                            f"'{group}' option {variation.id} selected more than once"
                        )
                    seen.add(variation.id)
                    active.append(variation)

        price_delta = sum((v.price_adjustment for v in active), Decimal("0"))
        weight_delta = sum((v.weight_adjustment for v in active), Decimal("0"))

        if product.weight_grams + weight_delta < 0:
            message = (
                f"Variations reduce '{product.name}' below zero weight "
                f"({product.weight_grams} g {weight_delta:+} g); weight clamped to 0"
            )
            logger.warning(message)
            warnings.append(message)

        return VariationDelta(
            price_delta=price_delta,
            weight_delta=weight_delta,
            selected=tuple(SelectedVariation.of(v) for v in active),
            warnings=tuple(warnings),
        )

    def default_selections(
        self,
        product: Product,
        variations: Sequence[ProductVariation],
    ) -> dict[str, list[str]]:
        """Initial UI state: every available default, per group.

        Multi-group defaults are pre-checked here only; ``resolve`` itself
        never applies them implicitly.
        """
        result: dict[str, list[str]] = {}
        for variation in variations:
            if variation.product_id == product.id and variation.is_default and variation.purchasable:
                result.setdefault(variation.group, []).append(variation.id)
        return result

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _group_mode(group: str, members: list[ProductVariation]) -> SelectionMode:
        modes = {v.mode for v in members}
        if len(modes) > 1:
            raise ConfigurationError(f"Variation group '{group}' mixes single and multi selection")
        return modes.pop()

    @staticmethod
    def _default_for(group: str, members: list[ProductVariation]) -> ProductVariation | None:
        defaults = [v for v in members if v.is_default]
        if len(defaults) > 1:
            raise ConfigurationError(
                f"Variation group '{group}' has {len(defaults)} defaults; expected at most one"
            )
        return defaults[0] if defaults else None

    @staticmethod
    def _validate_pick(
        product: Product,
        group: str,
        variation_id: str,
        by_id: dict[str, ProductVariation],
    ) -> ProductVariation:
        variation = by_id.get(variation_id)
        if variation is None:
            raise SelectionError(f"Unknown option {variation_id!r} for '{product.name}'")
        if variation.group != group:
            raise SelectionError(
                f"Option {variation_id!r} belongs to '{variation.group}', not '{group}'"
            )
        if not variation.is_available:
            raise SelectionError(f"Option '{variation.label}' is not available")
        if not variation.in_stock:
            raise SelectionError(f"Option '{variation.label}' is out of stock")
        return variation
