"""Product variations and the delta they contribute to a price.

A variation record is a tagged union on ``variation_type``: each type
carries only the fields it needs (a size has a size value, a metal finish
has a metal, an add-on has a label).  Every type shares the pricing
fields the resolver works with.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import ClassVar

from jpe.domain.exceptions import ValidationError
from jpe.domain.model.gold_rate import MetalType


class SelectionMode(Enum):
    SINGLE = "single"
    MULTI = "multi"


class VariationType(Enum):
    SIZE = "size"
    METAL_TYPE = "metal_type"
    GEMSTONE_QUALITY = "gemstone_quality"
    CARAT_WEIGHT = "carat_weight"
    CERTIFICATE = "certificate"
    CUSTOM = "custom"


@dataclass(frozen=True)
class ProductVariation:
    """Fields common to every variation type.

    ``variation_group`` and ``selection_mode`` may be absent on a record;
    the per-type defaults then apply (see ``group`` and ``mode``).
    """

    variation_type: ClassVar[VariationType]
    default_group: ClassVar[str]
    default_mode: ClassVar[SelectionMode] = SelectionMode.SINGLE

    id: str
    product_id: str
    price_adjustment: Decimal = Decimal("0")
    weight_adjustment: Decimal = Decimal("0")
    is_available: bool = True
    is_default: bool = False
    stock_quantity: int = 0
    variation_group: str | None = None
    selection_mode: SelectionMode | None = None
    sku_suffix: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("Variation id is required")
        if not isinstance(self.price_adjustment, Decimal) or not isinstance(
            self.weight_adjustment, Decimal
        ):
            raise ValidationError(f"Variation {self.id} adjustments must be Decimals")

    @property
    def group(self) -> str:
        if self.variation_group and self.variation_group.strip():
            return self.variation_group.strip()
        return self.default_group

    @property
    def mode(self) -> SelectionMode:
        return self.selection_mode or self.default_mode

    @property
    def in_stock(self) -> bool:
        return self.stock_quantity > 0

    @property
    def purchasable(self) -> bool:
        return self.is_available and self.in_stock

    @property
    def label(self) -> str:
        return self.id


@dataclass(frozen=True)
class SizeVariation(ProductVariation):
    variation_type = VariationType.SIZE
    default_group = "Size"

    size_value: str = ""
    size_label: str | None = None

    @property
    def label(self) -> str:
        if self.size_label:
            return f"{self.size_label} {self.size_value}".strip()
        return self.size_value or self.id


@dataclass(frozen=True)
class MetalFinishVariation(ProductVariation):
    variation_type = VariationType.METAL_TYPE
    default_group = "Metal"

    metal_type: MetalType | None = None
    metal_label: str | None = None

    @property
    def label(self) -> str:
        if self.metal_label:
            return self.metal_label
        return self.metal_type.value if self.metal_type else self.id


@dataclass(frozen=True)
class GemstoneGradeVariation(ProductVariation):
    variation_type = VariationType.GEMSTONE_QUALITY
    default_group = "Gemstone Quality"

    grade: str = ""

    @property
    def label(self) -> str:
        return self.grade or self.id


@dataclass(frozen=True)
class CaratWeightVariation(ProductVariation):
    variation_type = VariationType.CARAT_WEIGHT
    default_group = "Total Carat Weight"

    carat: str = ""

    @property
    def label(self) -> str:
        return self.carat or self.id


@dataclass(frozen=True)
class CertificateVariation(ProductVariation):
    variation_type = VariationType.CERTIFICATE
    default_group = "Add Certificate"

    certificate: str = ""

    @property
    def label(self) -> str:
        return self.certificate or self.id


@dataclass(frozen=True)
class AddOnVariation(ProductVariation):
    variation_type = VariationType.CUSTOM
    default_group = "Add Ons"
    default_mode = SelectionMode.MULTI

    addon: str = ""

    @property
    def label(self) -> str:
        return self.addon or self.id


# ---------------------------------------------------------------------------
# Resolution result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SelectedVariation:
    """What an active variation contributed, copied for order snapshots."""

    id: str
    group: str
    variation_type: VariationType
    label: str
    price_adjustment: Decimal
    weight_adjustment: Decimal

    @staticmethod
    def of(variation: ProductVariation) -> SelectedVariation:
        return SelectedVariation(
            id=variation.id,
            group=variation.group,
            variation_type=variation.variation_type,
            label=variation.label,
            price_adjustment=variation.price_adjustment,
            weight_adjustment=variation.weight_adjustment,
        )


@dataclass(frozen=True)
class VariationDelta:
    """Combined effect of all active variations on one product."""

    price_delta: Decimal = Decimal("0")
    weight_delta: Decimal = Decimal("0")
    selected: tuple[SelectedVariation, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def selected_ids(self) -> tuple[str, ...]:
        return tuple(s.id for s in self.selected)

    @staticmethod
    def none() -> VariationDelta:
        return VariationDelta()
