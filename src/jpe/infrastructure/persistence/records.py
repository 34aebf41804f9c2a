"""Validation of catalog rows written by the admin CRUD.

Products and variations arrive in the backend's row shape.  Variation
rows are a discriminated union on ``variation_type``; each model maps to
its own domain dataclass.  Gemstone, carat, certificate and add-on rows
may carry their label in the generic ``size_label``/``size_value``
columns, which is how the storefront stores them.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Literal, Union

import pydantic
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from jpe.domain.exceptions import ConfigurationError
from jpe.domain.model.gold_rate import MetalType
from jpe.domain.model.product import Product
from jpe.domain.model.variation import (
    AddOnVariation,
    CaratWeightVariation,
    CertificateVariation,
    GemstoneGradeVariation,
    MetalFinishVariation,
    ProductVariation,
    SelectionMode,
    SizeVariation,
)


def _label(name: str):
    return Field(default=None, validation_alias=AliasChoices(name, "size_label", "size_value"))


class ProductRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    weight_grams: Decimal = Field(ge=0)
    metal_type: MetalType
    category: str
    diamond_cost: Decimal = Field(default=Decimal("0"), ge=0)
    stone_cost: Decimal = Field(default=Decimal("0"), ge=0)
    making_charge_percent: Decimal | None = None
    is_active: bool = True

    @field_validator("diamond_cost", "stone_cost", mode="before")
    @classmethod
    def _null_cost_is_zero(cls, value):
        return 0 if value is None else value

    def to_domain(self) -> Product:
        return Product(
            id=self.id,
            name=self.name,
            weight_grams=self.weight_grams,
            metal_type=self.metal_type,
            category=self.category,
            diamond_cost=self.diamond_cost,
            stone_cost=self.stone_cost,
            making_charge_percent=self.making_charge_percent,
            is_active=self.is_active,
        )


class _VariationRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    product_id: str
    variation_group: str | None = None
    selection_mode: SelectionMode | None = None
    price_adjustment: Decimal = Decimal("0")
    weight_adjustment: Decimal = Decimal("0")
    is_available: bool = True
    is_default: bool = False
    stock_quantity: int = 0
    sku_suffix: str | None = None

    @field_validator("price_adjustment", "weight_adjustment", "stock_quantity", mode="before")
    @classmethod
    def _null_is_zero(cls, value):
        return 0 if value is None else value

    def _common(self) -> dict:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "variation_group": self.variation_group,
            "selection_mode": self.selection_mode,
            "price_adjustment": self.price_adjustment,
            "weight_adjustment": self.weight_adjustment,
            "is_available": self.is_available,
            "is_default": self.is_default,
            "stock_quantity": self.stock_quantity,
            "sku_suffix": self.sku_suffix,
        }


class SizeRecord(_VariationRecord):
    variation_type: Literal["size"]
    size_value: str | None = None
    size_label: str | None = None

    def to_domain(self) -> ProductVariation:
        return SizeVariation(
            **self._common(), size_value=self.size_value or "", size_label=self.size_label
        )


class MetalFinishRecord(_VariationRecord):
    variation_type: Literal["metal_type"]
    metal_type: MetalType | None = None
    metal_label: str | None = None

    def to_domain(self) -> ProductVariation:
        return MetalFinishVariation(
            **self._common(), metal_type=self.metal_type, metal_label=self.metal_label
        )


class GemstoneGradeRecord(_VariationRecord):
    variation_type: Literal["gemstone_quality"]
    grade: str | None = _label("grade")

    def to_domain(self) -> ProductVariation:
        return GemstoneGradeVariation(**self._common(), grade=self.grade or "")


class CaratWeightRecord(_VariationRecord):
    variation_type: Literal["carat_weight"]
    carat: str | None = _label("carat")

    def to_domain(self) -> ProductVariation:
        return CaratWeightVariation(**self._common(), carat=self.carat or "")


class CertificateRecord(_VariationRecord):
    variation_type: Literal["certificate"]
    certificate: str | None = _label("certificate")

    def to_domain(self) -> ProductVariation:
        return CertificateVariation(**self._common(), certificate=self.certificate or "")


class AddOnRecord(_VariationRecord):
    variation_type: Literal["custom"]
    addon: str | None = _label("addon")

    def to_domain(self) -> ProductVariation:
        return AddOnVariation(**self._common(), addon=self.addon or "")


VariationRecord = Annotated[
    Union[
        SizeRecord,
        MetalFinishRecord,
        GemstoneGradeRecord,
        CaratWeightRecord,
        CertificateRecord,
        AddOnRecord,
    ],
    Field(discriminator="variation_type"),
]

_products = TypeAdapter(list[ProductRecord])
_variations = TypeAdapter(list[VariationRecord])


def parse_products(raw: list[dict]) -> list[Product]:
    try:
        return [record.to_domain() for record in _products.validate_python(raw)]
    except pydantic.ValidationError as exc:
        raise ConfigurationError(f"Invalid product record: {exc}") from exc


def parse_variations(raw: list[dict]) -> list[ProductVariation]:
    try:
        return [record.to_domain() for record in _variations.validate_python(raw)]
    except pydantic.ValidationError as exc:
        raise ConfigurationError(f"Invalid variation record: {exc}") from exc
