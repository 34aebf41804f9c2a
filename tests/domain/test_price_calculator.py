"""Unit tests for the price calculator."""

from decimal import Decimal

import pytest

from jpe.domain.exceptions import ConfigurationError
from jpe.domain.model.gold_rate import GoldRate, MetalType
from jpe.domain.model.making_charge import CategoryMakingCharge
from jpe.domain.model.product import Product
from jpe.domain.model.value_objects import Money
from jpe.domain.model.variation import VariationDelta
from jpe.domain.service.making_charge_policy import MakingChargePolicy
from jpe.domain.service.price_calculator import calculate
from tests.fakes import FakeMakingChargeRepository

GST = Decimal("3")


def _rate(rate_22k="6000") -> GoldRate:
    return GoldRate(
        id=1, rate_22k=Decimal(rate_22k), rate_24k=Decimal("6545"), is_current=True
    )


def _product(weight="10", metal=MetalType.GOLD_22K, diamond="0", stone="0") -> Product:
    return Product(
        id="ring-1",
        name="Classic Band",
        weight_grams=Decimal(weight),
        metal_type=metal,
        category="rings",
        diamond_cost=Decimal(diamond),
        stone_cost=Decimal(stone),
    )


def _policy() -> MakingChargePolicy:
    repo = FakeMakingChargeRepository([
        CategoryMakingCharge("rings", Decimal("12"), Decimal("500")),
    ])
    return MakingChargePolicy(repo)


def _delta(price="0", weight="0") -> VariationDelta:
    return VariationDelta(price_delta=Decimal(price), weight_delta=Decimal(weight))


# ── Worked examples ──────────────────────────────────────────────────────────


class TestWorkedExamples:

    def test_plain_ring(self):
        price = calculate(_product(), _rate(), _policy(), VariationDelta.none(), GST)
        assert price.gold_value == Money.of("60000")
        assert price.making_charges == Money.of("7200")
        assert price.subtotal == Money.of("67200")
        assert price.gst == Money.of("2016")
        assert price.total == Money.of("69216")
        assert price.gold_rate_applied == Decimal("6000")
        assert price.weight_grams == Decimal("10")

    def test_ring_with_larger_size(self):
        price = calculate(_product(), _rate(), _policy(), _delta("1500", "0.5"), GST)
        assert price.weight_grams == Decimal("10.5")
        assert price.gold_value == Money.of("63000")
        assert price.making_charges == Money.of("7560")
        assert price.subtotal == Money.of("72060")
        assert price.gst == Money.of("2162")
        assert price.total == Money.of("74222")


# ── Properties ───────────────────────────────────────────────────────────────


class TestProperties:

    def test_deterministic(self):
        args = (_product(), _rate(), _policy(), _delta("1500", "0.5"), GST)
        assert calculate(*args) == calculate(*args)

    def test_total_never_decreases_as_rate_rises(self):
        totals = [
            calculate(_product(), _rate(str(r)), _policy(), VariationDelta.none(), GST).total
            for r in range(4000, 8001, 250)
        ]
        assert all(a <= b for a, b in zip(totals, totals[1:]))

    def test_making_never_below_floor(self):
        price = calculate(_product(weight="0.5"), _rate(), _policy(), VariationDelta.none(), GST)
        assert price.gold_value == Money.of("3000")
        assert price.making_charges == Money.of("500")

    def test_weight_clamped_at_zero(self):
        price = calculate(_product(), _rate(), _policy(), _delta("-100", "-12"), GST)
        assert price.weight_grams == Decimal("0")
        assert price.gold_value == Money.zero()
        assert price.making_charges == Money.of("500")
        assert price.subtotal == Money.of("400")
        assert price.total == Money.of("412")

    def test_diamond_and_stone_costs_added(self):
        price = calculate(
            _product(diamond="25000", stone="1800"), _rate(), _policy(),
            VariationDelta.none(), GST,
        )
        assert price.subtotal == Money.of("94000")

    def test_zero_gst(self):
        price = calculate(_product(), _rate(), _policy(), VariationDelta.none(), Decimal("0"))
        assert price.gst == Money.zero()
        assert price.total == price.subtotal

    def test_rounding_happens_once(self):
        # 10.003 g: gold 60018, making 7202.16, gst 2016.6048 -> each rounded at the end
        price = calculate(_product(weight="10.003"), _rate(), _policy(), VariationDelta.none(), GST)
        assert price.making_charges == Money.of("7202")
        assert price.gst == Money.of("2017")
        assert price.total == Money.of("69237")


# ── Configuration errors ─────────────────────────────────────────────────────


class TestConfigurationErrors:

    def test_negative_gst(self):
        with pytest.raises(ConfigurationError, match="Invalid GST"):
            calculate(_product(), _rate(), _policy(), VariationDelta.none(), Decimal("-1"))

    def test_missing_gst(self):
        with pytest.raises(ConfigurationError, match="Invalid GST"):
            calculate(_product(), _rate(), _policy(), VariationDelta.none(), None)

    def test_platinum_product(self):
        with pytest.raises(ConfigurationError, match="Unsupported metal"):
            calculate(
                _product(metal=MetalType.PLATINUM), _rate(), _policy(),
                VariationDelta.none(), GST,
            )

    def test_18k_product_without_18k_rate(self):
        with pytest.raises(ConfigurationError, match="no 18k rate"):
            calculate(
                _product(metal=MetalType.GOLD_18K), _rate(), _policy(),
                VariationDelta.none(), GST,
            )

    def test_discount_below_zero(self):
        with pytest.raises(ConfigurationError, match="below zero"):
            calculate(_product(), _rate(), _policy(), _delta("-90000"), GST)
