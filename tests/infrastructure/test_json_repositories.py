"""Tests for the JSON-file-backed repositories, against a temporary directory."""

import json
import threading
from datetime import date
from decimal import Decimal

import pytest

from jpe.domain.exceptions import ConfigurationError
from jpe.domain.model.gold_rate import GoldRate, MetalType
from jpe.domain.model.making_charge import CategoryMakingCharge
from jpe.domain.model.order import Order, OrderItem
from jpe.domain.model.price import CalculatedPrice
from jpe.domain.model.product import Product
from jpe.domain.model.value_objects import Money, Quantity
from jpe.domain.model.variation import (
    AddOnVariation,
    CertificateVariation,
    GemstoneGradeVariation,
    MetalFinishVariation,
    SelectedVariation,
    SelectionMode,
    SizeVariation,
    VariationDelta,
    VariationType,
)
from jpe.infrastructure.persistence.json_catalog_repository import (
    JsonProductRepository,
    JsonVariationRepository,
)
from jpe.infrastructure.persistence.json_file import JsonFile
from jpe.infrastructure.persistence.json_making_charge_repository import (
    JsonMakingChargeRepository,
)
from jpe.infrastructure.persistence.json_order_repository import JsonOrderRepository
from jpe.infrastructure.persistence.json_rate_store import JsonRateStore
from jpe.infrastructure.persistence.json_settings_repository import (
    JsonSiteSettingsRepository,
)
from jpe.infrastructure.persistence.records import parse_variations


# ── JsonFile ─────────────────────────────────────────────────────────────────


class TestJsonFile:

    def test_creates_empty_document(self, tmp_path):
        doc = JsonFile(tmp_path / "nested" / "things.json")
        assert doc.read() == []

    def test_failed_transaction_writes_nothing(self, tmp_path):
        doc = JsonFile(tmp_path / "things.json")
        doc.write([1, 2])
        with pytest.raises(RuntimeError):
            with doc.transaction() as items:
                items.append(3)
                raise RuntimeError("boom")
        assert doc.read() == [1, 2]

    def test_no_temp_file_left_behind(self, tmp_path):
        doc = JsonFile(tmp_path / "things.json")
        with doc.transaction() as items:
            items.append("₹")
        assert [p.name for p in tmp_path.iterdir()] == ["things.json"]
        assert "₹" in (tmp_path / "things.json").read_text(encoding="utf-8")


# ── Rate store ───────────────────────────────────────────────────────────────


class TestJsonRateStore:

    def test_no_rate_yet(self, tmp_path):
        with pytest.raises(ConfigurationError, match="No current gold rate"):
            JsonRateStore(tmp_path / "gold_rates.json").get_current_rate()

    def test_single_current_survives_reload(self, tmp_path):
        path = tmp_path / "gold_rates.json"
        store = JsonRateStore(path)
        store.set_new_rate(Decimal("6000"), Decimal("6545"))
        store.set_new_rate(Decimal("6050.50"), Decimal("6600"), rate_18k=Decimal("4950"))

        reloaded = JsonRateStore(path)
        current = reloaded.get_current_rate()
        assert current.id == 2
        assert current.rate_22k == Decimal("6050.50")
        assert current.rate_18k == Decimal("4950")
        assert current.silver_rate is None
        raw = json.loads(path.read_text(encoding="utf-8"))
        assert [r["is_current"] for r in raw] == [False, True]

    def test_inconsistent_file_is_configuration_error(self, tmp_path):
        path = tmp_path / "gold_rates.json"
        store = JsonRateStore(path)
        store.set_new_rate(Decimal("6000"), Decimal("6545"))
        store.set_new_rate(Decimal("6100"), Decimal("6650"))
        raw = json.loads(path.read_text(encoding="utf-8"))
        for r in raw:
            r["is_current"] = True
        path.write_text(json.dumps(raw), encoding="utf-8")

        with pytest.raises(ConfigurationError, match="inconsistent"):
            store.get_current_rate()

    def test_holding_current_blocks_new_rates(self, tmp_path):
        path = tmp_path / "gold_rates.json"
        store = JsonRateStore(path)
        store.set_new_rate(Decimal("6000"), Decimal("6545"))
        admin = threading.Thread(
            target=JsonRateStore(path).set_new_rate, args=(Decimal("7000"), Decimal("7600")),
        )

        with store.holding_current() as held:
            admin.start()
            admin.join(timeout=0.2)
            assert admin.is_alive()
            assert store.get_current_rate().id == held.id == 1
        admin.join(timeout=5)

        assert not admin.is_alive()
        assert store.get_current_rate().id == 2

    def test_as_of_history_and_lookup(self, tmp_path):
        store = JsonRateStore(tmp_path / "gold_rates.json")
        store.set_new_rate(Decimal("5800"), Decimal("6300"), effective_date=date(2026, 9, 1))
        store.set_new_rate(Decimal("5900"), Decimal("6400"), effective_date=date(2026, 9, 20))
        store.set_new_rate(Decimal("6000"), Decimal("6545"), effective_date=date(2026, 10, 5))

        assert store.get_rate_as_of(date(2026, 10, 1)).rate_22k == Decimal("5900")
        assert store.get_rate_as_of(date(2026, 8, 1)) is None
        assert [r.id for r in store.history(date(2026, 9, 15))] == [2, 3]
        assert store.get_by_id(1).rate_22k == Decimal("5800")
        assert store.get_by_id(99) is None


# ── Making charges and settings ──────────────────────────────────────────────


class TestJsonMakingChargeRepository:

    def test_upsert(self, tmp_path):
        repo = JsonMakingChargeRepository(tmp_path / "making_charges.json")
        repo.save(CategoryMakingCharge("rings", Decimal("12"), Decimal("500")))
        repo.save(CategoryMakingCharge("rings", Decimal("14"), Decimal("600")))
        repo.save(CategoryMakingCharge("chains", Decimal("8")))

        assert len(repo.list_all()) == 2
        rings = repo.get_by_category("rings")
        assert rings.making_charge_percent == Decimal("14")
        assert rings.min_making_charge == Decimal("600")
        assert repo.get_by_category("bangles") is None


class TestJsonSiteSettingsRepository:

    def test_unset_then_set(self, tmp_path):
        path = tmp_path / "site_settings.json"
        repo = JsonSiteSettingsRepository(path)
        assert repo.get_gst_rate_percent() is None
        repo.set_gst_rate_percent(Decimal("3"))
        assert JsonSiteSettingsRepository(path).get_gst_rate_percent() == Decimal("3")


# ── Catalog ──────────────────────────────────────────────────────────────────


def _write(path, rows):
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


class TestJsonCatalog:

    def test_products(self, tmp_path):
        path = _write(tmp_path / "products.json", [
            {
                "id": "ring-1", "name": "Classic Band", "weight_grams": "10",
                "metal_type": "gold_22k", "category": "rings",
                "diamond_cost": None, "stone_cost": 0, "making_charge_percent": None,
                "image_url": "ignored.jpg",
            },
        ])
        product = JsonProductRepository(path).get_by_id("ring-1")
        assert product == Product(
            id="ring-1", name="Classic Band", weight_grams=Decimal("10"),
            metal_type=MetalType.GOLD_22K, category="rings",
        )

    def test_invalid_product_is_configuration_error(self, tmp_path):
        path = _write(tmp_path / "products.json", [
            {"id": "x", "name": "Bad", "weight_grams": -1, "metal_type": "gold_22k",
             "category": "rings"},
        ])
        with pytest.raises(ConfigurationError, match="Invalid product record"):
            JsonProductRepository(path).list_all()

    def test_variations_are_typed_per_record(self, tmp_path):
        path = _write(tmp_path / "product_variations.json", [
            {"id": "s-12", "product_id": "ring-1", "variation_type": "size",
             "size_value": "12", "is_default": True, "stock_quantity": 4},
            {"id": "m-rose", "product_id": "ring-1", "variation_type": "metal_type",
             "metal_type": "gold_18k", "metal_label": "Rose Gold",
             "price_adjustment": "-2000", "stock_quantity": 2},
            {"id": "g-vs1", "product_id": "ring-1", "variation_type": "gemstone_quality",
             "size_label": "VS1", "price_adjustment": 4000, "stock_quantity": 1},
            {"id": "c-igi", "product_id": "ring-1", "variation_type": "certificate",
             "size_value": "IGI", "price_adjustment": 1200, "stock_quantity": 9},
            {"id": "a-box", "product_id": "ring-1", "variation_type": "custom",
             "addon": "Gift Box", "price_adjustment": 300, "weight_adjustment": None,
             "stock_quantity": 50, "selection_mode": "multi"},
            {"id": "s-99", "product_id": "ring-2", "variation_type": "size",
             "size_value": "9", "stock_quantity": 1},
        ])
        size, metal, grade, cert, addon = JsonVariationRepository(path).list_for_product("ring-1")

        assert isinstance(size, SizeVariation) and size.label == "12" and size.is_default
        assert isinstance(metal, MetalFinishVariation)
        assert metal.metal_type is MetalType.GOLD_18K
        assert metal.label == "Rose Gold"
        assert metal.price_adjustment == Decimal("-2000")
        assert isinstance(grade, GemstoneGradeVariation) and grade.label == "VS1"
        assert isinstance(cert, CertificateVariation) and cert.group == "Add Certificate"
        assert isinstance(addon, AddOnVariation)
        assert addon.mode is SelectionMode.MULTI
        assert addon.weight_adjustment == Decimal("0")

    @pytest.mark.parametrize("variation_type", list(VariationType))
    def test_every_variation_type_has_a_record(self, variation_type):
        rows = [{"id": "v-1", "product_id": "ring-1", "variation_type": variation_type.value}]
        (variation,) = parse_variations(rows)
        assert variation.variation_type is variation_type

    def test_unknown_variation_type_is_configuration_error(self, tmp_path):
        path = _write(tmp_path / "product_variations.json", [
            {"id": "e-1", "product_id": "ring-1", "variation_type": "engraving"},
        ])
        with pytest.raises(ConfigurationError, match="Invalid variation record"):
            JsonVariationRepository(path).list_for_product("ring-1")


# ── Orders ───────────────────────────────────────────────────────────────────


def _order() -> Order:
    product = Product(
        id="ring-1", name="Classic Band", weight_grams=Decimal("10"),
        metal_type=MetalType.GOLD_22K, category="rings",
    )
    price = CalculatedPrice(
        gold_value=Money.of("63000"),
        making_charges=Money.of("7560"),
        subtotal=Money.of("72060"),
        gst=Money.of("2162"),
        total=Money.of("74222"),
        gold_rate_applied=Decimal("6000"),
        weight_grams=Decimal("10.5"),
    )
    size = SizeVariation(
        id="s-14", product_id="ring-1", size_value="14", stock_quantity=3,
        price_adjustment=Decimal("1500"), weight_adjustment=Decimal("0.5"),
    )
    delta = VariationDelta(
        price_delta=Decimal("1500"),
        weight_delta=Decimal("0.5"),
        selected=(SelectedVariation.of(size),),
    )
    item = OrderItem.snapshot(product, Quantity(2), price, delta)
    rate = GoldRate(id=1, rate_22k=Decimal("6000"), rate_24k=Decimal("6545"), is_current=True)
    return Order.create("Asha", [item], rate, order_number="KRT26100042")


class TestJsonOrderRepository:

    def test_add_assigns_ids(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        first, second = _order(), _order()
        repo.add(first)
        repo.add(second)
        assert (first.id, second.id) == (1, 2)

    def test_snapshot_round_trip(self, tmp_path):
        path = tmp_path / "orders.json"
        order = _order()
        JsonOrderRepository(path).add(order)

        loaded = JsonOrderRepository(path).get_by_id(order.id)
        assert loaded.items == order.items
        assert loaded.gold_rate_at_order == Decimal("6000")
        assert loaded.order_number == "KRT26100042"
        assert loaded.created_at == order.created_at
        assert loaded.total == Money.of("148444")

    def test_duplicate_id_rejected(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.add(order)
        clash = _order()
        clash.id = order.id
        with pytest.raises(ValueError, match="already exists"):
            repo.add(clash)

    def test_missing_order(self, tmp_path):
        assert JsonOrderRepository(tmp_path / "orders.json").get_by_id(1) is None
