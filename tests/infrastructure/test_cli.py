"""End-to-end tests of the ``jpe`` CLI against a temporary data directory."""

import json

import pytest
from click.testing import CliRunner

from jpe.infrastructure import bootstrap
from jpe.infrastructure.cli.main import cli
from jpe.infrastructure.config import get_settings


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    (tmp_path / "products.json").write_text(json.dumps([
        {"id": "ring-1", "name": "Classic Band", "weight_grams": "10",
         "metal_type": "gold_22k", "category": "rings"},
        {"id": "pt-1", "name": "Platinum Band", "weight_grams": "6",
         "metal_type": "platinum", "category": "rings"},
    ]), encoding="utf-8")
    (tmp_path / "product_variations.json").write_text(json.dumps([
        {"id": "s-12", "product_id": "ring-1", "variation_type": "size",
         "size_value": "12", "is_default": True, "stock_quantity": 4},
        {"id": "s-14", "product_id": "ring-1", "variation_type": "size",
         "size_value": "14", "price_adjustment": 1500, "weight_adjustment": 0.5,
         "stock_quantity": 4},
        {"id": "a-box", "product_id": "ring-1", "variation_type": "custom",
         "addon": "Gift Box", "price_adjustment": 300, "stock_quantity": 10},
    ]), encoding="utf-8")

    monkeypatch.setenv("JPE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("JPE_GST_RATE_PERCENT", "3")
    _reset_caches()
    yield tmp_path
    _reset_caches()


def _reset_caches() -> None:
    get_settings.cache_clear()
    bootstrap.live_sync.cache_clear()
    bootstrap.channel.cache_clear()


def _run(*args: str):
    return CliRunner().invoke(cli, list(args))


def _configure_pricing() -> None:
    assert _run("rate", "set", "--22k", "6000", "--24k", "6545").exit_code == 0
    assert _run("making-charge", "set", "--category", "rings", "--percent", "12",
                "--min", "500").exit_code == 0


class TestRateCommands:

    def test_set_and_show(self, data_dir):
        result = _run("rate", "set", "--22k", "6000", "--24k", "6545", "--source", "mcx")
        assert result.exit_code == 0, result.output
        assert "Gold rate #1 is now current" in result.output

        result = _run("rate", "show")
        assert result.exit_code == 0
        assert "₹6000" in result.output
        assert "mcx" in result.output

    def test_show_without_rate(self, data_dir):
        result = _run("rate", "show")
        assert result.exit_code == 1
        assert "No current gold rate" in result.output

    def test_invalid_rate(self, data_dir):
        result = _run("rate", "set", "--22k", "-5", "--24k", "6545")
        assert result.exit_code == 1
        assert "must be a positive" in result.output

    def test_history(self, data_dir):
        _run("rate", "set", "--22k", "6000", "--24k", "6545")
        _run("rate", "set", "--22k", "6100", "--24k", "6650")
        result = _run("rate", "history")
        assert result.exit_code == 0
        assert result.output.count("current") == 1


class TestMakingChargeAndTaxCommands:

    def test_making_charge_list(self, data_dir):
        _run("making-charge", "set", "--category", "rings", "--percent", "12", "--min", "500")
        result = _run("making-charge", "list")
        assert result.exit_code == 0
        assert "rings" in result.output
        assert "12%" in result.output

    def test_tax_default_then_stored(self, data_dir):
        assert "3% (default)" in _run("tax", "show").output
        assert _run("tax", "set", "--rate", "5").exit_code == 0
        assert "5% (stored)" in _run("tax", "show").output

    def test_tax_out_of_range(self, data_dir):
        result = _run("tax", "set", "--rate", "120")
        assert result.exit_code == 1
        assert "between 0 and 100" in result.output


class TestPriceCommands:

    def test_quote_default(self, data_dir):
        _configure_pricing()
        result = _run("price", "quote", "--product", "ring-1")
        assert result.exit_code == 0, result.output
        assert "₹69,216" in result.output
        assert "Size: 12" in result.output

    def test_quote_with_selection(self, data_dir):
        _configure_pricing()
        result = _run("price", "quote", "--product", "ring-1", "--select", "Size=s-14")
        assert result.exit_code == 0, result.output
        assert "₹74,222" in result.output

    def test_rate_change_refreshes_cached_quote(self, data_dir):
        _configure_pricing()
        assert "₹69,216" in _run("price", "quote", "--product", "ring-1").output
        assert bootstrap.live_sync().cached_count == 1

        _run("rate", "set", "--22k", "6100", "--24k", "6650")

        assert bootstrap.live_sync().cached_count == 0
        assert "₹70,370" in _run("price", "quote", "--product", "ring-1").output

    def test_quote_without_rate(self, data_dir):
        result = _run("price", "quote", "--product", "ring-1")
        assert result.exit_code == 1
        assert "Pricing unavailable" in result.output

    def test_quote_bad_selection_format(self, data_dir):
        _configure_pricing()
        result = _run("price", "quote", "--product", "ring-1", "--select", "Size")
        assert result.exit_code == 2

    def test_product_list(self, data_dir):
        _configure_pricing()
        result = _run("product", "list")
        assert result.exit_code == 0
        assert "₹69,216" in result.output
        assert "unavailable" in result.output  # platinum has no rate


class TestOrderCommands:

    def test_place_and_show(self, data_dir):
        _configure_pricing()
        result = _run(
            "order", "place", "--customer", "Asha",
            "--item", "ring-1:2:Size=s-14;Add Ons=a-box",
        )
        assert result.exit_code == 0, result.output
        assert "Order placed." in result.output

        _run("rate", "set", "--22k", "7000", "--24k", "7600")

        result = _run("order", "show", "--id", "1")
        assert result.exit_code == 0
        # 72060 + 300 = 72360, gst 2170.8 -> 74530.8 -> ₹74,531 each
        assert "₹1,49,062" in result.output
        assert "+ Size: 14" in result.output
        assert "+ Add Ons: Gift Box" in result.output
        assert "₹6000/g" in result.output

    def test_invalid_item_format(self, data_dir):
        result = _run("order", "place", "--customer", "Asha", "--item", "ring-1")
        assert result.exit_code == 2

    def test_out_of_stock_quantity(self, data_dir):
        _configure_pricing()
        result = _run("order", "place", "--customer", "Asha", "--item", "ring-1:5:Size=s-14")
        assert result.exit_code == 1
        assert "left" in result.output

    def test_show_missing(self, data_dir):
        result = _run("order", "show", "--id", "9")
        assert result.exit_code == 1
        assert "not found" in result.output
