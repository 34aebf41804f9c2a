"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from jpe.application.live_sync import LiveSyncCoordinator
from jpe.application.place_order import OrderSnapshotWriter
from jpe.application.pricing import LinePricer
from jpe.application.quote_price import QuotePriceHandler
from jpe.domain.service.making_charge_policy import MakingChargePolicy
from jpe.infrastructure.config import get_settings
from jpe.infrastructure.persistence.json_catalog_repository import (
    JsonProductRepository,
    JsonVariationRepository,
)
from jpe.infrastructure.persistence.json_making_charge_repository import (
    JsonMakingChargeRepository,
)
from jpe.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from jpe.infrastructure.persistence.json_rate_store import JsonRateStore
from jpe.infrastructure.persistence.json_settings_repository import (
    JsonSiteSettingsRepository,
)
from jpe.infrastructure.realtime.channel import InProcessChannel


def rate_store() -> JsonRateStore:
    return JsonRateStore(get_settings().data_dir / "gold_rates.json")


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(get_settings().data_dir / "products.json")


def variation_repository() -> JsonVariationRepository:
    return JsonVariationRepository(get_settings().data_dir / "product_variations.json")


def making_charge_repository() -> JsonMakingChargeRepository:
    return JsonMakingChargeRepository(get_settings().data_dir / "making_charges.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(get_settings().data_dir / "orders.json")


def settings_repository() -> JsonSiteSettingsRepository:
    return JsonSiteSettingsRepository(get_settings().data_dir / "site_settings.json")


@lru_cache()
def channel() -> InProcessChannel:
    """The process-wide channel admin commands publish their changes on."""
    return InProcessChannel()


def making_charge_policy() -> MakingChargePolicy:
    return MakingChargePolicy(
        making_charge_repository(),
        default_percent=get_settings().default_making_charge_percent,
    )


def line_pricer() -> LinePricer:
    return LinePricer(
        product_repo=product_repository(),
        variation_repo=variation_repository(),
        policy=making_charge_policy(),
    )


def quote_handler() -> QuotePriceHandler:
    return QuotePriceHandler(
        pricer=line_pricer(),
        rate_store=rate_store(),
        settings_repo=settings_repository(),
        default_gst_percent=get_settings().gst_rate_percent,
    )


@lru_cache()
def live_sync() -> LiveSyncCoordinator:
    coordinator = LiveSyncCoordinator(quote_handler())
    coordinator.attach(channel().subscribe)
    return coordinator


def order_writer() -> OrderSnapshotWriter:
    return OrderSnapshotWriter(
        order_repo=order_repository(),
        rate_store=rate_store(),
        pricer=line_pricer(),
        settings_repo=settings_repository(),
        default_gst_percent=get_settings().gst_rate_percent,
    )
