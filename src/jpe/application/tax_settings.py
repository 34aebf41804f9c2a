"""Application service: GST rate lookup and update."""

from __future__ import annotations

import logging
from decimal import Decimal

from jpe.domain.events import EventPublisher, GstRateChanged
from jpe.domain.exceptions import ValidationError
from jpe.domain.model.value_objects import to_decimal
from jpe.domain.repository.settings_repository import SiteSettingsRepository

logger = logging.getLogger(__name__)


def resolve_gst_percent(settings_repo: SiteSettingsRepository, default: Decimal) -> Decimal:
    """Stored GST rate, or the configured default when none was ever saved."""
    stored = settings_repo.get_gst_rate_percent()
    return default if stored is None else stored


class SetGstRateHandler:

    def __init__(
        self,
        settings_repo: SiteSettingsRepository,
        publisher: EventPublisher,
    ) -> None:
        self._settings_repo = settings_repo
        self._publisher = publisher

    def handle(self, percent: str) -> Decimal:
        value = to_decimal(percent, "GST rate")
        if value < 0 or value > 100:
            raise ValidationError(f"GST rate must be between 0 and 100, got {value}")

        self._settings_repo.set_gst_rate_percent(value)
        logger.info("GST rate set to %s%%", value)
        self._publisher.publish(GstRateChanged())
        return value
