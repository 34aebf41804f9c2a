"""Abstract repository for admin-editable site settings used in pricing."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal


class SiteSettingsRepository(ABC):

    @abstractmethod
    def get_gst_rate_percent(self) -> Decimal | None:
        """Return the stored GST percentage, or None if never set."""

    @abstractmethod
    def set_gst_rate_percent(self, percent: Decimal) -> None:
        """Store a new GST percentage."""
