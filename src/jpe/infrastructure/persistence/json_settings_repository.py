"""JSON-file-backed implementation of SiteSettingsRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from jpe.domain.repository.settings_repository import SiteSettingsRepository
from jpe.infrastructure.persistence.json_file import JsonFile

_GST_KEY = "gst_rate_percent"


class JsonSiteSettingsRepository(SiteSettingsRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=dict)

    def get_gst_rate_percent(self) -> Decimal | None:
        value = self._file.read().get(_GST_KEY)
        return None if value is None else Decimal(str(value))

    def set_gst_rate_percent(self, percent: Decimal) -> None:
        with self._file.transaction() as settings:
            settings[_GST_KEY] = str(percent)
