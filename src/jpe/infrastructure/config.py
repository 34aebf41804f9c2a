"""Application settings, read from ``JPE_*`` environment variables or ``.env``."""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="JPE_",
        env_file=".env",
        env_parse_none_str="null",
        extra="ignore",
    )

    data_dir: Path = _DEFAULT_DATA_DIR

    # Used until an admin stores a GST rate of their own
    gst_rate_percent: Decimal = Field(default=Decimal("3"), ge=0, le=100)

    # Fallback when neither the product nor its category sets a making charge.
    # Set to "null" to make a missing category policy an error instead.
    default_making_charge_percent: Decimal | None = Field(default=Decimal("12"), ge=0)

    checkout_max_attempts: int = Field(default=3, ge=1)
    log_level: str = "WARNING"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
