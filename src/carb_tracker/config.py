"""Application configuration."""

import math
import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_QUICK_ADD_VALUES = "0.1,0.5,1,4,6,10"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    fdc_api_key: str = ""
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    lookup_enabled: bool = False
    timezone: str = "UTC"
    locale: str = "en_US"
    quick_add_enabled: bool = False
    quick_add_values: str = DEFAULT_QUICK_ADD_VALUES
    statistics_window_days: int = 30
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def is_lookup_available(self) -> bool:
        """Lookup needs both the toggle and an API key."""
        return self.lookup_enabled and bool(self.fdc_api_key.strip())


def parse_quick_add_values(raw: str | None) -> list[float]:
    """Parse comma separated quick add presets, skipping junk and non-positives."""
    if raw is None:
        return []
    values: list[float] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if not value:
            continue
        try:
            number = float(value)
        except ValueError:
            continue
        if math.isfinite(number) and number > 0 and number not in values:
            values.append(number)
    return values
