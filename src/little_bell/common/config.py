"""Little Bell configuration via pydantic-settings."""

import warnings
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

_INSECURE_BASE_URL_PREFIX = "http://"


class LittleBellSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LITTLE_BELL_")

    environment: str = "development"

    # Database
    db_url: str = "sqlite+aiosqlite:///./data/tracking.db"

    # Public URL that tracking links and pixels are built against
    base_url: str = "http://localhost:3000"

    # API
    api_title: str = "Little Bell"
    api_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # Dashboard
    recent_events_limit: int = 50

    @property
    def public_base_url(self) -> str:
        return self.base_url.rstrip("/")

    def validate_for_production(self) -> None:
        """Raise if tracking links would be served over plain HTTP outside development."""
        insecure = self.base_url.startswith(_INSECURE_BASE_URL_PREFIX)

        if self.environment != "development" and insecure:
            raise RuntimeError(
                f"Insecure base URL {self.base_url!r} in '{self.environment}' environment. "
                "Set LITTLE_BELL_BASE_URL to an https:// URL."
            )

        if insecure and not self.base_url.startswith("http://localhost"):
            warnings.warn(
                "Tracking URLs use plain HTTP; set LITTLE_BELL_BASE_URL to an https:// URL "
                "for production",
                UserWarning,
                stacklevel=2,
            )


@lru_cache
def get_settings() -> LittleBellSettings:
    settings = LittleBellSettings()
    settings.validate_for_production()
    return settings
