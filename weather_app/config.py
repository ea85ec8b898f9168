"""Application configuration pulled from environment variables via pydantic."""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from weather_app.models import Units
from weather_app.presets import DEFAULT_LOCATION, PRESET_LOCATIONS
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="config")

OPENWEATHER_CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"


class Settings(BaseSettings):
    """Environment-driven configuration for the weather app."""
    model_config = SettingsConfigDict(env_prefix="WEATHER_", env_file=".env", extra="ignore")

    api_key: str | None = None
    base_url: str = OPENWEATHER_CURRENT_URL
    units: Units = Units.METRIC
    default_location: str = DEFAULT_LOCATION
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    max_attempts: int = Field(default=3, ge=1)
    retry_backoff_seconds: float = Field(default=1.0, ge=0)
    startup_reload_seconds: float | None = 2.0
    max_workers: int = Field(default=4, ge=1)
    log_level: str = "INFO"

    @field_validator("base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @field_validator("default_location", mode="after")
    @classmethod
    def known_preset(cls, v: str) -> str:
        """Resolve the default location to the canonical preset name."""
        for name in PRESET_LOCATIONS:
            if name.lower() == v.strip().lower():
                return name
        raise ValueError(f"default_location must be one of {list(PRESET_LOCATIONS)}, got '{v}'")


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4, exclude={'api_key'})}")
