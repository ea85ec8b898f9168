"""Factory helpers for building the weather source at startup."""

from __future__ import annotations

from weather_app import config
from weather_app.data_sources.base import WeatherSource
from weather_app.data_sources.openweather_client import OpenWeatherClient
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="data_sources/factory")


def build_weather_source(settings: config.Settings | None = None) -> WeatherSource:
    """Instantiate the OpenWeather client from settings."""
    settings = settings or config.settings

    if not settings.api_key:
        raise ValueError("api_key must be set (WEATHER_API_KEY) to use the OpenWeather data source")

    logger.info("Using OpenWeather data source", extra={"base_url": mask_url(settings.base_url)})
    return OpenWeatherClient(
        settings.api_key,
        base_url=settings.base_url,
        timeout=settings.request_timeout_seconds,
        max_attempts=settings.max_attempts,
        backoff_seconds=settings.retry_backoff_seconds,
    )
