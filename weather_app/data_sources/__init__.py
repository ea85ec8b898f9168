"""Weather data sources the state store can drive."""

from .base import CallableWeatherSource, WeatherSource
from .factory import build_weather_source
from .openweather_client import OpenWeatherClient

__all__ = [
    "build_weather_source",
    "CallableWeatherSource",
    "OpenWeatherClient",
    "WeatherSource",
]
