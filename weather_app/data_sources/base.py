"""Interfaces for current-weather data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from weather_app.models import Coordinate, Units
from weather_app.state import FetchResult


class WeatherSource(Protocol):
    """Anything that can turn a coordinate into a fetch result.

    Implementations report failures as `FetchFailure` values instead of
    raising.
    """

    def fetch(self, coordinate: Coordinate, units: Units | str = Units.METRIC) -> FetchResult:
        """Return the current weather for `coordinate`."""
        ...


@dataclass
class CallableWeatherSource(WeatherSource):
    """Wrap a plain callable so it can stand in for a client."""

    fetch_current: Callable[..., FetchResult]

    def fetch(self, coordinate: Coordinate, units: Units | str = Units.METRIC) -> FetchResult:
        """Delegate to the configured callable."""
        return self.fetch_current(coordinate, units)
