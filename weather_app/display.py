"""Formatting helpers that turn load states into display strings."""

from __future__ import annotations

import datetime as dt
from typing import Dict

from weather_app.models import Units, WeatherSnapshot
from weather_app.state import Failure, Idle, LoadState, Loading, Success

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")

SPEED_UNITS = {
    Units.STANDARD.value: "m/s",
    Units.METRIC.value: "m/s",
    Units.IMPERIAL.value: "mph",
}
TEMPERATURE_UNITS = {
    Units.STANDARD.value: "K",
    Units.METRIC.value: "°C",
    Units.IMPERIAL.value: "°F",
}


def format_local_time(timestamp: int, timezone_offset: int) -> str:
    """Render an epoch timestamp as HH:MM in the location's local time."""
    tz = dt.timezone(dt.timedelta(seconds=timezone_offset))
    return dt.datetime.fromtimestamp(timestamp, tz=tz).strftime("%H:%M")


def wind_direction(degrees: int) -> str:
    """Map a bearing in degrees to an 8-point compass label."""
    return COMPASS_POINTS[(degrees % 360) // 45]


def capitalize_first(text: str) -> str:
    """Upper-case the first character only ("light rain" -> "Light rain")."""
    return text[:1].upper() + text[1:]


def snapshot_display_strings(snapshot: WeatherSnapshot, units: Units | str = Units.METRIC) -> Dict[str, str]:
    """Return the label/value pairs shown on the weather card."""
    unit_key = getattr(units, "value", units)
    temp_unit = TEMPERATURE_UNITS.get(unit_key, "°")
    speed_unit = SPEED_UNITS.get(unit_key, "m/s")
    condition = snapshot.primary_condition
    return {
        "Location": snapshot.location_name,
        "Temperature": f"{int(snapshot.temperature)}{temp_unit}",
        "Feels Like": f"{int(snapshot.feels_like)}{temp_unit}",
        "Condition": condition.label,
        "Description": capitalize_first(condition.description),
        "Wind": f"{snapshot.wind_speed} {speed_unit}, {wind_direction(snapshot.wind_direction)}",
        "Humidity": f"{snapshot.humidity}%",
        "Pressure": f"{snapshot.pressure} hPa",
        "Visibility": f"{snapshot.visibility // 1000} km",
        "Cloud Cover": f"{snapshot.cloud_cover}%",
        "Sunrise": format_local_time(snapshot.sunrise, snapshot.timezone_offset),
        "Sunset": format_local_time(snapshot.sunset, snapshot.timezone_offset),
        "Min Temp": f"{int(snapshot.temp_min)}{temp_unit}",
        "Max Temp": f"{int(snapshot.temp_max)}{temp_unit}",
    }


def describe_state(state: LoadState, units: Units | str = Units.METRIC) -> str:
    """One-line summary of a load state."""
    if isinstance(state, Idle):
        return "Idle"
    if isinstance(state, Loading):
        return "Loading..."
    if isinstance(state, Failure):
        return f"Error: {state.reason}"
    if isinstance(state, Success):
        values = snapshot_display_strings(state.snapshot, units)
        return " | ".join(f"{label}: {value}" for label, value in values.items())
    raise TypeError(f"Unknown load state {state!r}")
