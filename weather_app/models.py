"""Typed models for coordinates and decoded OpenWeather current-weather readings.

The `_Api*` models mirror the JSON shape returned by the OpenWeather
`/data/2.5/weather` endpoint. They ignore unknown fields and require every
field the app renders. `WeatherSnapshot.from_api` validates a payload against
them and flattens the result into one immutable value, so decoding either
yields a complete snapshot or raises `pydantic.ValidationError`.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, Strict, field_validator


class Units(str, Enum):
    """Units systems understood by the OpenWeather API."""
    STANDARD = "standard"
    METRIC = "metric"
    IMPERIAL = "imperial"


class _FrozenModel(BaseModel):
    """Base model for immutable value objects."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class _ApiModel(BaseModel):
    """Base model for API payloads; unknown fields are dropped."""

    model_config = ConfigDict(extra="ignore")


class Coordinate(_FrozenModel):
    """Geographic coordinates"""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude})"


class Condition(_FrozenModel):
    """One weather condition descriptor, e.g. 500 / Rain / light rain / 10d."""
    code: int
    label: str
    description: str
    icon: str


# ---------------------------------------------------------------------------
# Raw response shape
# ---------------------------------------------------------------------------

# Scalars keep the JSON type the API sends: no "15.2" strings or true/false
# standing in for numbers. Integers are still accepted where a float is expected.
ApiFloat = Annotated[float, Strict()]
ApiInt = Annotated[int, Strict()]
ApiStr = Annotated[str, Strict()]


class _ApiCoord(_ApiModel):
    lon: ApiFloat
    lat: ApiFloat


class _ApiCondition(_ApiModel):
    id: ApiInt
    main: ApiStr
    description: ApiStr
    icon: ApiStr


class _ApiMain(_ApiModel):
    temp: ApiFloat
    feels_like: ApiFloat
    temp_min: ApiFloat
    temp_max: ApiFloat
    pressure: ApiInt
    humidity: ApiInt


class _ApiWind(_ApiModel):
    speed: ApiFloat
    deg: ApiInt
    gust: Optional[ApiFloat] = None


class _ApiClouds(_ApiModel):
    all: ApiInt


class _ApiSys(_ApiModel):
    country: Optional[ApiStr] = None
    sunrise: ApiInt
    sunset: ApiInt


class _ApiCurrentWeather(_ApiModel):
    coord: _ApiCoord
    weather: List[_ApiCondition] = Field(..., min_length=1)
    main: _ApiMain
    visibility: ApiInt
    wind: _ApiWind
    clouds: _ApiClouds
    dt: ApiInt
    sys: _ApiSys
    timezone: ApiInt
    name: ApiStr


# ---------------------------------------------------------------------------
# Decoded snapshot
# ---------------------------------------------------------------------------


class WeatherSnapshot(_FrozenModel):
    """Immutable current-weather reading for one coordinate.

    Temperatures and wind speed are in whatever units system the request
    asked for; the snapshot does not convert them.
    """
    location_name: str
    coordinate: Coordinate
    country: Optional[str] = None

    temperature: float
    feels_like: float
    temp_min: float
    temp_max: float
    humidity: int
    pressure: int

    wind_speed: float
    wind_direction: int = Field(..., ge=0, le=359)
    wind_gust: Optional[float] = None
    cloud_cover: int
    visibility: int

    conditions: Tuple[Condition, ...] = Field(..., min_length=1)

    observed_at: int
    sunrise: int
    sunset: int
    timezone_offset: int

    @field_validator("wind_direction", mode="before")
    @classmethod
    def wrap_direction(cls, v: Any) -> Any:
        """Read a bearing of exactly 360 as 0; anything else outside 0-359 fails."""
        if isinstance(v, int) and not isinstance(v, bool) and v == 360:
            return 0
        return v

    @property
    def primary_condition(self) -> Condition:
        """The first (most relevant) condition reported by the API."""
        return self.conditions[0]

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "WeatherSnapshot":
        """Decode an OpenWeather current-weather payload.

        Raises pydantic.ValidationError if any required field is missing or
        has the wrong type.
        """
        raw = _ApiCurrentWeather.model_validate(payload)
        return cls(
            location_name=raw.name,
            coordinate=Coordinate(latitude=raw.coord.lat, longitude=raw.coord.lon),
            country=raw.sys.country,
            temperature=raw.main.temp,
            feels_like=raw.main.feels_like,
            temp_min=raw.main.temp_min,
            temp_max=raw.main.temp_max,
            humidity=raw.main.humidity,
            pressure=raw.main.pressure,
            wind_speed=raw.wind.speed,
            wind_direction=raw.wind.deg,
            wind_gust=raw.wind.gust,
            cloud_cover=raw.clouds.all,
            visibility=raw.visibility,
            conditions=tuple(
                Condition(code=c.id, label=c.main, description=c.description, icon=c.icon)
                for c in raw.weather
            ),
            observed_at=raw.dt,
            sunrise=raw.sys.sunrise,
            sunset=raw.sys.sunset,
            timezone_offset=raw.timezone,
        )
