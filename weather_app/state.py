"""Result and UI-state values shared by the client and the store."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from weather_app.models import WeatherSnapshot


class ErrorKind(str, Enum):
    """Classification of a failed fetch."""
    NETWORK = "network"
    DECODE = "decode"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FetchError:
    """Why the last attempt of a fetch failed."""
    kind: ErrorKind
    message: str
    attempts: int = 1

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class FetchSuccess:
    snapshot: WeatherSnapshot


@dataclass(frozen=True)
class FetchFailure:
    error: FetchError


FetchResult = Union[FetchSuccess, FetchFailure]


# ---------------------------------------------------------------------------
# Load state
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Idle:
    """Nothing requested yet."""

    @property
    def is_terminal(self) -> bool:
        return False


@dataclass(frozen=True)
class Loading:
    """A load is in flight."""

    @property
    def is_terminal(self) -> bool:
        return False


@dataclass(frozen=True)
class Success:
    """The most recent load produced a snapshot."""
    snapshot: WeatherSnapshot

    @property
    def is_terminal(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """The most recent load failed; `reason` is ready to show to a user."""
    reason: str
    kind: ErrorKind = ErrorKind.UNKNOWN

    @property
    def is_terminal(self) -> bool:
        return True


LoadState = Union[Idle, Loading, Success, Failure]
