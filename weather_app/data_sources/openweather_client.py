"""Client for the OpenWeather current-weather endpoint with linear-backoff retries."""
from __future__ import annotations

import time
from typing import Callable, Optional
from urllib.parse import urlencode

import requests
from pydantic import ValidationError

from weather_app.config import OPENWEATHER_CURRENT_URL
from weather_app.models import Coordinate, Units, WeatherSnapshot
from weather_app.state import ErrorKind, FetchError, FetchFailure, FetchResult, FetchSuccess
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="openweather_client")

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BACKOFF_SECONDS = 1.0


class AttemptError(Exception):
    """A single request attempt failed; carries its classification."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


def _units_value(units: Units | str) -> str:
    return units.value if isinstance(units, Units) else str(units)


def _error_detail(resp: requests.Response) -> str:
    """Pull OpenWeather's `message` out of an error body, falling back to raw text."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return (resp.text or "")[:200]


class OpenWeatherClient:
    """Fetches current weather for a coordinate, retrying failed attempts.

    Between attempt n and n+1 the client sleeps `n * backoff_seconds`, so with
    the defaults a failing call waits 1s, then 2s, then gives up after the third
    attempt. Failures never raise; they come back as `FetchFailure` carrying the
    last attempt's classified error.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = OPENWEATHER_CURRENT_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        backoff_seconds: float = DEFAULT_BACKOFF_SECONDS,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not api_key:
            raise ValueError("An OpenWeather API key is required")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds
        self._owns_session = session is None
        self.session = session or requests.Session()
        self._sleep = sleep

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    def build_url(self, coordinate: Coordinate, units: Units | str = Units.METRIC) -> str:
        """Return the request URL for `coordinate`, credential included."""
        query = urlencode(
            {
                "lat": coordinate.latitude,
                "lon": coordinate.longitude,
                "units": _units_value(units),
                "appid": self.api_key,
            }
        )
        return f"{self.base_url}?{query}"

    def fetch(self, coordinate: Coordinate, units: Units | str = Units.METRIC) -> FetchResult:
        """Fetch and decode the current weather, retrying up to `max_attempts` times."""
        url = self.build_url(coordinate, units)
        logger.info("Requesting current weather: %s", mask_url(url))

        last_error: Optional[FetchError] = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                snapshot = self._attempt(url)
            except AttemptError as exc:
                last_error = FetchError(kind=exc.kind, message=exc.message, attempts=attempt)
            except Exception as exc:
                logger.exception("Unexpected error on attempt %d/%d", attempt, self.max_attempts)
                last_error = FetchError(
                    kind=ErrorKind.UNKNOWN,
                    message=f"Unexpected error: {self._redact(str(exc))}",
                    attempts=attempt,
                )
            else:
                logger.info(
                    "Fetched weather for %s on attempt %d/%d",
                    snapshot.location_name,
                    attempt,
                    self.max_attempts,
                )
                return FetchSuccess(snapshot)

            logger.warning(
                "Weather request failed on attempt %d/%d (%s): %s",
                attempt,
                self.max_attempts,
                last_error.kind.value,
                last_error.message,
            )
            if attempt < self.max_attempts:
                delay = self.backoff_seconds * attempt
                logger.debug("Retrying in %.1fs", delay)
                self._sleep(delay)

        logger.error("Giving up after %d attempts: %s", self.max_attempts, last_error)
        return FetchFailure(last_error)

    def _redact(self, text: str) -> str:
        """Keep the API key out of messages that may echo the request URL."""
        return text.replace(self.api_key, "***")

    def _attempt(self, url: str) -> WeatherSnapshot:
        """Run one request; raise AttemptError classified as network or decode."""
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise AttemptError(ErrorKind.NETWORK, f"Network error: {self._redact(str(exc))}") from exc

        if resp.status_code != 200:
            raise AttemptError(
                ErrorKind.NETWORK,
                f"Network error: HTTP {resp.status_code}: {self._redact(_error_detail(resp))}",
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise AttemptError(ErrorKind.DECODE, f"Decode error: response body is not valid JSON ({exc})") from exc

        try:
            return WeatherSnapshot.from_api(payload)
        except ValidationError as exc:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors()) or "payload"
            raise AttemptError(ErrorKind.DECODE, f"Decode error: unexpected response shape ({fields})") from exc
