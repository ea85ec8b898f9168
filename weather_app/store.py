"""Observable weather state driven by background fetches."""

from __future__ import annotations

import threading
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Deque, List, Optional

from weather_app import config
from weather_app.data_sources import WeatherSource, build_weather_source
from weather_app.models import Coordinate, Units
from weather_app.presets import get_preset
from weather_app.state import (
    ErrorKind,
    Failure,
    FetchError,
    FetchFailure,
    FetchResult,
    FetchSuccess,
    Idle,
    LoadState,
    Loading,
    Success,
)
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="store")

StateObserver = Callable[[LoadState], None]


class WeatherStateStore:
    """Thread-safe owner of the current LoadState.

    Every `load` is tagged with a sequence number. A fetch result is applied
    only if its load is still the latest one issued, so a slow, superseded load
    can never overwrite the state of a newer one. Fetches run on a small thread
    pool; `load` itself returns immediately.

    Observers are called with each new state while the store lock is held, in
    transition order. An observer may call back into the store; states it
    causes are delivered after the current round of notifications.
    """

    def __init__(
        self,
        source: WeatherSource,
        *,
        default_coordinate: Optional[Coordinate] = None,
        units: Units | str = Units.METRIC,
        max_workers: int = 4,
        auto_load: bool = True,
        startup_reload_seconds: Optional[float] = 2.0,
        owns_source: bool = False,
    ) -> None:
        self._source = source
        self._owns_source = owns_source
        self._coordinate = default_coordinate or get_preset(config.settings.default_location)
        self._units = units
        self._state: LoadState = Idle()
        self._lock = threading.RLock()
        self._changed = threading.Condition(self._lock)
        self._observers: List[StateObserver] = []
        self._pending: Deque[LoadState] = deque()
        self._notifying = False
        self._sequence = 0
        self._closed = False
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="weather-load")
        self._startup_timer: Optional[threading.Timer] = None
        self._awaiting_ready = auto_load

        if auto_load:
            self.load(self._coordinate, self._units)
            if startup_reload_seconds:
                self._startup_timer = threading.Timer(startup_reload_seconds, self.notify_ready)
                self._startup_timer.daemon = True
                self._startup_timer.start()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def state(self) -> LoadState:
        with self._lock:
            return self._state

    @property
    def units(self) -> Units | str:
        with self._lock:
            return self._units

    @property
    def coordinate(self) -> Coordinate:
        with self._lock:
            return self._coordinate

    def subscribe(self, observer: StateObserver, *, replay: bool = True) -> Callable[[], None]:
        """Register `observer` for state changes; returns a function that unsubscribes it."""
        with self._lock:
            self._observers.append(observer)
            if replay:
                self._call_observer(observer, self._state)

        def unsubscribe() -> None:
            with self._lock:
                try:
                    self._observers.remove(observer)
                except ValueError:
                    pass

        return unsubscribe

    def wait(self, timeout: Optional[float] = None) -> LoadState:
        """Block until the state is Success or Failure (or timeout/close); return it."""
        with self._changed:
            self._changed.wait_for(lambda: self._closed or self._state.is_terminal, timeout)
            return self._state

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def load(self, coordinate: Coordinate, units: Units | str | None = None) -> Future:
        """Switch to Loading and fetch `coordinate` in the background.

        The returned future resolves to True if the result was applied and
        False if a newer load superseded it. Fetch failures end up in the
        state as `Failure`, never as an exception.
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("WeatherStateStore is closed")
            if units is None:
                units = self._units
            self._sequence += 1
            token = self._sequence
            self._coordinate = coordinate
            self._units = units
            self._set_state(Loading())
            logger.info("Load #%d started for %s (%s)", token, coordinate, getattr(units, "value", units))
            return self._executor.submit(self._run_load, token, coordinate, units)

    def select_location(self, coordinate: Coordinate) -> Future:
        """Load `coordinate` with the units currently in use."""
        return self.load(coordinate, self.units)

    def select_preset(self, name: str) -> Future:
        return self.select_location(get_preset(name))

    def refresh(self) -> Future:
        """Reload the most recently requested coordinate and units."""
        with self._lock:
            return self.load(self._coordinate, self._units)

    def notify_ready(self) -> Optional[Future]:
        """Re-issue the startup load once if it has not resolved yet.

        Runs automatically from the startup timer; a presentation layer that
        knows when it is ready may call it instead. Only the first call after
        construction has any effect.
        """
        with self._lock:
            if not self._awaiting_ready or self._closed:
                return None
            self._awaiting_ready = False
            if self._startup_timer is not None:
                self._startup_timer.cancel()
                self._startup_timer = None
            if not isinstance(self._state, Loading):
                return None
            logger.info("Initial load still pending; issuing another load")
            return self.load(self._coordinate, self._units)

    def close(self) -> None:
        """Stop accepting loads and drop any results still in flight.

        Loads already queued on the pool still resolve, to False, without
        calling the source. A source the store owns is closed as well.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            if self._startup_timer is not None:
                self._startup_timer.cancel()
                self._startup_timer = None
            self._changed.notify_all()
        self._executor.shutdown(wait=False)
        if self._owns_source:
            close_source = getattr(self._source, "close", None)
            if close_source is not None:
                close_source()
        logger.debug("Store closed")

    def __enter__(self) -> "WeatherStateStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run_load(self, token: int, coordinate: Coordinate, units: Units | str) -> bool:
        with self._lock:
            if self._closed:
                logger.info("Store closed before load #%d started; skipping fetch", token)
                return False
        try:
            result: FetchResult = self._source.fetch(coordinate, units)
        except Exception as exc:
            logger.exception("Weather source raised during load #%d", token)
            result = FetchFailure(FetchError(kind=ErrorKind.UNKNOWN, message=f"Unexpected error: {exc}"))

        if isinstance(result, FetchSuccess):
            new_state: LoadState = Success(result.snapshot)
        elif isinstance(result, FetchFailure):
            new_state = Failure(reason=str(result.error), kind=result.error.kind)
        else:
            logger.error("Weather source returned %r for load #%d", result, token)
            new_state = Failure(reason="Unknown error occurred", kind=ErrorKind.UNKNOWN)

        with self._lock:
            if self._closed or token != self._sequence:
                logger.info("Discarding stale result of load #%d (latest is #%d)", token, self._sequence)
                return False
            self._set_state(new_state)
            logger.info("Load #%d finished: %s", token, type(new_state).__name__)
            return True

    def _set_state(self, state: LoadState) -> None:
        """Replace the state and notify observers. Caller holds the lock."""
        self._state = state
        self._changed.notify_all()
        self._pending.append(state)
        if self._notifying:
            return
        self._notifying = True
        try:
            while self._pending:
                pending = self._pending.popleft()
                for observer in list(self._observers):
                    self._call_observer(observer, pending)
        finally:
            self._notifying = False

    @staticmethod
    def _call_observer(observer: StateObserver, state: LoadState) -> None:
        try:
            observer(state)
        except Exception:
            logger.exception("State observer %r failed", observer)


def build_store(
    settings: config.Settings | None = None,
    source: WeatherSource | None = None,
    **kwargs,
) -> WeatherStateStore:
    """Build a store (and, unless given, its OpenWeather source) from settings."""
    settings = settings or config.settings
    if source is None:
        source = build_weather_source(settings)
        kwargs.setdefault("owns_source", True)
    kwargs.setdefault("default_coordinate", get_preset(settings.default_location))
    kwargs.setdefault("units", settings.units)
    kwargs.setdefault("max_workers", settings.max_workers)
    kwargs.setdefault("startup_reload_seconds", settings.startup_reload_seconds)
    return WeatherStateStore(source, **kwargs)
