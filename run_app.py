import os
import sys

from weather_app.config import settings
from weather_app.display import describe_state
from weather_app.state import Failure
from weather_app.store import build_store
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="app")


def main() -> int:
    """
    Load the default location once and log every state the store passes through.

    Configuration comes from WEATHER_* environment variables (or .env):
    - WEATHER_API_KEY is required.
    - WEATHER_DEFAULT_LOCATION picks the preset (London, New York, Tokyo, Sydney).
    """
    setup_logging(level=os.getenv("LOG_LEVEL", settings.log_level), job_name="weather_app")

    try:
        store = build_store(settings)
    except ValueError as exc:
        logger.error("Cannot start: %s", exc)
        return 2

    with store:
        store.subscribe(lambda state: logger.info(describe_state(state, store.units)))
        # Budget for every attempt, every backoff and one startup re-load.
        attempt_budget = settings.max_attempts * settings.request_timeout_seconds
        backoff_budget = sum(settings.retry_backoff_seconds * n for n in range(1, settings.max_attempts))
        final = store.wait(timeout=2 * (attempt_budget + backoff_budget) + (settings.startup_reload_seconds or 0))

    return 1 if isinstance(final, Failure) or not final.is_terminal else 0


if __name__ == "__main__":
    sys.exit(main())
