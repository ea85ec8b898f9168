import unittest
from unittest.mock import patch

import run_app
from weather_app.models import Units, WeatherSnapshot
from weather_app.state import ErrorKind, FetchError, FetchFailure, FetchSuccess
from weather_app.store import WeatherStateStore

from weather_payloads import LONDON_PAYLOAD


class _Source:
    def __init__(self, result):
        self.result = result

    def fetch(self, coordinate, units=Units.METRIC):
        return self.result


def _store_with(result):
    def factory(_settings):
        return WeatherStateStore(_Source(result), startup_reload_seconds=None)
    return factory


class TestMain(unittest.TestCase):
    def setUp(self):
        patcher = patch.object(run_app, "setup_logging")
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_exit_code_zero_on_success(self):
        result = FetchSuccess(WeatherSnapshot.from_api(LONDON_PAYLOAD))
        with patch.object(run_app, "build_store", _store_with(result)):
            self.assertEqual(run_app.main(), 0)

    def test_exit_code_one_on_failure(self):
        result = FetchFailure(FetchError(ErrorKind.NETWORK, "Network error: HTTP 503", 3))
        with patch.object(run_app, "build_store", _store_with(result)):
            self.assertEqual(run_app.main(), 1)

    def test_exit_code_two_without_api_key(self):
        def refuse(_settings):
            raise ValueError("api_key must be set")

        with patch.object(run_app, "build_store", refuse):
            self.assertEqual(run_app.main(), 2)


if __name__ == "__main__":
    unittest.main()
