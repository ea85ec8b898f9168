import unittest

from weather_app.models import Coordinate
from weather_app.presets import DEFAULT_LOCATION, PRESET_LOCATIONS, get_preset


class TestPresets(unittest.TestCase):
    def test_fixed_locations_in_picker_order(self):
        self.assertEqual(list(PRESET_LOCATIONS), ["London", "New York", "Tokyo", "Sydney"])
        self.assertEqual(DEFAULT_LOCATION, "London")

    def test_coordinates(self):
        self.assertEqual(PRESET_LOCATIONS["London"], Coordinate(latitude=51.5074, longitude=-0.1278))
        self.assertEqual(PRESET_LOCATIONS["New York"], Coordinate(latitude=40.7128, longitude=-74.0060))
        self.assertEqual(PRESET_LOCATIONS["Tokyo"], Coordinate(latitude=35.6762, longitude=139.6503))
        self.assertEqual(PRESET_LOCATIONS["Sydney"], Coordinate(latitude=-33.8688, longitude=151.2093))

    def test_lookup_ignores_case_and_whitespace(self):
        self.assertIs(get_preset(" new YORK "), PRESET_LOCATIONS["New York"])

    def test_unknown_name_raises(self):
        with self.assertRaises(KeyError):
            get_preset("Paris")


if __name__ == "__main__":
    unittest.main()
