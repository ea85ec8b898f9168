"""Named coordinates offered for quick selection."""

from __future__ import annotations

from typing import Dict

from weather_app.models import Coordinate

LONDON = Coordinate(latitude=51.5074, longitude=-0.1278)
NEW_YORK = Coordinate(latitude=40.7128, longitude=-74.0060)
TOKYO = Coordinate(latitude=35.6762, longitude=139.6503)
SYDNEY = Coordinate(latitude=-33.8688, longitude=151.2093)

# Insertion order is the order a location picker shows them in.
PRESET_LOCATIONS: Dict[str, Coordinate] = {
    "London": LONDON,
    "New York": NEW_YORK,
    "Tokyo": TOKYO,
    "Sydney": SYDNEY,
}

DEFAULT_LOCATION = "London"


def get_preset(name: str) -> Coordinate:
    """Look up a preset by name, ignoring case and surrounding whitespace."""
    wanted = name.strip().lower()
    for preset_name, coordinate in PRESET_LOCATIONS.items():
        if preset_name.lower() == wanted:
            return coordinate
    raise KeyError(f"Unknown preset location '{name}'; expected one of {list(PRESET_LOCATIONS)}")
