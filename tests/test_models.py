import pytest
from pydantic import ValidationError

from weather_app.models import Condition, Coordinate, WeatherSnapshot

from weather_payloads import LONDON_PAYLOAD, make_payload


def test_from_api_maps_every_field():
    snap = WeatherSnapshot.from_api(LONDON_PAYLOAD)
    assert snap.location_name == "London"
    assert snap.coordinate == Coordinate(latitude=51.5074, longitude=-0.1278)
    assert snap.country == "GB"
    assert snap.temperature == 15.2
    assert snap.feels_like == 14.6
    assert snap.temp_min == 13.9
    assert snap.temp_max == 16.4
    assert snap.pressure == 1012
    assert snap.humidity == 77
    assert snap.wind_speed == 4.63
    assert snap.wind_direction == 240
    assert snap.wind_gust == 8.2
    assert snap.cloud_cover == 75
    assert snap.visibility == 9000
    assert snap.observed_at == 1718000000
    assert snap.sunrise == 1717991000
    assert snap.sunset == 1718050800
    assert snap.timezone_offset == 3600


def test_conditions_keep_api_order():
    snap = WeatherSnapshot.from_api(LONDON_PAYLOAD)
    assert [c.code for c in snap.conditions] == [500, 701]
    assert snap.primary_condition == Condition(code=500, label="Rain", description="light rain", icon="10d")


def test_missing_main_temp_is_rejected():
    payload = make_payload()
    del payload["main"]["temp"]
    with pytest.raises(ValidationError):
        WeatherSnapshot.from_api(payload)


def test_empty_condition_list_is_rejected():
    with pytest.raises(ValidationError):
        WeatherSnapshot.from_api(make_payload(weather=[]))


def test_wrong_type_is_rejected():
    payload = make_payload()
    payload["main"]["humidity"] = "very"
    with pytest.raises(ValidationError):
        WeatherSnapshot.from_api(payload)


def test_unknown_fields_ignored_and_optional_fields_default():
    payload = make_payload(extra_block={"anything": 1})
    del payload["wind"]["gust"]
    del payload["sys"]["country"]
    snap = WeatherSnapshot.from_api(payload)
    assert snap.wind_gust is None
    assert snap.country is None


def test_integer_temperatures_are_accepted():
    snap = WeatherSnapshot.from_api(make_payload(temp=15))
    assert snap.temperature == 15.0
    assert isinstance(snap.temperature, float)


def test_wind_direction_of_360_wraps_to_north():
    payload = make_payload()
    payload["wind"]["deg"] = 360
    assert WeatherSnapshot.from_api(payload).wind_direction == 0


@pytest.mark.parametrize("deg", [-10, 400, 725])
def test_out_of_range_wind_direction_is_rejected(deg):
    payload = make_payload()
    payload["wind"]["deg"] = deg
    with pytest.raises(ValidationError):
        WeatherSnapshot.from_api(payload)


@pytest.mark.parametrize(
    "block,field,value",
    [
        ("main", "temp", "15.2"),
        ("main", "humidity", True),
        ("main", "pressure", "1012"),
        ("wind", "deg", 240.0),
        ("coord", "lat", "51.5"),
    ],
)
def test_scalars_must_have_their_json_type(block, field, value):
    payload = make_payload()
    payload[block][field] = value
    with pytest.raises(ValidationError):
        WeatherSnapshot.from_api(payload)


def test_numeric_name_is_rejected():
    with pytest.raises(ValidationError):
        WeatherSnapshot.from_api(make_payload(name=42))


def test_snapshot_is_immutable():
    snap = WeatherSnapshot.from_api(LONDON_PAYLOAD)
    with pytest.raises(ValidationError):
        snap.temperature = 99.0


@pytest.mark.parametrize("lat,lon", [(90.1, 0.0), (-90.1, 0.0), (0.0, 180.5), (0.0, -181.0)])
def test_coordinate_range_is_enforced(lat, lon):
    with pytest.raises(ValidationError):
        Coordinate(latitude=lat, longitude=lon)


def test_coordinate_accepts_bounds():
    c = Coordinate(latitude=-90, longitude=180)
    assert (c.latitude, c.longitude) == (-90.0, 180.0)
