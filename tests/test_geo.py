"""Coordinate validation and map link tests."""

import math

import pytest

from emergency_sos.core.errors import ValidationError
from emergency_sos.services.geo_service import build_map_link, coerce_lat_lng, format_coordinate


def test_zero_is_a_valid_coordinate():
    assert coerce_lat_lng(0, 0) == (0.0, 0.0)


def test_numeric_strings_are_coerced():
    assert coerce_lat_lng(" 40.5 ", "-74") == (40.5, -74.0)


@pytest.mark.parametrize(
    "lat,lng",
    [
        (None, 1),
        (1, None),
        ("north", 1),
        (True, 1),
        (math.nan, 1),
        (1, math.inf),
        (90.0001, 1),
        (1, 180.5),
        ([1], 1),
    ],
)
def test_invalid_coordinates_raise(lat, lng):
    with pytest.raises(ValidationError):
        coerce_lat_lng(lat, lng)


def test_bounds_are_inclusive():
    assert coerce_lat_lng(-90, 180) == (-90.0, 180.0)


@pytest.mark.parametrize(
    "value,expected",
    [
        (40.0, "40"),
        (-74.0, "-74"),
        (0.0, "0"),
        (-0.0, "0"),
        (40.7128, "40.7128"),
        (0.1, "0.1"),
        (0.00005, "0.00005"),
        (0.00001, "0.00001"),
        (-0.000015, "-0.000015"),
        (1.5e-07, "0.00000015"),
    ],
)
def test_format_coordinate(value, expected):
    assert format_coordinate(value) == expected


def test_build_map_link():
    assert build_map_link(40.7128, -74.006) == "https://maps.google.com/?q=40.7128,-74.006"


def test_map_link_for_tiny_coordinates_is_positional():
    assert build_map_link(0.00005, 0.00001) == "https://maps.google.com/?q=0.00005,0.00001"
