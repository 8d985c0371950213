"""Coordinate validation and map link helpers."""

import math
from decimal import Decimal
from typing import Any

from emergency_sos.core.errors import ValidationError
from emergency_sos.core.sos_policies import LAT_RANGE, LNG_RANGE, MAP_LINK_TEMPLATE


def coerce_coordinate(value: Any, field: str, bounds: tuple[float, float]) -> float:
    """Turn a submitted coordinate into a float within ``bounds``.

    Numbers and numeric strings are accepted. Zero is a valid coordinate;
    missing values, booleans, NaN and infinities are not.
    """
    if value is None:
        raise ValidationError(f"{field} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise ValidationError(f"{field} must be a number") from None
    else:
        raise ValidationError(f"{field} must be a number")

    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number")

    low, high = bounds
    if not low <= number <= high:
        raise ValidationError(f"{field} must be between {low:g} and {high:g}")
    return number


def coerce_lat_lng(lat: Any, lng: Any) -> tuple[float, float]:
    """Validate a latitude/longitude pair."""
    return coerce_coordinate(lat, "lat", LAT_RANGE), coerce_coordinate(lng, "lng", LNG_RANGE)


def format_coordinate(value: float) -> str:
    """Shortest decimal form of a coordinate; integral values drop the fraction (40.0 -> "40")."""
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text:
        # 5e-05 -> 0.00005, same digits in positional form
        text = format(Decimal(text), "f")
    return text


def build_map_link(lat: float, lng: float) -> str:
    """Google Maps link pointing at the given coordinates."""
    return MAP_LINK_TEMPLATE.format(format_coordinate(lat), format_coordinate(lng))
