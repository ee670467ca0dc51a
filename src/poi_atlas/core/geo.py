"""Coordinate validation."""

import math
from typing import Union

from ..models import Coordinate
from .errors import InvalidCoordinate


def is_valid(lat, lng) -> bool:
    """True iff -90 <= lat <= 90 and -180 <= lng <= 180.

    Non-numbers, booleans and NaN are never valid.
    """
    for v in (lat, lng):
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return False
        if math.isnan(v):
            return False
    return -90 <= lat <= 90 and -180 <= lng <= 180


def require_valid(lat, lng) -> Coordinate:
    """Return a Coordinate for (lat, lng) or raise InvalidCoordinate."""
    if not is_valid(lat, lng):
        raise InvalidCoordinate(lat, lng)
    return Coordinate(lat=float(lat), lng=float(lng))


def as_coordinate(value: Union[Coordinate, tuple, list]) -> Coordinate:
    """Accept a Coordinate or a (lat, lng) pair."""
    if isinstance(value, Coordinate):
        return value
    try:
        lat, lng = value
    except (TypeError, ValueError):
        raise InvalidCoordinate(value, None) from None
    return require_valid(lat, lng)
