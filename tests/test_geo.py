"""Tests for coordinate validation."""
import math

import pytest

from poi_atlas.core.errors import InvalidCoordinate
from poi_atlas.core.geo import as_coordinate, is_valid, require_valid
from poi_atlas.models import Coordinate


@pytest.mark.parametrize("lat,lng", [
    (0, 0),
    (48.85, 2.35),
    (90, 180),
    (-90, -180),
    (-33.8688, 151.2093),
])
def test_in_range_is_valid(lat, lng):
    assert is_valid(lat, lng) is True


@pytest.mark.parametrize("lat,lng", [
    (91, 0),
    (0, 181),
    (-91, 200),
    (90.0001, 0),
    (0, -180.0001),
])
def test_out_of_range_is_invalid(lat, lng):
    assert is_valid(lat, lng) is False


def test_non_numbers_are_invalid():
    assert is_valid("48", 2) is False
    assert is_valid(None, 2) is False
    assert is_valid(True, 2) is False
    assert is_valid(math.nan, 0) is False


def test_require_valid_returns_coordinate():
    c = require_valid(48.85, 2.35)
    assert c == Coordinate(lat=48.85, lng=2.35)


def test_require_valid_raises_invalid_coordinate():
    with pytest.raises(InvalidCoordinate) as exc:
        require_valid(95, 2.35)
    assert exc.value.lat == 95
    assert isinstance(exc.value, ValueError)


def test_as_coordinate_accepts_pair_and_model():
    c = Coordinate(lat=1.0, lng=2.0)
    assert as_coordinate(c) is c
    assert as_coordinate((1, 2)) == c
    assert as_coordinate([1.0, 2.0]) == c


def test_as_coordinate_rejects_bad_shapes():
    with pytest.raises(InvalidCoordinate):
        as_coordinate((1.0, 2.0, 3.0))
    with pytest.raises(InvalidCoordinate):
        as_coordinate(None)
