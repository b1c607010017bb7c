from __future__ import annotations

import pytest

from golfnav.errors import InvalidCoordinate
from golfnav.geo import (
    METERS_TO_YARDS,
    bearing_degrees,
    destination_point,
    distance_meters,
    meters_to_yards,
    yards_to_meters,
)
from golfnav.models import Coordinate

PAIRS = [
    (Coordinate(0.0, 0.0), Coordinate(0.0, 1.0)),
    (Coordinate(55.0209, -7.2479), Coordinate(55.0215, -7.2470)),
    (Coordinate(-33.86, 151.21), Coordinate(51.5, -0.12)),
    (Coordinate(89.9, 10.0), Coordinate(-89.9, -170.0)),
    (Coordinate(37.4318, -122.1610), Coordinate(37.4332, -122.1583)),
]


@pytest.mark.parametrize("a,b", PAIRS)
def test_distance_is_symmetric_and_non_negative(a: Coordinate, b: Coordinate) -> None:
    forward = distance_meters(a, b)
    backward = distance_meters(b, a)

    assert forward >= 0.0
    assert forward == pytest.approx(backward, rel=1e-12, abs=1e-9)


@pytest.mark.parametrize("a,_b", PAIRS)
def test_distance_to_self_is_zero(a: Coordinate, _b: Coordinate) -> None:
    assert distance_meters(a, a) == 0.0


def test_one_degree_of_longitude_at_equator() -> None:
    meters = distance_meters(Coordinate(0.0, 0.0), Coordinate(0.0, 1.0))

    assert meters == pytest.approx(111_195.0, rel=0.005)


def test_bearing_cardinal_directions() -> None:
    origin = Coordinate(0.0, 0.0)

    assert bearing_degrees(origin, Coordinate(1.0, 0.0)) == pytest.approx(0.0, abs=1e-9)
    assert bearing_degrees(origin, Coordinate(0.0, 1.0)) == pytest.approx(90.0)
    assert bearing_degrees(origin, Coordinate(-1.0, 0.0)) == pytest.approx(180.0)
    assert bearing_degrees(origin, Coordinate(0.0, -1.0)) == pytest.approx(270.0)


def test_bearing_for_identical_points_does_not_raise() -> None:
    point = Coordinate(12.5, 45.0)

    bearing = bearing_degrees(point, point)

    assert 0.0 <= bearing < 360.0


@pytest.mark.parametrize("a,b", PAIRS)
def test_bearing_is_in_range(a: Coordinate, b: Coordinate) -> None:
    assert 0.0 <= bearing_degrees(a, b) < 360.0


def test_destination_point_walks_requested_distance() -> None:
    origin = Coordinate(55.0209, -7.2479, accuracy_m=3.0, captured_at_ms=42)

    moved = destination_point(origin, 45.0, 120.0)

    assert distance_meters(origin, moved) == pytest.approx(120.0, rel=1e-6)
    assert bearing_degrees(origin, moved) == pytest.approx(45.0, abs=0.01)
    assert moved.accuracy_m == 3.0
    assert moved.captured_at_ms == 42


def test_destination_point_rejects_negative_distance() -> None:
    with pytest.raises(ValueError):
        destination_point(Coordinate(0.0, 0.0), 0.0, -1.0)


@pytest.mark.parametrize(
    "lat,lon",
    [(90.5, 0.0), (-91.0, 0.0), (0.0, 180.1), (0.0, -181.0), (float("nan"), 0.0)],
)
def test_out_of_range_coordinates_are_rejected(lat: float, lon: float) -> None:
    with pytest.raises(InvalidCoordinate):
        Coordinate(lat, lon)


def test_invalid_coordinate_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Coordinate(0.0, 0.0, accuracy_m=-2.0)


def test_distance_revalidates_duck_typed_points() -> None:
    class Loose:
        latitude = 120.0
        longitude = 0.0

    with pytest.raises(InvalidCoordinate):
        distance_meters(Loose(), Coordinate(0.0, 0.0))


def test_unit_conversion_factor() -> None:
    assert METERS_TO_YARDS == pytest.approx(1.09361)
    assert meters_to_yards(100.0) == pytest.approx(109.361)
    assert yards_to_meters(meters_to_yards(87.5)) == pytest.approx(87.5)
