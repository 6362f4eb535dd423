"""Tests for the nearest station resolver."""

import pytest

from nextwave.application.services import NearestStationResolver
from nextwave.application.services.nearest_station_resolver import haversine_km, round_km
from nextwave.domain.models import GeoPoint, NearestStation
from tests.builders import make_station

BUERKLIPLATZ = make_station("8503651", "Zürich Bürkliplatz (See)", 47.3655, 8.5412)
LUZERN = make_station("8508450", "Luzern Bahnhofquai", 47.0505, 8.3102, lake="Vierwaldstättersee")
RAPPERSWIL = make_station("8503695", "Rapperswil SG (See)", 47.2262, 8.8157)


@pytest.fixture
def resolver() -> NearestStationResolver:
    return NearestStationResolver()


def test_no_stations(resolver: NearestStationResolver) -> None:
    """Given no stations, when resolving, then both station and distance are None."""
    assert resolver.find_nearest([], GeoPoint(47.0, 8.0)) == NearestStation(None, None)


def test_no_location_returns_first_with_unknown_distance(resolver: NearestStationResolver) -> None:
    """Given no location, when resolving, then the first station is returned without distance."""
    result = resolver.find_nearest([LUZERN, BUERKLIPLATZ], None)

    assert result.station == LUZERN
    assert result.distance_km is None


def test_picks_closest_station(resolver: NearestStationResolver) -> None:
    """Given a location in Zurich, when resolving, then Bürkliplatz is nearest."""
    result = resolver.find_nearest([LUZERN, RAPPERSWIL, BUERKLIPLATZ], GeoPoint(47.3667, 8.5450))

    assert result.station == BUERKLIPLATZ
    assert result.distance_km == pytest.approx(0.3)


def test_first_station_wins_ties(resolver: NearestStationResolver) -> None:
    """Given two stations at the same distance, when resolving, then the earlier one wins."""
    east = make_station("1", "East", 0.0, 1.0)
    west = make_station("2", "West", 0.0, -1.0)

    assert resolver.find_nearest([west, east], GeoPoint(0.0, 0.0)).station == west


def test_zero_distance(resolver: NearestStationResolver) -> None:
    """Given the exact station location, when resolving, then the distance is 0.0."""
    location = GeoPoint(BUERKLIPLATZ.latitude, BUERKLIPLATZ.longitude)

    assert resolver.find_nearest([BUERKLIPLATZ], location).distance_km == 0.0


def test_haversine_one_degree_at_equator() -> None:
    """Given one degree of longitude at the equator, when measuring, then it is about 111.2 km."""
    assert round_km(haversine_km(GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0))) == 111.2


@pytest.mark.parametrize(("km", "expected"), [(2.25, 2.3), (2.24, 2.2), (0.0, 0.0), (41.96, 42.0)])
def test_round_half_up(km: float, expected: float) -> None:
    """Given a distance, when rounding, then halves round up to one decimal."""
    assert round_km(km) == expected
