"""Nearest station lookup by great-circle distance."""

import math

from nextwave.domain.models.station import GeoPoint, NearestStation, Station

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points in kilometers."""
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.longitude - a.longitude)
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(1.0, h)))


def round_km(distance_km: float) -> float:
    """Round to one decimal, halves away from zero (2.25 -> 2.3)."""
    return math.floor(distance_km * 10 + 0.5) / 10


class NearestStationResolver:
    """Finds the station closest to a location."""

    def find_nearest(
        self, stations: list[Station], location: GeoPoint | None
    ) -> NearestStation:
        """Return the nearest station and its rounded distance.

        Without stations the result is empty. Without a location the first
        station is returned with an unknown distance. On equal distances the
        earlier station wins.
        """
        if not stations:
            return NearestStation(station=None, distance_km=None)
        if location is None:
            return NearestStation(station=stations[0], distance_km=None)

        distances = [
            haversine_km(location, GeoPoint(s.latitude, s.longitude)) for s in stations
        ]
        best = min(range(len(stations)), key=distances.__getitem__)
        return NearestStation(station=stations[best], distance_km=round_km(distances[best]))
