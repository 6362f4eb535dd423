"""Station domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    """Represents a boat station (dock or harbor) on a lake."""

    id: str
    name: str
    latitude: float
    longitude: float
    city: str
    type: str
    lake: str = ""
    wave_rating: int = 0
    description: str = ""


@dataclass(frozen=True)
class GeoPoint:
    """A coordinate pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class NearestStation:
    """Result of a nearest-station lookup.

    ``distance_km`` is ``None`` when the distance is unknown (no location),
    which is different from a distance of zero.
    """

    station: Station | None
    distance_km: float | None
