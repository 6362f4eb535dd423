"""Ports (interfaces) for the ports-and-adapters architecture."""

from nextwave.domain.ports.departure_repository import DepartureRepository
from nextwave.domain.ports.key_value_store import KeyValueStore
from nextwave.domain.ports.station_repository import StationRepository
from nextwave.domain.ports.weather_provider import WeatherProvider

__all__ = [
    "DepartureRepository",
    "KeyValueStore",
    "StationRepository",
    "WeatherProvider",
]
