"""Application services."""

from nextwave.application.services.departure_service import DepartureService, assign_wave_numbers
from nextwave.application.services.favorites_store import FavoritesStore
from nextwave.application.services.nearest_station_resolver import NearestStationResolver
from nextwave.application.services.weather_aggregator import WeatherAggregator

__all__ = [
    "DepartureService",
    "FavoritesStore",
    "NearestStationResolver",
    "WeatherAggregator",
    "assign_wave_numbers",
]
