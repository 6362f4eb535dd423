"""Domain layer - core business logic and models."""

from nextwave.domain.models import (
    Departure,
    DepartureStatus,
    Station,
    WeatherInfo,
    WeatherResult,
)
from nextwave.domain.ports import (
    DepartureRepository,
    KeyValueStore,
    StationRepository,
    WeatherProvider,
)

__all__ = [
    "Departure",
    "DepartureRepository",
    "DepartureStatus",
    "KeyValueStore",
    "Station",
    "StationRepository",
    "WeatherInfo",
    "WeatherProvider",
    "WeatherResult",
]
