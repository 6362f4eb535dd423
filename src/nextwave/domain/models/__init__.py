"""Domain models for NextWave."""

from nextwave.domain.models.departure import Departure, DepartureStatus
from nextwave.domain.models.favorites import FavoriteResult
from nextwave.domain.models.station import GeoPoint, NearestStation, Station
from nextwave.domain.models.station_overview import DepartureWithWeather, StationOverview
from nextwave.domain.models.weather import PressureTrend, WeatherInfo, WeatherResult
from nextwave.domain.models.weather_response import (
    ForecastItem,
    ForecastResponse,
    Main,
    WeatherCondition,
    WeatherResponse,
    Wind,
)

__all__ = [
    "Departure",
    "DepartureStatus",
    "DepartureWithWeather",
    "FavoriteResult",
    "ForecastItem",
    "ForecastResponse",
    "GeoPoint",
    "Main",
    "NearestStation",
    "PressureTrend",
    "Station",
    "StationOverview",
    "WeatherCondition",
    "WeatherInfo",
    "WeatherResponse",
    "WeatherResult",
    "Wind",
]
