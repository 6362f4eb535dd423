"""Aggregated views combining departures and weather for a station."""

from dataclasses import dataclass, field
from datetime import datetime

from nextwave.domain.models.departure import Departure
from nextwave.domain.models.station import Station
from nextwave.domain.models.weather import WeatherResult


@dataclass(frozen=True)
class DepartureWithWeather:
    """A departure paired with the forecast aligned to its scheduled time."""

    departure: Departure
    weather: WeatherResult | None = None


@dataclass(frozen=True)
class StationOverview:
    """Snapshot of a station produced by the refresh poller."""

    station: Station
    updated_at: datetime
    next_departure: Departure | None = None
    weather: WeatherResult | None = None
    forecast: WeatherResult | None = None
    errors: list[str] = field(default_factory=list)
