"""Departure use cases: wave numbering, forecasts per departure and look-ahead checks."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, time, timedelta, tzinfo
from typing import TYPE_CHECKING

from nextwave.domain.errors import TransportApiError, WeatherApiError
from nextwave.domain.flavor import no_waves_message
from nextwave.domain.models.departure import Departure, DepartureStatus
from nextwave.domain.models.station_overview import DepartureWithWeather

if TYPE_CHECKING:
    from collections.abc import Callable

    from nextwave.application.services.weather_aggregator import WeatherAggregator
    from nextwave.domain.models.station import Station
    from nextwave.domain.models.weather import WeatherResult
    from nextwave.domain.ports.departure_repository import DepartureRepository

logger = logging.getLogger(__name__)

LOOK_AHEAD_DAYS = 7


def assign_wave_numbers(departures: list[Departure]) -> list[Departure]:
    """Number departures 1, 2, 3, ... in their given order."""
    return [replace(d, wave_number=i) for i, d in enumerate(departures, start=1)]


def has_coordinates(station: Station) -> bool:
    """Stations listed by name only carry 0/0 as a placeholder location."""
    return not (station.latitude == 0.0 and station.longitude == 0.0)


class DepartureService:
    """Combines the departure repository with weather for a station."""

    def __init__(
        self,
        departure_repository: DepartureRepository,
        weather_aggregator: WeatherAggregator,
        local_tz: tzinfo,
        clock: Callable[[], datetime] | None = None,
        look_ahead_days: int = LOOK_AHEAD_DAYS,
    ) -> None:
        self._departures = departure_repository
        self._weather = weather_aggregator
        self._local_tz = local_tz
        self._clock = clock or (lambda: datetime.now(local_tz))
        self._look_ahead_days = look_ahead_days

    async def get_departures(
        self, station: Station, when: datetime | None = None
    ) -> list[Departure]:
        """Departures of a station numbered as waves.

        Raises:
            TransportApiError: If the departures cannot be fetched.
        """
        when = when or self._clock()
        departures = await self._departures.get_departures(station.id, when)
        logger.debug(f"Loaded {len(departures)} departures for {station.name}")
        return assign_wave_numbers(departures)

    async def get_departures_with_weather(
        self, station: Station, when: datetime | None = None
    ) -> list[DepartureWithWeather]:
        """Departures each paired with the forecast closest to its time.

        Missed departures get no forecast. A failing forecast lookup is logged
        and leaves that departure without weather.
        """
        departures = await self.get_departures(station, when)
        results: list[DepartureWithWeather] = []
        for departure in departures:
            weather = None
            if departure.status != DepartureStatus.MISSED:
                weather = await self._forecast_for(station, departure)
            results.append(DepartureWithWeather(departure=departure, weather=weather))
        return results

    async def _forecast_for(self, station: Station, departure: Departure) -> WeatherResult | None:
        if departure.scheduled_time is None or not has_coordinates(station):
            return None
        try:
            return await self._weather.get_forecast_for_specific_time(
                station.latitude, station.longitude, departure.scheduled_time
            )
        except (WeatherApiError, ValueError) as e:
            logger.error(
                f"Error loading forecast for departure at {departure.time} "
                f"from {station.name}: {e}"
            )
            return None

    async def find_next_departure_today(self, station: Station) -> Departure | None:
        """First departure today that has not left yet, or None."""
        now = self._clock()
        departures = await self.get_departures(station, now)
        return next(
            (d for d in departures if d.scheduled_time is not None and d.scheduled_time > now),
            None,
        )

    async def has_future_departures(self, station: Station) -> bool:
        """Whether any of the next days has departures.

        Failures for individual days are ignored.
        """
        today = self._clock().astimezone(self._local_tz).date()
        for offset in range(1, self._look_ahead_days + 1):
            day_start = datetime.combine(
                today + timedelta(days=offset), time(0, 0), tzinfo=self._local_tz
            )
            try:
                if await self._departures.get_departures(station.id, day_start):
                    return True
            except TransportApiError as e:
                logger.debug(f"Ignoring error checking {station.name} on {day_start:%Y-%m-%d}: {e}")
        return False

    def no_waves_message(self, station: Station) -> str:
        """Message to show when a station has no departures left today."""
        return no_waves_message(station.id)
