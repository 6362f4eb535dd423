"""Poller keeping departures and weather of watched stations up to date."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import TYPE_CHECKING

from nextwave.application.services.departure_service import has_coordinates
from nextwave.domain.errors import TransportApiError, WeatherApiError
from nextwave.domain.models.station_overview import StationOverview

if TYPE_CHECKING:
    from nextwave.application.services.departure_service import DepartureService
    from nextwave.application.services.weather_aggregator import WeatherAggregator
    from nextwave.domain.models.departure import Departure
    from nextwave.domain.models.station import Station
    from nextwave.domain.models.weather import WeatherResult

logger = logging.getLogger(__name__)

OverviewCallback = Callable[[StationOverview], Awaitable[None]]


class RefreshPoller:
    """Runs two refresh loops over the watched stations.

    Departures are reloaded every ``departure_interval`` seconds. Weather is
    reloaded every ``weather_interval`` seconds after clearing the weather
    cache. Both loops publish a fresh ``StationOverview`` per station through
    ``on_update``.
    """

    def __init__(
        self,
        departure_service: DepartureService,
        weather_aggregator: WeatherAggregator,
        stations: Callable[[], list[Station]],
        on_update: OverviewCallback,
        departure_interval: float = 60,
        weather_interval: float = 300,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the poller.

        Args:
            departure_service: Loads departures of a station.
            weather_aggregator: Loads current weather and forecasts.
            stations: Returns the stations to watch; called on every pass.
            on_update: Receives each new overview.
            departure_interval: Seconds between departure refreshes.
            weather_interval: Seconds between weather refreshes.
            clock: Returns the current time for the overview timestamp.
        """
        self.departure_service = departure_service
        self.weather_aggregator = weather_aggregator
        self.stations = stations
        self.on_update = on_update
        self.departure_interval = departure_interval
        self.weather_interval = weather_interval
        self._clock = clock or (lambda: datetime.now().astimezone())

        self._next_departures: dict[str, Departure | None] = {}
        self._departure_errors: dict[str, str] = {}
        self._weather: dict[str, tuple[WeatherResult | None, WeatherResult | None]] = {}
        self._weather_errors: dict[str, str] = {}
        self._tasks: list[asyncio.Task] = []

    @property
    def is_running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    async def start(self) -> None:
        """Start both refresh loops."""
        if self.is_running:
            logger.warning("Refresh poller already running")
            return

        self._tasks = [
            asyncio.create_task(self._loop(self.refresh_departures, self.departure_interval)),
            asyncio.create_task(self._loop(self.refresh_weather, self.weather_interval)),
        ]
        logger.info(
            f"Started refresh poller (departures every {self.departure_interval}s, "
            f"weather every {self.weather_interval}s)"
        )

    async def stop(self) -> None:
        """Stop both refresh loops and wait for them to finish."""
        tasks = [task for task in self._tasks if not task.done()]
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._tasks = []
        if tasks:
            logger.info("Stopped refresh poller")

    async def _loop(self, refresh: Callable[[], Awaitable[None]], interval: float) -> None:
        # First pass runs immediately
        try:
            while True:
                try:
                    await refresh()
                except Exception as e:
                    logger.error(f"Refresh pass failed: {e}", exc_info=True)
                await asyncio.sleep(interval)
        except asyncio.CancelledError:
            logger.debug("Refresh loop cancelled")
            raise

    async def refresh_departures(self) -> None:
        """Reload the next departure of every watched station and publish."""
        for station in self.stations():
            try:
                next_departure = await self.departure_service.find_next_departure_today(station)
            except TransportApiError as e:
                logger.warning(f"Departures unavailable for {station.name}: {e.message}")
                self._departure_errors[station.id] = e.message
            else:
                self._next_departures[station.id] = next_departure
                self._departure_errors.pop(station.id, None)
            await self._publish(station)

    async def refresh_weather(self) -> None:
        """Clear the weather cache, reload weather for every watched station and publish."""
        await self.weather_aggregator.clear_cache()
        for station in self.stations():
            if not has_coordinates(station):
                continue
            try:
                self._weather[station.id] = await self.weather_aggregator.get_weather_and_forecast(
                    station.latitude, station.longitude
                )
            except (WeatherApiError, ValueError) as e:
                logger.warning(f"Weather unavailable for {station.name}: {e}")
                self._weather_errors[station.id] = f"Weather unavailable: {e}"
            else:
                self._weather_errors.pop(station.id, None)
            await self._publish(station)

    def overview(self, station: Station) -> StationOverview:
        """Latest known state of a station."""
        weather, forecast = self._weather.get(station.id, (None, None))
        errors = [
            error
            for error in (
                self._departure_errors.get(station.id),
                self._weather_errors.get(station.id),
            )
            if error
        ]
        return StationOverview(
            station=station,
            updated_at=self._clock(),
            next_departure=self._next_departures.get(station.id),
            weather=weather,
            forecast=forecast,
            errors=errors,
        )

    async def _publish(self, station: Station) -> None:
        try:
            await self.on_update(self.overview(station))
        except Exception as e:
            logger.error(f"Update callback failed for {station.name}: {e}", exc_info=True)
