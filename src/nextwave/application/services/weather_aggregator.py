"""Weather aggregation with per-location caching and pressure trend tracking."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import date, datetime, time, timedelta, tzinfo
from typing import TYPE_CHECKING

from nextwave.domain.errors import WeatherApiError
from nextwave.domain.models.weather import PressureTrend, WeatherInfo, WeatherResult
from nextwave.domain.models.weather_response import ForecastItem, WeatherCondition

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from nextwave.domain.models.weather_response import ForecastResponse, WeatherResponse
    from nextwave.domain.ports.weather_provider import WeatherProvider

logger = logging.getLogger(__name__)

DEFAULT_ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@2x.png"

MIDDAY = time(12, 0)
MORNING = time(9, 0)
AFTERNOON = time(15, 0)


def location_key(latitude: float, longitude: float) -> str:
    """Cache key of a coordinate pair."""
    return f"{latitude}_{longitude}"


def closest_entry(items: list[ForecastItem], target: datetime) -> ForecastItem | None:
    """Forecast entry nearest to ``target``; the earliest entry wins ties."""
    if not items:
        return None
    target_ts = target.timestamp()
    return min(items, key=lambda item: abs(item.dt - target_ts))


class WeatherAggregator:
    """Serves current weather and forecasts for coordinates, backed by caches.

    Current weather is cached for five minutes and forecasts for one hour.
    When a fetch fails, the last cached value for the key is returned marked
    as stale; only without any cached value does the error reach the caller.

    The caches are guarded by a lock that is never held while a request is in
    flight. Two concurrent misses on the same key therefore both fetch and the
    later write wins.

    Time specific forecasts for days before today are dropped on the next
    time specific lookup.
    """

    def __init__(
        self,
        provider: WeatherProvider,
        local_tz: tzinfo,
        clock: Callable[[], datetime] | None = None,
        weather_ttl: timedelta = timedelta(minutes=5),
        forecast_ttl: timedelta = timedelta(hours=1),
        pressure_window: timedelta = timedelta(hours=6),
        pressure_threshold: int = 2,
        icon_url_template: str = DEFAULT_ICON_URL_TEMPLATE,
    ) -> None:
        """Initialize the aggregator.

        Args:
            provider: Source of raw weather data.
            local_tz: Timezone that defines "tomorrow" for forecasts.
            clock: Returns the current, timezone aware time.
            weather_ttl: Freshness window of current weather.
            forecast_ttl: Freshness window of forecasts.
            pressure_window: Age limit of pressure samples used for the trend.
            pressure_threshold: Change in hPa that counts as rising or falling.
            icon_url_template: Icon URL with an ``{icon}`` placeholder.
        """
        self._provider = provider
        self._local_tz = local_tz
        self._clock = clock or (lambda: datetime.now(local_tz))
        self._weather_ttl = weather_ttl
        self._forecast_ttl = forecast_ttl
        self._pressure_window = pressure_window
        self._pressure_threshold = pressure_threshold
        self._icon_url_template = icon_url_template

        self.current_weather_cache: dict[str, WeatherInfo] = {}
        self.forecast_cache: dict[str, WeatherInfo] = {}
        self.pressure_history: dict[str, list[tuple[datetime, int]]] = {}
        # Survives eviction so a refetch after clear_cache still moves forward
        self._last_written: dict[str, datetime] = {}
        self._forecast_targets: dict[str, datetime] = {}
        self._lock = asyncio.Lock()

    async def get_weather_for_location(self, latitude: float, longitude: float) -> WeatherResult:
        """Current weather at a coordinate."""
        key = location_key(latitude, longitude)

        async def build() -> WeatherInfo:
            response = await self._provider.get_current_weather(latitude, longitude)
            return self._from_current(response)

        return await self._cached(
            self.current_weather_cache, key, self._weather_ttl, build, track_pressure=True
        )

    async def get_forecast_for_location(self, latitude: float, longitude: float) -> WeatherResult:
        """Forecast for tomorrow around midday, with morning/afternoon temperatures."""
        key = f"{location_key(latitude, longitude)}_forecast"

        async def build() -> WeatherInfo:
            response = await self._provider.get_forecast(latitude, longitude)
            return self._tomorrow_forecast(response)

        return await self._cached(self.forecast_cache, key, self._forecast_ttl, build)

    async def get_forecast_for_specific_time(
        self, latitude: float, longitude: float, target_time: datetime
    ) -> WeatherResult:
        """Forecast entry closest to ``target_time`` (e.g. a departure)."""
        local_target = self._localize(target_time)
        key = f"{location_key(latitude, longitude)}_{local_target:%Y%m%d}_{local_target:%H:%M}"
        async with self._lock:
            self._drop_past_forecasts()
            self._forecast_targets[key] = local_target

        async def build() -> WeatherInfo:
            response = await self._provider.get_forecast(latitude, longitude)
            entry = closest_entry(response.items, local_target)
            if entry is None:
                raise WeatherApiError("Forecast contains no entries")
            return self._from_forecast_entry(entry, response)

        return await self._cached(self.forecast_cache, key, self._forecast_ttl, build)

    async def get_weather_and_forecast(
        self, latitude: float, longitude: float
    ) -> tuple[WeatherResult, WeatherResult | None]:
        """Current weather plus tomorrow's forecast.

        A failing forecast yields ``None``; a failing current weather lookup raises.
        """
        weather = await self.get_weather_for_location(latitude, longitude)
        try:
            forecast = await self.get_forecast_for_location(latitude, longitude)
        except WeatherApiError as e:
            logger.warning(f"Forecast unavailable for {location_key(latitude, longitude)}: {e}")
            forecast = None
        return weather, forecast

    async def force_refresh_weather(self, latitude: float, longitude: float) -> WeatherResult:
        """Drop the cached current weather for a coordinate and fetch it again."""
        key = location_key(latitude, longitude)
        async with self._lock:
            self.current_weather_cache.pop(key, None)
        logger.debug(f"Force refreshing weather for {key}")
        return await self.get_weather_for_location(latitude, longitude)

    async def force_refresh_forecast(self, latitude: float, longitude: float) -> WeatherResult:
        """Drop the cached forecast for a coordinate and fetch it again."""
        key = f"{location_key(latitude, longitude)}_forecast"
        async with self._lock:
            self.forecast_cache.pop(key, None)
        logger.debug(f"Force refreshing forecast for {key}")
        return await self.get_forecast_for_location(latitude, longitude)

    async def clear_cache(self) -> None:
        """Empty both caches. Pressure history is kept."""
        async with self._lock:
            self.current_weather_cache.clear()
            self.forecast_cache.clear()
            self._forecast_targets.clear()
        logger.debug("Cleared weather caches")

    def calculate_pressure_trend(self, key: str, pressure: int) -> PressureTrend:
        """Record a pressure sample for ``key`` and derive the trend.

        Samples older than the window are dropped. With fewer than two samples
        the trend is STABLE; otherwise the newest minus the oldest sample is
        compared against the threshold.
        """
        now = self._clock()
        history = self.pressure_history.setdefault(key, [])
        history.append((now, pressure))

        cutoff = now - self._pressure_window
        history[:] = sorted(
            (sample for sample in history if sample[0] >= cutoff), key=lambda s: s[0]
        )

        if len(history) < 2:
            return PressureTrend.STABLE

        difference = history[-1][1] - history[0][1]
        if difference > self._pressure_threshold:
            return PressureTrend.RISING
        if difference < -self._pressure_threshold:
            return PressureTrend.FALLING
        return PressureTrend.STABLE

    async def _cached(
        self,
        cache: dict[str, WeatherInfo],
        key: str,
        ttl: timedelta,
        build: Callable[[], Awaitable[WeatherInfo]],
        track_pressure: bool = False,
    ) -> WeatherResult:
        async with self._lock:
            cached = cache.get(key)
            if cached is not None and self._clock() - cached.last_updated < ttl:
                logger.debug(f"Using cached weather data for {key}")
                return WeatherResult(cached)

        try:
            logger.debug(f"Fetching weather data for {key}")
            info = await build()
        except WeatherApiError as e:
            async with self._lock:
                stale = cache.get(key)
            if stale is None:
                logger.error(f"Error fetching weather for {key}: {e}")
                raise
            logger.warning(f"Error fetching weather for {key}, serving cached data: {e}")
            return WeatherResult(stale, is_stale=True)

        async with self._lock:
            if track_pressure:
                info = replace(
                    info, pressure_trend=self.calculate_pressure_trend(key, info.pressure)
                )
            previous = self._last_written.get(key)
            if previous is not None and info.last_updated <= previous:
                info = replace(info, last_updated=previous + timedelta(microseconds=1))
            self._last_written[key] = info.last_updated
            cache[key] = info
        return WeatherResult(info)

    def _localize(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=self._local_tz)
        return value.astimezone(self._local_tz)

    def _drop_past_forecasts(self) -> None:
        """Forget time specific forecasts for days before today. Caller holds the lock."""
        today = self._localize(self._clock()).date()
        past = [key for key, target in self._forecast_targets.items() if target.date() < today]
        for key in past:
            del self._forecast_targets[key]
            self.forecast_cache.pop(key, None)
            self._last_written.pop(key, None)
        if past:
            logger.debug(f"Dropped {len(past)} forecasts for past days")

    def _tomorrow(self) -> date:
        return self._localize(self._clock()).date() + timedelta(days=1)

    def _at_tomorrow(self, at: time) -> datetime:
        return datetime.combine(self._tomorrow(), at, tzinfo=self._local_tz)

    def _icon_url(self, icon: str) -> str:
        return self._icon_url_template.format(icon=icon)

    def _from_current(self, response: WeatherResponse) -> WeatherInfo:
        condition = response.weather[0] if response.weather else WeatherCondition()
        return WeatherInfo(
            temperature=response.main.temp,
            temp_min=response.main.temp_min,
            temp_max=response.main.temp_max,
            wind_speed=response.wind.speed,
            wind_deg=response.wind.deg,
            wind_gust=response.wind.gust,
            pressure=response.main.pressure,
            description=condition.description,
            icon_url=self._icon_url(condition.icon),
            humidity=response.main.humidity,
            last_updated=self._clock(),
        )

    def _condition_for(self, entry: ForecastItem, response: ForecastResponse) -> WeatherCondition:
        """The entry's condition, else the first condition of the series."""
        if entry.weather:
            return entry.weather[0]
        first = response.items[0] if response.items else None
        if first is not None and first.weather:
            return first.weather[0]
        raise WeatherApiError("No weather data found in forecast")

    def _from_forecast_entry(
        self, entry: ForecastItem, response: ForecastResponse, **extra: float | None
    ) -> WeatherInfo:
        condition = self._condition_for(entry, response)
        return WeatherInfo(
            temperature=entry.main.temp,
            temp_min=entry.main.temp_min,
            temp_max=entry.main.temp_max,
            wind_speed=entry.wind.speed,
            wind_deg=entry.wind.deg,
            wind_gust=entry.wind.gust,
            pressure=entry.main.pressure,
            description=condition.description,
            icon_url=self._icon_url(condition.icon),
            humidity=entry.main.humidity,
            forecast_date=datetime.fromtimestamp(entry.dt, tz=self._local_tz),
            last_updated=self._clock(),
            **extra,
        )

    def _tomorrow_forecast(self, response: ForecastResponse) -> WeatherInfo:
        items = response.items
        entry = closest_entry(items, self._at_tomorrow(MIDDAY))
        if entry is None:
            raise WeatherApiError("No forecast found for tomorrow")

        morning = closest_entry(items, self._at_tomorrow(MORNING))
        afternoon = closest_entry(items, self._at_tomorrow(AFTERNOON))
        return self._from_forecast_entry(
            entry,
            response,
            morning_temp=morning.main.temp if morning else None,
            afternoon_temp=afternoon.main.temp if afternoon else None,
            max_wind_speed=self._max_wind_speed_tomorrow(items),
        )

    def _max_wind_speed_tomorrow(self, items: list[ForecastItem]) -> float:
        start = self._at_tomorrow(time(0, 0, 0)).timestamp()
        end = self._at_tomorrow(time(23, 59, 59)).timestamp()
        speeds = [item.wind.speed for item in items if start <= item.dt <= end]
        return max(speeds, default=0.0)
