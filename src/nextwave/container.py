"""Composition root wiring adapters into the application services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from nextwave.adapters.catalog import JsonStationCatalog
from nextwave.adapters.openweather_api import OpenWeatherClient
from nextwave.adapters.storage import JsonFileKeyValueStore
from nextwave.adapters.transport_api import TransportDepartureRepository
from nextwave.application.services import (
    DepartureService,
    FavoritesStore,
    NearestStationResolver,
    WeatherAggregator,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    import aiohttp

    from nextwave.adapters.config import AppConfig


@dataclass
class ServiceContainer:
    """All long-lived services, built once per process."""

    config: AppConfig
    catalog: JsonStationCatalog
    departure_repository: TransportDepartureRepository
    weather_client: OpenWeatherClient
    weather: WeatherAggregator
    favorites: FavoritesStore
    nearest: NearestStationResolver
    departures: DepartureService


def build_container(
    config: AppConfig,
    session: aiohttp.ClientSession,
    clock: Callable[[], datetime] | None = None,
) -> ServiceContainer:
    """Create the services for one aiohttp session."""
    local_tz = config.tzinfo
    clock = clock or (lambda: datetime.now(local_tz))

    departure_repository = TransportDepartureRepository(
        session,
        local_tz,
        base_url=config.transport_api_base_url,
        limit=config.transport_api_limit,
        timeout_seconds=config.transport_api_timeout,
        category=config.transport_category,
        transportations=config.transport_transportations,
        clock=clock,
    )
    weather_client = OpenWeatherClient(
        session,
        config.openweather_api_key,
        base_url=config.weather_api_base_url,
        units=config.weather_units,
        timeout_seconds=config.weather_api_timeout,
    )
    weather = WeatherAggregator(
        weather_client,
        local_tz,
        clock=clock,
        weather_ttl=timedelta(seconds=config.weather_cache_ttl_seconds),
        forecast_ttl=timedelta(seconds=config.forecast_cache_ttl_seconds),
        pressure_window=timedelta(hours=config.pressure_history_hours),
        pressure_threshold=config.pressure_trend_threshold_hpa,
        icon_url_template=config.weather_icon_url_template,
    )

    return ServiceContainer(
        config=config,
        catalog=JsonStationCatalog(config.stations_file),
        departure_repository=departure_repository,
        weather_client=weather_client,
        weather=weather,
        favorites=FavoritesStore(
            JsonFileKeyValueStore(config.favorites_path), max_favorites=config.max_favorites
        ),
        nearest=NearestStationResolver(),
        departures=DepartureService(departure_repository, weather, local_tz, clock=clock),
    )
