"""Main entry point: watch favorite stations and print live updates."""

import asyncio
import logging
import sys

import aiohttp

from nextwave.adapters.config import AppConfig
from nextwave.application.pollers import RefreshPoller
from nextwave.container import ServiceContainer, build_container
from nextwave.domain.models.station_overview import StationOverview

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for an entry point."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def format_overview(overview: StationOverview) -> str:
    """One-line summary of a station for the watch output."""
    parts = [f"[{overview.updated_at:%H:%M:%S}] {overview.station.name}"]

    departure = overview.next_departure
    if departure is not None:
        parts.append(f"next wave {departure.time} to {departure.destination}")
    else:
        parts.append("no more waves today")

    if overview.weather is not None:
        info = overview.weather.info
        stale = " (stale)" if overview.weather.is_stale else ""
        parts.append(
            f"{info.temperature:.0f}°C, wind {info.wind_speed_knots:.0f} kn "
            f"{info.wind_direction_text}, {info.description}{stale}"
        )
    if overview.forecast is not None:
        parts.append(f"tomorrow {overview.forecast.info.temperature:.0f}°C")
    if overview.errors:
        parts.append("errors: " + "; ".join(overview.errors))
    return " | ".join(parts)


async def print_overview(overview: StationOverview) -> None:
    print(format_overview(overview), flush=True)


async def watch(container: ServiceContainer, stop_event: asyncio.Event | None = None) -> None:
    """Poll the favorite stations until ``stop_event`` is set or the task is cancelled."""
    if not container.favorites.favorites:
        logger.warning("No favorite stations, add some with 'nextwave favorites toggle'")

    poller = RefreshPoller(
        container.departures,
        container.weather,
        stations=lambda: container.favorites.favorites,
        on_update=print_overview,
        departure_interval=container.config.departure_refresh_seconds,
        weather_interval=container.config.weather_refresh_seconds,
    )
    stop_event = stop_event or asyncio.Event()
    await poller.start()
    try:
        await stop_event.wait()
    finally:
        await poller.stop()


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()
    configure_logging(config.log_level)

    if not config.openweather_api_key:
        logger.warning("OPENWEATHER_API_KEY is not set, weather requests will fail")

    async with aiohttp.ClientSession() as session:
        container = build_container(config, session)
        logger.info(f"Watching {len(container.favorites.favorites)} favorite station(s)")
        await watch(container)


def run() -> None:
    """Synchronous entry point for the watch command."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    run()
