"""Command line interface for NextWave."""

import argparse
import asyncio
import json
import sys
from datetime import date, datetime, time
from typing import Any

import aiohttp
from pydantic import TypeAdapter

from nextwave.adapters.config import AppConfig
from nextwave.container import ServiceContainer, build_container
from nextwave.domain.errors import TransportApiError, WeatherApiError
from nextwave.domain.models.departure import DepartureStatus
from nextwave.domain.models.favorites import FavoriteResult
from nextwave.domain.models.station import GeoPoint, Station
from nextwave.domain.models.station_overview import DepartureWithWeather
from nextwave.domain.models.weather import WeatherResult
from nextwave.main import configure_logging, watch

_any_adapter: TypeAdapter[Any] = TypeAdapter(Any)


def to_json(value: Any) -> str:
    """Serialize dataclasses, enums and datetimes to indented JSON."""
    return json.dumps(_any_adapter.dump_python(value, mode="json"), indent=2, ensure_ascii=False)


def format_station(station: Station) -> str:
    kind = f", {station.type}" if station.type else ""
    return f"  {station.name} ({station.lake}{kind})\n    ID: {station.id}"


def format_weather(label: str, result: WeatherResult) -> str:
    info = result.info
    lines = [
        f"{label}: {info.description}{' (stale)' if result.is_stale else ''}",
        f"  Temperature: {info.temperature:.1f}°C "
        f"(min {info.temp_min:.1f}°C, max {info.temp_max:.1f}°C)",
        f"  Wind: {info.wind_speed_knots:.1f} kn {info.wind_direction_text}",
        f"  Pressure: {info.pressure} hPa ({info.pressure_trend.value})",
        f"  Humidity: {info.humidity}%",
    ]
    if info.wind_gust_knots is not None:
        lines.insert(3, f"  Gusts: {info.wind_gust_knots:.1f} kn")
    if info.morning_temp is not None and info.afternoon_temp is not None:
        lines.append(
            f"  Morning/afternoon: {info.morning_temp:.1f}°C / {info.afternoon_temp:.1f}°C"
        )
    if info.max_wind_speed_knots is not None:
        lines.append(f"  Max wind: {info.max_wind_speed_knots:.1f} kn")
    return "\n".join(lines)


def resolve_when(config: AppConfig, date_arg: str | None, time_arg: str | None) -> datetime:
    """Build the requested local date and time; missing parts default to now."""
    now = datetime.now(config.tzinfo)
    day = date.fromisoformat(date_arg) if date_arg else now.date()
    if time_arg:
        at = datetime.strptime(time_arg, "%H:%M").time()
    elif day == now.date():
        at = now.time()
    else:
        at = time(0, 0)
    return datetime.combine(day, at, tzinfo=config.tzinfo)


def find_station(container: ServiceContainer, station_id: str) -> Station:
    """Catalog station for an id, or a bare placeholder for unknown ids."""
    station = container.catalog.get_station_by_id(station_id)
    if station is None:
        return Station(
            id=station_id, name=station_id, latitude=0.0, longitude=0.0, city="", type=""
        )
    return station


def list_stations(container: ServiceContainer, lake: str | None, as_json: bool) -> None:
    stations = (
        container.catalog.get_stations_for_lake(lake) if lake else container.catalog.load_stations()
    )
    if as_json:
        print(to_json(stations))
        return
    if not stations:
        print(f"No stations found{f' on {lake}' if lake else ''}", file=sys.stderr)
        sys.exit(1)
    print(f"\nFound {len(stations)} station(s):\n")
    for station in stations:
        print(format_station(station))


async def show_departures(
    container: ServiceContainer, station_id: str, when: datetime, with_weather: bool, as_json: bool
) -> None:
    station = find_station(container, station_id)
    service = container.departures

    if with_weather:
        entries = await service.get_departures_with_weather(station, when)
    else:
        entries = [
            DepartureWithWeather(departure=d) for d in await service.get_departures(station, when)
        ]
    if as_json:
        print(to_json(entries))
        return

    print(f"\nDepartures from {station.name} on {when:%Y-%m-%d} after {when:%H:%M}:\n")
    if not entries:
        is_today = when.date() == datetime.now(container.config.tzinfo).date()
        if is_today and await service.has_future_departures(station):
            print(service.no_waves_message(station))
            print("No departures today. Check future dates.")
        else:
            print("No departures found")
        return

    for entry in entries:
        departure, weather = entry.departure, entry.weather
        marker = {
            DepartureStatus.MISSED: "missed",
            DepartureStatus.NOW: "NOW",
            DepartureStatus.PLANNED: "",
        }[departure.status]
        line = (
            f"  Wave {departure.wave_number:>2}  {departure.time}  "
            f"{departure.journey_number:>5}  to {departure.destination} "
            f"(next: {departure.next_station}) {marker}"
        )
        if weather is not None:
            info = weather.info
            line += (
                f"  {info.temperature:.0f}°C {info.wind_speed_knots:.0f} kn "
                f"{info.wind_direction_text}"
            )
        print(line.rstrip())


async def show_weather(
    container: ServiceContainer,
    latitude: float,
    longitude: float,
    forecast_only: bool,
    as_json: bool,
) -> None:
    if forecast_only:
        forecast = await container.weather.get_forecast_for_location(latitude, longitude)
        if as_json:
            print(to_json(forecast))
        else:
            print(format_weather("Tomorrow", forecast))
        return

    weather, forecast = await container.weather.get_weather_and_forecast(latitude, longitude)
    if as_json:
        print(to_json({"weather": weather, "forecast": forecast}))
        return
    print(format_weather("Now", weather))
    if forecast is not None:
        print(format_weather("Tomorrow", forecast))
    else:
        print("Tomorrow: forecast unavailable")


def show_nearest(
    container: ServiceContainer, latitude: float, longitude: float, as_json: bool
) -> None:
    stations = [
        s for s in container.catalog.load_stations() if s.latitude != 0.0 or s.longitude != 0.0
    ]
    nearest = container.nearest.find_nearest(stations, GeoPoint(latitude, longitude))
    if as_json:
        print(to_json(nearest))
        return
    if nearest.station is None:
        print("No stations available", file=sys.stderr)
        sys.exit(1)
    print(format_station(nearest.station))
    print(f"    Distance: {nearest.distance_km} km")


def manage_favorites(container: ServiceContainer, args: argparse.Namespace) -> None:
    favorites = container.favorites

    if args.favorites_command == "toggle":
        station = container.catalog.get_station_by_id(args.station_id)
        if station is None:
            print(f"Station {args.station_id} not found.", file=sys.stderr)
            sys.exit(1)
        result = favorites.toggle_favorite(station)
        messages = {
            FavoriteResult.ADDED: f"Added {station.name} to favorites",
            FavoriteResult.REMOVED: f"Removed {station.name} from favorites",
            FavoriteResult.MAX_REACHED: (
                f"Cannot add {station.name}: maximum of {favorites.max_favorites} favorites reached"
            ),
        }
        print(messages[result])
        if result == FavoriteResult.MAX_REACHED:
            sys.exit(1)
        return

    if args.favorites_command == "move":
        favorites.reorder_favorites(args.from_index, args.to_index)

    stations = favorites.favorites
    if getattr(args, "json", False):
        print(to_json(stations))
        return
    if not stations:
        print("No favorite stations.")
        return
    for index, station in enumerate(stations):
        print(f"{index}: {station.name} ({station.lake}) [{station.id}]")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nextwave",
        description="Boat departures and weather for Swiss lakes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List stations on a lake
  nextwave stations --lake Zürichsee

  # Departures with weather for a station (by UIC reference)
  nextwave departures 8503651 --weather

  # Weather and tomorrow's forecast for a coordinate
  nextwave weather 47.3655 8.5412

  # Nearest station to a coordinate
  nextwave nearest 47.37 8.54

  # Manage favorites and watch them
  nextwave favorites toggle 8503651
  nextwave watch
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    stations_parser = subparsers.add_parser("stations", help="List known stations")
    stations_parser.add_argument("--lake", help="Only stations on this lake")
    stations_parser.add_argument("--json", action="store_true", help="Output as JSON")

    departures_parser = subparsers.add_parser("departures", help="Show departures for a station")
    departures_parser.add_argument("station_id", help="Station ID (UIC reference, e.g. 8503651)")
    departures_parser.add_argument("--date", help="Date as YYYY-MM-DD (default: today)")
    departures_parser.add_argument("--time", help="Time as HH:MM (default: now)")
    departures_parser.add_argument(
        "--weather", action="store_true", help="Add the forecast for each departure"
    )
    departures_parser.add_argument("--json", action="store_true", help="Output as JSON")

    weather_parser = subparsers.add_parser("weather", help="Show weather for a coordinate")
    weather_parser.add_argument("latitude", type=float)
    weather_parser.add_argument("longitude", type=float)
    weather_parser.add_argument(
        "--forecast", action="store_true", help="Only show tomorrow's forecast"
    )
    weather_parser.add_argument("--json", action="store_true", help="Output as JSON")

    nearest_parser = subparsers.add_parser("nearest", help="Find the nearest station")
    nearest_parser.add_argument("latitude", type=float)
    nearest_parser.add_argument("longitude", type=float)
    nearest_parser.add_argument("--json", action="store_true", help="Output as JSON")

    favorites_parser = subparsers.add_parser("favorites", help="Manage favorite stations")
    favorites_sub = favorites_parser.add_subparsers(dest="favorites_command")
    list_parser = favorites_sub.add_parser("list", help="List favorites")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")
    toggle_parser = favorites_sub.add_parser("toggle", help="Add or remove a favorite")
    toggle_parser.add_argument("station_id", help="Station ID")
    move_parser = favorites_sub.add_parser("move", help="Move a favorite to a new position")
    move_parser.add_argument("from_index", type=int)
    move_parser.add_argument("to_index", type=int)

    subparsers.add_parser("watch", help="Continuously show favorite stations")
    return parser


async def run_command(container: ServiceContainer, args: argparse.Namespace) -> None:
    """Dispatch a parsed command against the services."""
    if args.command == "stations":
        list_stations(container, args.lake, args.json)
    elif args.command == "departures":
        when = resolve_when(container.config, args.date, args.time)
        await show_departures(container, args.station_id, when, args.weather, args.json)
    elif args.command == "weather":
        await show_weather(container, args.latitude, args.longitude, args.forecast, args.json)
    elif args.command == "nearest":
        show_nearest(container, args.latitude, args.longitude, args.json)
    elif args.command == "favorites":
        manage_favorites(container, args)
    elif args.command == "watch":
        await watch(container)


async def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = AppConfig()
    configure_logging(config.log_level)

    try:
        async with aiohttp.ClientSession() as session:
            await run_command(build_container(config, session), args)
    except TransportApiError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)
    except (WeatherApiError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
