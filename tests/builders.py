"""Builders and fakes shared by the tests."""

from datetime import datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock, MagicMock
from zoneinfo import ZoneInfo

from nextwave.domain.models import (
    Departure,
    DepartureStatus,
    ForecastItem,
    ForecastResponse,
    Main,
    Station,
    WeatherCondition,
    WeatherResponse,
    Wind,
)

ZURICH = ZoneInfo("Europe/Zurich")


class FakeClock:
    """Manually advanced clock returning timezone aware datetimes."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class InMemoryKeyValueStore:
    """Dict backed key-value store."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data = dict(data or {})
        self.put_calls = 0

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def put(self, key: str, value: str) -> None:
        self.put_calls += 1
        self.data[key] = value


def make_station(
    station_id: str = "8503651",
    name: str = "Zürich Bürkliplatz (See)",
    latitude: float = 47.3655,
    longitude: float = 8.5412,
    lake: str = "Zürichsee",
) -> Station:
    return Station(
        id=station_id,
        name=name,
        latitude=latitude,
        longitude=longitude,
        city=name.split()[0],
        type="Terminal",
        lake=lake,
        wave_rating=3,
        description="",
    )


def make_departure(
    scheduled_time: datetime | None,
    status: DepartureStatus = DepartureStatus.PLANNED,
    destination: str = "Rapperswil SG (See)",
    journey_number: str = "3855",
) -> Departure:
    return Departure(
        time=scheduled_time.strftime("%H:%M") if scheduled_time else "00:00",
        wave_number=0,
        journey_number=journey_number,
        destination=destination,
        status=status,
        next_station="Zürich Enge (See)",
        scheduled_time=scheduled_time,
    )


def make_weather_response(
    temp: float = 21.5,
    pressure: int = 1013,
    wind_speed: float = 3.2,
    wind_deg: int = 225,
    description: str = "clear sky",
    icon: str = "01d",
) -> WeatherResponse:
    return WeatherResponse(
        weather=[WeatherCondition(id=800, main="Clear", description=description, icon=icon)],
        main=Main(temp=temp, temp_min=temp - 2, temp_max=temp + 2, pressure=pressure, humidity=60),
        wind=Wind(speed=wind_speed, deg=wind_deg, gust=wind_speed + 2),
        dt=1718013600,
        name="Zurich",
    )


def make_forecast_item(
    at: datetime,
    temp: float = 20.0,
    wind_speed: float = 3.0,
    description: str | None = "few clouds",
    icon: str = "02d",
) -> ForecastItem:
    weather = (
        [WeatherCondition(id=801, main="Clouds", description=description, icon=icon)]
        if description is not None
        else []
    )
    return ForecastItem(
        dt=int(at.timestamp()),
        main=Main(temp=temp, temp_min=temp - 1, temp_max=temp + 1, pressure=1015, humidity=55),
        weather=weather,
        wind=Wind(speed=wind_speed, deg=180),
    )


def make_forecast(items: list[ForecastItem]) -> ForecastResponse:
    return ForecastResponse(items=items)


def mock_session(
    status: int = 200,
    json_data: Any = None,
    text: str = "",
    get_side_effect: BaseException | None = None,
) -> MagicMock:
    """aiohttp-like session whose ``get`` yields a canned response."""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=json_data)
    response.text = AsyncMock(return_value=text)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)

    session = MagicMock()
    if get_side_effect is not None:
        session.get.side_effect = get_side_effect
    else:
        session.get.return_value = context
    return session


