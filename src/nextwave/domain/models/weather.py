"""Weather domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

KNOTS_PER_METER_PER_SECOND = 1.94384

# Compass sectors as (upper bound in degrees, label), checked in order
_WIND_DIRECTIONS = (
    (22, "N"),
    (67, "NE"),
    (112, "E"),
    (157, "SE"),
    (202, "S"),
    (247, "SW"),
    (292, "W"),
    (337, "NW"),
    (360, "N"),
)


class PressureTrend(Enum):
    """Direction of the air pressure over the recent history window."""

    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"


def wind_direction_text(degrees: int) -> str:
    """Convert a wind direction in degrees to a compass label (N, NE, ...)."""
    if degrees < 0:
        return "N/A"
    for upper_bound, label in _WIND_DIRECTIONS:
        if degrees <= upper_bound:
            return label
    return "N/A"


def _to_knots(speed: float | None) -> float | None:
    return speed * KNOTS_PER_METER_PER_SECOND if speed is not None else None


@dataclass(frozen=True)
class WeatherInfo:
    """Simplified weather information for a location.

    Wind speeds are in m/s, pressure in hPa and temperatures in degrees Celsius.
    Instances are never mutated; a newer fetch produces a new instance.
    """

    temperature: float
    temp_min: float
    temp_max: float
    wind_speed: float
    wind_deg: int
    pressure: int
    description: str
    icon_url: str
    humidity: int
    last_updated: datetime
    morning_temp: float | None = None
    afternoon_temp: float | None = None
    max_wind_speed: float | None = None
    wind_gust: float | None = None
    pressure_trend: PressureTrend = PressureTrend.STABLE
    forecast_date: datetime | None = None

    @property
    def wind_speed_knots(self) -> float:
        """Wind speed in knots."""
        return self.wind_speed * KNOTS_PER_METER_PER_SECOND

    @property
    def max_wind_speed_knots(self) -> float | None:
        """Maximum wind speed in knots, if known."""
        return _to_knots(self.max_wind_speed)

    @property
    def wind_gust_knots(self) -> float | None:
        """Wind gust in knots, if known."""
        return _to_knots(self.wind_gust)

    @property
    def wind_direction_text(self) -> str:
        """Wind direction as a compass label."""
        return wind_direction_text(self.wind_deg)


@dataclass(frozen=True)
class WeatherResult:
    """Weather lookup result that tells fresh data apart from stale fallbacks.

    ``is_stale`` is True when the upstream fetch failed and an older cached
    value was served instead.
    """

    info: WeatherInfo
    is_stale: bool = False
