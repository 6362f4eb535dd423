"""Departure domain model."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class DepartureStatus(Enum):
    """Live status of a departure relative to the current time."""

    MISSED = "missed"
    NOW = "now"
    PLANNED = "planned"


@dataclass(frozen=True)
class Departure:
    """Represents a single boat departure from a station."""

    time: str  # "HH:MM" in local time
    wave_number: int  # Display sequence, assigned after fetching
    journey_number: str
    destination: str
    status: DepartureStatus
    next_station: str = ""
    scheduled_time: datetime | None = None
    is_estimated_time: bool = (
        False  # True when the source had no departure time and "now" was substituted
    )
