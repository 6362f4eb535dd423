"""Parser turning stationboard journeys into Departure objects."""

import logging
from datetime import datetime, timedelta, tzinfo

from nextwave.adapters.transport_api.constants import (
    BOAT_CATEGORY,
    NOW_WINDOW_MINUTES,
    TIME_FORMAT,
    UNKNOWN_DESTINATION,
)
from nextwave.adapters.transport_api.models import Journey, Stop
from nextwave.domain.models.departure import Departure, DepartureStatus

logger = logging.getLogger(__name__)


def compute_status(
    departure_time: datetime, now: datetime, is_today: bool = True
) -> DepartureStatus:
    """Compute the live status of a departure.

    MISSED if it left before ``now``, NOW if it leaves within the next five
    minutes, PLANNED otherwise. Departures on any other day than today are
    always PLANNED.
    """
    if not is_today:
        return DepartureStatus.PLANNED
    if departure_time < now:
        return DepartureStatus.MISSED
    if departure_time - now < timedelta(minutes=NOW_WINDOW_MINUTES):
        return DepartureStatus.NOW
    return DepartureStatus.PLANNED


def format_journey_number(name: str | None) -> str:
    """Strip leading zeros from a journey name ("0038" -> "38", "0000" -> "0")."""
    if name is None:
        return ""
    return name.lstrip("0") or "0"


def resolve_next_station(journey: Journey) -> str:
    """Pick the next station of a journey.

    Uses the second entry of the pass list when there are at least two;
    this does not account for the vessel's position or direction of travel.
    Falls back to the final destination.
    """
    pass_list = journey.passList
    if pass_list is not None and len(pass_list) >= 2:
        station_name = pass_list[1].station.name
        if station_name:
            return station_name
    return journey.to or UNKNOWN_DESTINATION


class DepartureParser:
    """Parses stationboard journeys into Departure objects."""

    def __init__(self, local_tz: tzinfo, category: str = BOAT_CATEGORY) -> None:
        """Initialize the parser.

        Args:
            local_tz: Timezone used for the "HH:MM" display time.
            category: Journey category to keep; everything else is discarded.
        """
        self._local_tz = local_tz
        self._category = category

    def parse_departures(
        self, journeys: list[Journey], now: datetime, is_today: bool = True
    ) -> list[Departure]:
        """Filter journeys to the boat category and convert them, keeping source order."""
        boat_journeys = [j for j in journeys if j.category == self._category]
        if len(boat_journeys) != len(journeys):
            logger.debug(
                f"Discarded {len(journeys) - len(boat_journeys)} non-{self._category} journeys"
            )
        return [self._parse_departure(journey, now, is_today) for journey in boat_journeys]

    def _parse_departure(self, journey: Journey, now: datetime, is_today: bool) -> Departure:
        departure_time = self._parse_stop_departure(journey.stop)
        is_estimated = departure_time is None
        if departure_time is None:
            logger.warning(
                f"Journey {journey.name or '?'} to {journey.to or '?'} has no departure time, "
                f"using current time"
            )
            departure_time = now

        return Departure(
            time=departure_time.astimezone(self._local_tz).strftime(TIME_FORMAT),
            wave_number=0,
            journey_number=format_journey_number(journey.name),
            destination=journey.to or UNKNOWN_DESTINATION,
            status=compute_status(departure_time, now, is_today),
            next_station=resolve_next_station(journey),
            scheduled_time=departure_time,
            is_estimated_time=is_estimated,
        )

    def _parse_stop_departure(self, stop: Stop) -> datetime | None:
        """Parse the stop's departure time, preferring the ISO string over the Unix timestamp."""
        parsed = self.parse_time(stop.departure)
        if parsed is not None:
            return parsed
        if stop.departureTimestamp is not None:
            return datetime.fromtimestamp(stop.departureTimestamp, tz=self._local_tz)
        return None

    def parse_time(self, time_str: str | None) -> datetime | None:
        """Parse an ISO 8601 time with offset ("2024-05-01T14:05:00+0200" or "+02:00")."""
        if not time_str:
            return None

        try:
            return datetime.strptime(time_str, "%Y-%m-%dT%H:%M:%S%z")
        except ValueError:
            pass

        try:
            parsed = datetime.fromisoformat(time_str.replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"Unparseable departure time: {time_str!r}")
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=self._local_tz)
        return parsed
