"""Departure repository port."""

from datetime import datetime
from typing import Protocol

from nextwave.domain.models.departure import Departure


class DepartureRepository(Protocol):
    """Port for retrieving boat departures."""

    async def get_departures(self, station_id: str, when: datetime) -> list[Departure]:
        """Get departures for a station, starting at ``when`` (local date and time)."""
        ...
