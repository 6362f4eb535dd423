"""Station repository port."""

from typing import Protocol

from nextwave.domain.models.station import Station


class StationRepository(Protocol):
    """Port for retrieving the known lake stations."""

    def load_stations(self) -> list[Station]:
        """Load all stations. Returns an empty list if the data is unavailable."""
        ...
