"""Transport API adapter for transport.opendata.ch boat departures."""

from nextwave.adapters.transport_api.transport_departure_repository import (
    TransportDepartureRepository,
)

__all__ = ["TransportDepartureRepository"]
