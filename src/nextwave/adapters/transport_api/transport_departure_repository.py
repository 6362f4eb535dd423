"""Departure repository adapter for the transport.opendata.ch stationboard.

API Documentation: https://transport.opendata.ch/docs.html
"""

import asyncio
import logging
from datetime import date, datetime, tzinfo
from typing import TYPE_CHECKING, Any

import aiohttp
from pydantic import ValidationError

from nextwave.adapters.api_request_logger import log_api_request
from nextwave.adapters.transport_api.constants import (
    BOAT_CATEGORY,
    DATE_FORMAT,
    DEFAULT_HEADERS,
    STATIONBOARD_PATH,
    TIME_FORMAT,
)
from nextwave.adapters.transport_api.departure_parser import DepartureParser
from nextwave.adapters.transport_api.models import StationboardResponse
from nextwave.domain.errors import (
    InvalidResponseError,
    InvalidUrlError,
    NoJourneyFoundError,
    TransportApiError,
    TransportNetworkError,
    TransportTimeoutError,
)
from nextwave.domain.models.departure import Departure
from nextwave.domain.ports.departure_repository import DepartureRepository

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

    from aiohttp import ClientResponse, ClientSession

NO_CONNECTION_DETAIL = "No internet connection. Please check your connection and try again."


class TransportDepartureRepository(DepartureRepository):
    """Fetches boat departures for a station from the stationboard endpoint.

    Every failure is translated into a ``TransportApiError`` subclass before
    it reaches the caller; aiohttp and pydantic exceptions never escape.
    """

    def __init__(
        self,
        session: "ClientSession",
        local_tz: tzinfo,
        base_url: str = "https://transport.opendata.ch/v1",
        limit: int = 50,
        timeout_seconds: float = 30,
        category: str = BOAT_CATEGORY,
        transportations: str = "ship",
        clock: "Callable[[], datetime] | None" = None,
    ) -> None:
        """Initialize the repository.

        Args:
            session: Shared aiohttp session.
            local_tz: Timezone for request date/time and displayed times.
            base_url: Base URL of the transport API.
            limit: Maximum number of journeys per request.
            timeout_seconds: Total request timeout.
            category: Journey category code of boat services.
            transportations: Transportation filter sent to the API.
            clock: Returns the current time; defaults to ``datetime.now(local_tz)``.
        """
        self._session = session
        self._local_tz = local_tz
        self._url = f"{base_url.rstrip('/')}/{STATIONBOARD_PATH}"
        self._limit = limit
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._transportations = transportations
        self._clock = clock or (lambda: datetime.now(local_tz))
        self._parser = DepartureParser(local_tz, category=category)

    def _build_params(self, station_id: str, when: datetime) -> dict[str, str | int]:
        local_when = when.astimezone(self._local_tz) if when.tzinfo else when
        return {
            "id": station_id,
            "limit": self._limit,
            "date": local_when.strftime(DATE_FORMAT),
            "time": local_when.strftime(TIME_FORMAT),
            "transportations[]": self._transportations,
        }

    async def get_departures(self, station_id: str, when: datetime) -> list[Departure]:
        """Get boat departures for a station.

        Args:
            station_id: UIC reference of the station (e.g. "8503651").
            when: Date and time to start the stationboard at.

        Returns:
            Departures ordered as returned by the API.

        Raises:
            TransportApiError: One of InvalidUrlError, InvalidResponseError,
                NoJourneyFoundError, TransportTimeoutError or TransportNetworkError.
        """
        params = self._build_params(station_id, when)
        try:
            response_data = await self._fetch_stationboard(params)
            stationboard = StationboardResponse.model_validate(response_data)
        except TransportApiError:
            raise
        except Exception as e:
            raise self._translate_error(e) from e

        now = self._clock()
        is_today = self._local_date(when) == self._local_date(now)
        logger.debug(
            f"Stationboard for {station_id} returned {len(stationboard.stationboard)} journeys"
        )
        return self._parser.parse_departures(stationboard.stationboard, now, is_today=is_today)

    async def _fetch_stationboard(self, params: dict[str, str | int]) -> Any:
        log_api_request("transport", self._url, params, self._timeout.total)
        async with self._session.get(
            self._url, params=params, headers=DEFAULT_HEADERS, timeout=self._timeout
        ) as response:
            return await self._handle_response(response)

    async def _handle_response(self, response: "ClientResponse") -> Any:
        if response.status == 404:
            raise NoJourneyFoundError()
        if response.status != 200:
            response_text = await response.text()
            logger.error(
                f"Transport API returned status {response.status} for {self._url}: "
                f"{response_text[:200]}"
            )
            raise InvalidResponseError()
        return await response.json(content_type=None)

    def _local_date(self, value: datetime) -> date:
        return (value.astimezone(self._local_tz) if value.tzinfo else value).date()

    @staticmethod
    def _translate_error(error: Exception) -> TransportApiError:
        """Map a low-level failure onto the transport error taxonomy."""
        if isinstance(error, (asyncio.TimeoutError, aiohttp.ServerTimeoutError)):
            logger.warning("Transport API request timed out")
            return TransportTimeoutError()
        if isinstance(error, aiohttp.InvalidURL):
            logger.error(f"Invalid transport API URL: {error}")
            return InvalidUrlError()
        if isinstance(error, (ValidationError, ValueError, aiohttp.ContentTypeError)):
            logger.error(f"Malformed transport API response: {error}")
            return InvalidResponseError()
        if isinstance(error, aiohttp.ClientConnectorError):
            logger.warning(f"Transport API unreachable: {error}")
            return TransportNetworkError(NO_CONNECTION_DETAIL)
        if isinstance(error, aiohttp.ClientResponseError) and error.status == 404:
            return NoJourneyFoundError()
        if isinstance(error, aiohttp.ClientResponseError):
            return InvalidResponseError()
        logger.error(f"Unexpected error fetching departures: {error}")
        return TransportNetworkError(f"Unexpected error: {error}")
