"""HTTP client for the OpenWeather current weather and forecast endpoints.

API Documentation: https://openweathermap.org/current and https://openweathermap.org/forecast5
"""

import logging
from typing import TYPE_CHECKING, Any, TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from nextwave.adapters.api_request_logger import log_api_request
from nextwave.domain.errors import WeatherApiError
from nextwave.domain.models.weather_response import ForecastResponse, WeatherResponse
from nextwave.domain.ports.weather_provider import WeatherProvider

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


def validate_coordinates(latitude: float, longitude: float) -> None:
    """Raise ValueError if a coordinate is outside its valid range."""
    if not -90.0 <= latitude <= 90.0:
        raise ValueError(f"latitude must be between -90 and 90, got {latitude}")
    if not -180.0 <= longitude <= 180.0:
        raise ValueError(f"longitude must be between -180 and 180, got {longitude}")


class OpenWeatherClient(WeatherProvider):
    """Thin typed wrapper over the OpenWeather API.

    Network and parsing failures surface as ``WeatherApiError``.
    """

    def __init__(
        self,
        session: "ClientSession",
        api_key: str,
        base_url: str = "https://api.openweathermap.org/data/2.5",
        units: str = "metric",
        timeout_seconds: float = 15,
    ) -> None:
        """Initialize with a shared aiohttp session and the API key."""
        self._session = session
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._units = units
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def get_current_weather(self, latitude: float, longitude: float) -> WeatherResponse:
        """Get the current weather at a coordinate."""
        return await self._get("weather", latitude, longitude, WeatherResponse)

    async def get_forecast(self, latitude: float, longitude: float) -> ForecastResponse:
        """Get the 5 day / 3 hour forecast series at a coordinate."""
        return await self._get("forecast", latitude, longitude, ForecastResponse)

    async def _get(
        self,
        endpoint: str,
        latitude: float,
        longitude: float,
        model: type[ResponseModel],
    ) -> ResponseModel:
        validate_coordinates(latitude, longitude)

        url = f"{self._base_url}/{endpoint}"
        params: dict[str, Any] = {
            "lat": latitude,
            "lon": longitude,
            "units": self._units,
            "appid": self._api_key,
        }
        log_api_request("weather", url, params, self._timeout.total)

        try:
            async with self._session.get(url, params=params, timeout=self._timeout) as response:
                if response.status != 200:
                    response_text = await response.text()
                    raise WeatherApiError(
                        f"Weather service returned status {response.status}: "
                        f"{response_text[:200]}"
                    )
                data = await response.json(content_type=None)
            return model.model_validate(data)
        except WeatherApiError:
            raise
        except ValidationError as e:
            logger.error(f"Unexpected {endpoint} response format: {e}")
            raise WeatherApiError(f"Weather service returned unexpected data: {e}") from e
        except TimeoutError as e:
            raise WeatherApiError("Weather service is not responding (Timeout)") from e
        except (aiohttp.ClientError, ValueError) as e:
            logger.warning(f"Error fetching {endpoint} for {latitude},{longitude}: {e}")
            raise WeatherApiError(f"Weather service unavailable: {e}") from e
