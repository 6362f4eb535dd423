"""Weather provider port."""

from typing import Protocol

from nextwave.domain.models.weather_response import ForecastResponse, WeatherResponse


class WeatherProvider(Protocol):
    """Port for fetching raw weather observations and forecasts."""

    async def get_current_weather(self, latitude: float, longitude: float) -> WeatherResponse:
        """Get the current weather at a coordinate."""
        ...

    async def get_forecast(self, latitude: float, longitude: float) -> ForecastResponse:
        """Get the multi-step forecast series at a coordinate."""
        ...
