"""OpenWeather API adapter."""

from nextwave.adapters.openweather_api.openweather_client import OpenWeatherClient

__all__ = ["OpenWeatherClient"]
