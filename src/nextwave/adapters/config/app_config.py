"""12-factor configuration adapter using environment variables and an optional .env file."""

from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Transport API (transport.opendata.ch) configuration
    transport_api_base_url: str = Field(
        default="https://transport.opendata.ch/v1",
        description="Base URL of the Swiss public transport API",
    )
    transport_api_timeout: int = Field(
        default=30, description="Timeout for transport API requests in seconds"
    )
    transport_api_limit: int = Field(
        default=50, description="Maximum number of journeys to request per stationboard call"
    )
    transport_category: str = Field(
        default="BAT", description="Journey category code for boat services"
    )
    transport_transportations: str = Field(
        default="ship", description="Transportation filter sent with stationboard requests"
    )

    # OpenWeather configuration
    weather_api_base_url: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        description="Base URL of the OpenWeather API",
    )
    openweather_api_key: str = Field(
        default="", description="OpenWeather API key (appid), set via OPENWEATHER_API_KEY"
    )
    weather_units: str = Field(default="metric", description="Units sent to OpenWeather")
    weather_api_timeout: int = Field(
        default=15, description="Timeout for weather API requests in seconds"
    )
    weather_icon_url_template: str = Field(
        default="https://openweathermap.org/img/wn/{icon}@2x.png",
        description="Template for weather icon URLs, '{icon}' is replaced by the icon code",
    )

    # Weather caching
    weather_cache_ttl_seconds: int = Field(
        default=300, description="How long current weather stays fresh in the cache"
    )
    forecast_cache_ttl_seconds: int = Field(
        default=3600, description="How long forecasts stay fresh in the cache"
    )
    pressure_history_hours: float = Field(
        default=6.0, description="Window of pressure samples used for the trend"
    )
    pressure_trend_threshold_hpa: int = Field(
        default=2, description="Pressure change (hPa) above which a trend is reported"
    )

    # Stations and favorites
    stations_file: str | None = Field(
        default=None,
        description="Path to a stations JSON file. If unset, the bundled dataset is used",
    )
    favorites_file: str = Field(
        default="~/.nextwave/favorites.json",
        description="Path of the JSON file that stores favorite stations",
    )
    max_favorites: int = Field(default=5, description="Maximum number of favorite stations")

    # Refresh loops
    departure_refresh_seconds: int = Field(
        default=60, description="Interval between departure refreshes in watch mode"
    )
    weather_refresh_seconds: int = Field(
        default=300, description="Interval between forced weather refreshes in watch mode"
    )

    timezone: str = Field(
        default="Europe/Zurich",
        description="Local timezone for departure times and forecast days (IANA name)",
    )
    log_level: str = Field(default="INFO", description="Logging level for entry points")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate the timezone is a known IANA name."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"timezone must be a valid IANA timezone name, got '{v}'") from e
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the log level is one of the standard logging levels."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return level

    @field_validator("max_favorites", "transport_api_timeout", "weather_api_timeout")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate limits and timeouts are positive."""
        if v <= 0:
            raise ValueError("value must be greater than zero")
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        """The configured local timezone."""
        return ZoneInfo(self.timezone)

    @property
    def favorites_path(self) -> Path:
        """Favorites file path with the user directory expanded."""
        return Path(self.favorites_file).expanduser()
