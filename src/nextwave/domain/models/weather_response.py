"""OpenWeather response models (current weather and 5 day / 3 hour forecast)."""

from pydantic import BaseModel, ConfigDict, Field


class WeatherCondition(BaseModel):
    """A single weather condition entry (``weather[]``)."""

    model_config = ConfigDict(frozen=True)

    id: int = 0
    main: str = ""
    description: str = "Unknown"
    icon: str = "01d"


class Main(BaseModel):
    """Main measurements block."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temp: float
    feels_like: float | None = None
    temp_min: float
    temp_max: float
    pressure: int
    humidity: int
    sea_level: int | None = None
    ground_level: int | None = Field(default=None, alias="grnd_level")


class Wind(BaseModel):
    """Wind block. Speeds in m/s with metric units."""

    model_config = ConfigDict(frozen=True)

    speed: float
    deg: int = 0
    gust: float | None = None


class WeatherResponse(BaseModel):
    """Response of the current weather endpoint."""

    model_config = ConfigDict(frozen=True)

    weather: list[WeatherCondition] = Field(default_factory=list)
    main: Main
    wind: Wind
    dt: int = 0
    name: str = ""


class ForecastItem(BaseModel):
    """One step of the forecast series."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    dt: int  # Unix timestamp in seconds
    main: Main
    weather: list[WeatherCondition] = Field(default_factory=list)
    wind: Wind
    dt_txt: str = ""


class ForecastResponse(BaseModel):
    """Response of the forecast endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    items: list[ForecastItem] = Field(default_factory=list, alias="list")
