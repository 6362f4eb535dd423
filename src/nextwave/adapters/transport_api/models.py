"""Wire models for the transport.opendata.ch stationboard response.

The ``operator`` field of a journey arrives either as a bare string (the
operator name) or as an object. Both shapes are normalized into ``Operator``
here, so nothing past this module sees the polymorphism.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Coordinate(BaseModel):
    """Station coordinate (``x`` is longitude, ``y`` is latitude)."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    type: str | None = None
    x: float | None = None
    y: float | None = None


class StationInfo(BaseModel):
    """Station reference inside a stop or at the top of the response."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str | None = None
    name: str | None = None
    score: int | None = None
    coordinate: Coordinate | None = None
    distance: int | None = None


class Prognosis(BaseModel):
    """Realtime prognosis for a stop."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    platform: str | None = None
    arrival: str | None = None
    departure: str | None = None
    capacity1st: str | None = None
    capacity2nd: str | None = None


class Stop(BaseModel):
    """A stop of a journey (the requested station or an intermediate stop)."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    station: StationInfo = Field(default_factory=StationInfo)
    arrival: str | None = None
    arrivalTimestamp: int | None = None  # noqa: N815 - wire field name
    departure: str | None = None
    departureTimestamp: int | None = None  # noqa: N815 - wire field name
    delay: int | None = None
    platform: str | None = None
    prognosis: Prognosis | None = None


class Operator(BaseModel):
    """Canonical operator shape."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    name: str
    id: str | None = None
    url: str | None = None


class Journey(BaseModel):
    """A single entry of the stationboard."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    stop: Stop
    category: str
    name: str | None = None
    number: str | None = None
    operator: Operator | None = None
    to: str | None = None
    passList: list[Stop] | None = None  # noqa: N815 - wire field name
    capacity1st: str | None = None
    capacity2nd: str | None = None

    @field_validator("operator", mode="before")
    @classmethod
    def normalize_operator(cls, v: Any) -> Any:
        """Accept the operator as a bare name string or as an object."""
        if v is None or isinstance(v, (dict, Operator)):
            return v
        if isinstance(v, str):
            return {"name": v}
        raise ValueError(
            f"operator must be a string or an object, got {type(v).__name__}"
        )


class StationboardResponse(BaseModel):
    """Top-level stationboard response."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    station: StationInfo | None = None
    stationboard: list[Journey] = Field(default_factory=list)
