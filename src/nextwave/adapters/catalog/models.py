"""Wire models for the bundled lakes/stations dataset.

A lake's ``stations`` list mixes three shapes: a bare station name, a full
record with UIC reference and coordinates, and loosely structured objects
missing some of those fields. The union below tries them left to right so
each entry lands in the most specific shape that fits.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """Station coordinates in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class LakeStationRecord(BaseModel):
    """Fully described station entry."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    name: str
    uic_ref: str
    coordinates: Coordinates


StationEntry = Annotated[
    str | LakeStationRecord | dict[str, Any],
    Field(union_mode="left_to_right"),
]


class Lake(BaseModel):
    """A lake with its boat operators and stations."""

    model_config = ConfigDict(frozen=True)

    name: str
    operators: list[str] = Field(default_factory=list)
    stations: list[StationEntry] = Field(default_factory=list)


class LakesData(BaseModel):
    """Top-level dataset document."""

    model_config = ConfigDict(frozen=True)

    lakes: list[Lake] = Field(default_factory=list)
