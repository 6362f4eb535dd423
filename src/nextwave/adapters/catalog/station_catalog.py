"""Station catalog backed by a lakes/stations JSON document."""

import logging
import uuid
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from nextwave.adapters.catalog.models import Lake, LakesData, LakeStationRecord
from nextwave.domain.flavor import lake_description, wave_rating
from nextwave.domain.models.station import Station
from nextwave.domain.ports.station_repository import StationRepository

logger = logging.getLogger(__name__)

BUNDLED_PACKAGE = "nextwave.data"
BUNDLED_FILE = "stations.json"

# Namespace for ids of stations that only have a name in the dataset
STATION_ID_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "https://nextwave.app/stations")

# First matching keyword decides the type; matched case-insensitively
STATION_TYPE_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("Hafen", "Harbor"),
    ("Schifflände", "Main Terminal"),
    ("Landungssteg", "Dock"),
    ("débarcadère", "Terminal"),
    ("bateau", "Terminal"),
    ("See", "Terminal"),
    ("lac", "Terminal"),
)
DEFAULT_STATION_TYPE = "Stop"


def determine_station_type(station_name: str) -> str:
    """Classify a station by keywords in its name."""
    folded = station_name.casefold()
    for keyword, station_type in STATION_TYPE_KEYWORDS:
        if keyword.casefold() in folded:
            return station_type
    return DEFAULT_STATION_TYPE


def extract_city(station_name: str) -> str:
    """Use the first word of the station name as its city."""
    parts = station_name.split()
    return parts[0] if parts else ""


def _coordinate(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


class JsonStationCatalog(StationRepository):
    """Loads stations from the bundled dataset or a configured JSON file.

    The catalog never raises on bad data: an unreadable or malformed document
    yields an empty station list and an error log entry.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        """Initialize the catalog.

        Args:
            path: Dataset file to read. Defaults to the dataset shipped with the package.
        """
        self._path = Path(path).expanduser() if path else None
        self._stations: list[Station] | None = None
        self._generated_ids: set[str] = set()

    def _read_document(self) -> str:
        if self._path is not None:
            return self._path.read_text(encoding="utf-8")
        return resources.files(BUNDLED_PACKAGE).joinpath(BUNDLED_FILE).read_text(encoding="utf-8")

    def load_stations(self) -> list[Station]:
        """Load all stations, lake by lake in document order."""
        if self._stations is not None:
            return list(self._stations)

        source = str(self._path) if self._path else f"{BUNDLED_PACKAGE}/{BUNDLED_FILE}"
        try:
            data = LakesData.model_validate_json(self._read_document())
        except (OSError, ValidationError, ValueError) as e:
            logger.error(f"Failed to load stations from {source}: {e}")
            return []

        self._generated_ids.clear()
        stations = [
            station
            for lake in data.lakes
            for station in (self._to_station(lake, entry) for entry in lake.stations)
            if station is not None
        ]
        logger.info(f"Loaded {len(stations)} stations on {len(data.lakes)} lakes from {source}")
        self._stations = stations
        return list(stations)

    def get_station_by_id(self, station_id: str) -> Station | None:
        """Find a station by its id."""
        return next((s for s in self.load_stations() if s.id == station_id), None)

    def get_stations_for_lake(self, lake_name: str) -> list[Station]:
        """All stations of one lake (exact, case-insensitive lake name)."""
        wanted = lake_name.casefold()
        return [s for s in self.load_stations() if s.lake.casefold() == wanted]

    def list_lakes(self) -> list[str]:
        """Lake names in dataset order, without duplicates."""
        return list(dict.fromkeys(s.lake for s in self.load_stations()))

    def _to_station(
        self, lake: Lake, entry: str | LakeStationRecord | dict[str, Any]
    ) -> Station | None:
        if isinstance(entry, str):
            return self._build_station(
                lake.name,
                station_id=self._generated_id(lake.name, entry),
                name=entry,
                latitude=0.0,
                longitude=0.0,
                city="",
                station_type="",
            )
        if isinstance(entry, LakeStationRecord):
            return self._build_station(
                lake.name,
                station_id=entry.uic_ref,
                name=entry.name,
                latitude=entry.coordinates.latitude,
                longitude=entry.coordinates.longitude,
                city=extract_city(entry.name),
                station_type=determine_station_type(entry.name),
            )
        return self._from_mapping(lake, entry)

    def _from_mapping(self, lake: Lake, entry: dict[str, Any]) -> Station:
        """Build a station from a partial object, defaulting what is missing."""
        name = entry.get("name") if isinstance(entry.get("name"), str) else ""
        uic_ref = entry.get("uic_ref")
        if isinstance(uic_ref, int) and not isinstance(uic_ref, bool):
            uic_ref = str(uic_ref)
        if not isinstance(uic_ref, str) or not uic_ref:
            uic_ref = self._generated_id(lake.name, name)
        coordinates = entry.get("coordinates")
        if not isinstance(coordinates, dict):
            coordinates = {}

        logger.debug(f"Station entry on {lake.name} is incomplete, using defaults: {entry}")
        return self._build_station(
            lake.name,
            station_id=uic_ref,
            name=name,
            latitude=_coordinate(coordinates.get("latitude")),
            longitude=_coordinate(coordinates.get("longitude")),
            city=extract_city(name),
            station_type=determine_station_type(name),
        )

    def _generated_id(self, lake_name: str, station_name: str) -> str:
        """Stable id for stations without a UIC reference.

        Derived from lake and name so it survives reloads; a repeated
        lake/name pair gets a random id instead so ids stay unique.
        """
        station_id = str(uuid.uuid5(STATION_ID_NAMESPACE, f"{lake_name}/{station_name}"))
        if station_id in self._generated_ids:
            logger.warning(f"Duplicate station '{station_name}' on {lake_name}, using a random id")
            station_id = str(uuid.uuid4())
        self._generated_ids.add(station_id)
        return station_id

    @staticmethod
    def _build_station(
        lake_name: str,
        *,
        station_id: str,
        name: str,
        latitude: float,
        longitude: float,
        city: str,
        station_type: str,
    ) -> Station:
        return Station(
            id=station_id,
            name=name,
            latitude=latitude,
            longitude=longitude,
            city=city,
            type=station_type,
            lake=lake_name,
            wave_rating=wave_rating(lake_name, name),
            description=lake_description(lake_name),
        )
