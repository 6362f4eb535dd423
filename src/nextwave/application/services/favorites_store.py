"""Ordered, capped list of favorite stations persisted in a key-value store."""

import logging

from pydantic import TypeAdapter, ValidationError

from nextwave.domain.models.favorites import FavoriteResult
from nextwave.domain.models.station import Station
from nextwave.domain.ports.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favorite_stations"
MAX_FAVORITES = 5

_stations_adapter = TypeAdapter(list[Station])


class FavoritesStore:
    """Keeps the user's favorite stations.

    Favorites are unique by station id and capped at ``max_favorites``. The
    list is loaded once on construction and written back before any mutating
    call returns.
    """

    def __init__(self, store: KeyValueStore, max_favorites: int = MAX_FAVORITES) -> None:
        self._store = store
        self._max_favorites = max_favorites
        self._favorites: list[Station] = self._load()

    @property
    def favorites(self) -> list[Station]:
        """Current favorites in display order."""
        return list(self._favorites)

    @property
    def max_favorites(self) -> int:
        return self._max_favorites

    def _load(self) -> list[Station]:
        raw = self._store.get(FAVORITES_KEY)
        if raw is None:
            return []
        try:
            stations = _stations_adapter.validate_json(raw)
        except ValidationError as e:
            logger.error(f"Stored favorites are unreadable, starting with none: {e}")
            return []

        unique: list[Station] = []
        seen: set[str] = set()
        for station in stations:
            if station.id not in seen:
                seen.add(station.id)
                unique.append(station)
        if len(unique) != len(stations) or len(unique) > self._max_favorites:
            logger.warning("Stored favorites had duplicates or exceeded the limit, trimming")
        return unique[: self._max_favorites]

    def _save(self) -> None:
        self._store.put(FAVORITES_KEY, _stations_adapter.dump_json(self._favorites).decode())

    def toggle_favorite(self, station: Station) -> FavoriteResult:
        """Add the station, or remove it if it is already a favorite."""
        for index, favorite in enumerate(self._favorites):
            if favorite.id == station.id:
                del self._favorites[index]
                self._save()
                logger.info(f"Removed favorite {station.name} ({station.id})")
                return FavoriteResult.REMOVED

        if len(self._favorites) >= self._max_favorites:
            logger.info(f"Cannot add {station.name}: {self._max_favorites} favorites reached")
            return FavoriteResult.MAX_REACHED

        self._favorites.append(station)
        self._save()
        logger.info(f"Added favorite {station.name} ({station.id})")
        return FavoriteResult.ADDED

    def is_favorite(self, station_id: str) -> bool:
        return any(favorite.id == station_id for favorite in self._favorites)

    def reorder_favorites(self, from_index: int, to_index: int) -> None:
        """Move a favorite to a new position. Out of range indices are ignored."""
        count = len(self._favorites)
        if not (0 <= from_index < count and 0 <= to_index < count):
            logger.debug(f"Ignoring reorder {from_index} -> {to_index} with {count} favorites")
            return
        station = self._favorites.pop(from_index)
        self._favorites.insert(to_index, station)
        self._save()

    def update_favorites_order(self, stations: list[Station]) -> None:
        """Replace the favorites with an already reordered list.

        Raises:
            ValueError: If the list exceeds the limit or repeats a station id.
        """
        if len(stations) > self._max_favorites:
            raise ValueError(
                f"At most {self._max_favorites} favorites are allowed, got {len(stations)}"
            )
        ids = [station.id for station in stations]
        if len(set(ids)) != len(ids):
            raise ValueError("Favorites must not contain the same station twice")
        self._favorites = list(stations)
        self._save()
