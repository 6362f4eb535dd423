"""Favorites domain model."""

from enum import Enum


class FavoriteResult(Enum):
    """Outcome of toggling a station in the favorites list."""

    ADDED = "added"
    REMOVED = "removed"
    MAX_REACHED = "max_reached"
