"""Key-value store port used for small persisted settings."""

from typing import Protocol


class KeyValueStore(Protocol):
    """Durable string key-value storage."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    def put(self, key: str, value: str) -> None:
        """Store a value. Must be durable when this method returns."""
        ...
