"""Storage adapters."""

from nextwave.adapters.storage.json_file_store import JsonFileKeyValueStore

__all__ = ["JsonFileKeyValueStore"]
