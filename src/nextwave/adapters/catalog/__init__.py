"""Station catalog adapter."""

from nextwave.adapters.catalog.station_catalog import JsonStationCatalog

__all__ = ["JsonStationCatalog"]
