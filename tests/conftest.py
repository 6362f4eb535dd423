"""Shared fixtures for the test suite."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from nextwave.domain.models import Station
from tests.builders import ZURICH, FakeClock, InMemoryKeyValueStore, make_station


@pytest.fixture
def zurich() -> ZoneInfo:
    return ZURICH


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at Monday 2024-06-10 14:00 in Zurich."""
    return FakeClock(datetime(2024, 6, 10, 14, 0, tzinfo=ZURICH))


@pytest.fixture
def station() -> Station:
    return make_station()


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()
