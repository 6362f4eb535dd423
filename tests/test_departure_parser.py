"""Tests for the stationboard departure parser."""

from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError

from nextwave.adapters.transport_api.departure_parser import (
    DepartureParser,
    compute_status,
    format_journey_number,
    resolve_next_station,
)
from nextwave.adapters.transport_api.models import Journey, Operator
from nextwave.domain.models import DepartureStatus
from tests.builders import ZURICH

NOW = datetime(2024, 6, 10, 14, 0, tzinfo=ZURICH)


def make_journey(**overrides: object) -> Journey:
    data: dict[str, object] = {
        "stop": {
            "station": {"id": "8503651", "name": "Zürich Bürkliplatz (See)"},
            "departure": "2024-06-10T14:30:00+0200",
            "departureTimestamp": 1718022600,
        },
        "category": "BAT",
        "name": "003855",
        "number": "3855",
        "operator": "ZSG",
        "to": "Rapperswil SG (See)",
        "passList": [
            {"station": {"name": "Zürich Bürkliplatz (See)"}},
            {"station": {"name": "Zürich Enge (See)"}},
            {"station": {"name": "Rapperswil SG (See)"}},
        ],
    }
    data.update(overrides)
    return Journey.model_validate(data)


class TestComputeStatus:
    """Tests for the departure status rules."""

    def test_past_departure_is_missed(self) -> None:
        """Given a departure one second ago, when computing status, then it is MISSED."""
        assert compute_status(NOW - timedelta(seconds=1), NOW) == DepartureStatus.MISSED

    def test_departure_at_now_is_now(self) -> None:
        """Given a departure exactly now, when computing status, then it is NOW."""
        assert compute_status(NOW, NOW) == DepartureStatus.NOW

    def test_departure_within_five_minutes_is_now(self) -> None:
        """Given a departure in 4:59, when computing status, then it is NOW."""
        assert compute_status(NOW + timedelta(minutes=4, seconds=59), NOW) == DepartureStatus.NOW

    def test_departure_in_five_minutes_is_planned(self) -> None:
        """Given a departure in exactly five minutes, when computing status, then it is PLANNED."""
        assert compute_status(NOW + timedelta(minutes=5), NOW) == DepartureStatus.PLANNED

    def test_other_day_is_always_planned(self) -> None:
        """Given a past time on a day other than today, when computing status, then it is PLANNED."""
        assert (
            compute_status(NOW - timedelta(hours=3), NOW, is_today=False)
            == DepartureStatus.PLANNED
        )


@pytest.mark.parametrize(
    ("name", "expected"),
    [("003855", "3855"), ("2530", "2530"), ("0000", "0"), ("0", "0"), (None, "")],
)
def test_format_journey_number(name: str | None, expected: str) -> None:
    """Given a journey name, when formatting, then leading zeros are stripped."""
    assert format_journey_number(name) == expected


class TestResolveNextStation:
    """Tests for the next-station heuristic."""

    def test_uses_second_pass_list_entry(self) -> None:
        """Given a pass list of three stops, when resolving, then the second stop is used."""
        assert resolve_next_station(make_journey()) == "Zürich Enge (See)"

    def test_short_pass_list_falls_back_to_destination(self) -> None:
        """Given a pass list with one stop, when resolving, then the destination is used."""
        journey = make_journey(passList=[{"station": {"name": "Zürich Bürkliplatz (See)"}}])

        assert resolve_next_station(journey) == "Rapperswil SG (See)"

    def test_missing_destination_falls_back_to_unknown(self) -> None:
        """Given no pass list and no destination, when resolving, then Unknown is used."""
        journey = make_journey(passList=None, to=None)

        assert resolve_next_station(journey) == "Unknown"


class TestOperatorNormalization:
    """Tests for the polymorphic operator field."""

    def test_string_operator_becomes_object(self) -> None:
        """Given the operator as a string, when validating, then it becomes an Operator."""
        assert make_journey(operator="SGV").operator == Operator(name="SGV")

    def test_object_operator_is_kept(self) -> None:
        """Given the operator as an object, when validating, then its fields are kept."""
        journey = make_journey(operator={"name": "BLS", "id": "33", "url": "https://bls.ch"})

        assert journey.operator == Operator(name="BLS", id="33", url="https://bls.ch")

    def test_other_operator_shape_is_rejected(self) -> None:
        """Given the operator as a number, when validating, then validation fails."""
        with pytest.raises(ValidationError):
            make_journey(operator=42)


class TestDepartureParser:
    """Tests for converting journeys into departures."""

    @pytest.fixture
    def parser(self) -> DepartureParser:
        return DepartureParser(ZURICH)

    def test_parses_boat_journey(self, parser: DepartureParser) -> None:
        """Given a boat journey, when parsing, then a planned departure is produced."""
        [departure] = parser.parse_departures([make_journey()], NOW)

        assert departure.time == "14:30"
        assert departure.wave_number == 0
        assert departure.journey_number == "3855"
        assert departure.destination == "Rapperswil SG (See)"
        assert departure.next_station == "Zürich Enge (See)"
        assert departure.status == DepartureStatus.PLANNED
        assert departure.scheduled_time == datetime(2024, 6, 10, 14, 30, tzinfo=ZURICH)
        assert departure.is_estimated_time is False

    def test_discards_non_boat_journeys_and_keeps_order(self, parser: DepartureParser) -> None:
        """Given mixed categories, when parsing, then only BAT journeys remain in source order."""
        journeys = [
            make_journey(name="001", to="Thalwil (See)"),
            make_journey(category="S", name="S8", to="Pfäffikon SZ"),
            make_journey(name="002", to="Meilen (See)"),
        ]

        departures = parser.parse_departures(journeys, NOW)

        assert [d.destination for d in departures] == ["Thalwil (See)", "Meilen (See)"]

    def test_accepts_colon_offset(self, parser: DepartureParser) -> None:
        """Given an ISO time with '+02:00', when parsing, then it is understood."""
        journey = make_journey(stop={"departure": "2024-06-10T14:02:00+02:00"})

        [departure] = parser.parse_departures([journey], NOW)

        assert departure.time == "14:02"
        assert departure.status == DepartureStatus.NOW

    def test_falls_back_to_timestamp(self, parser: DepartureParser) -> None:
        """Given no ISO time but a Unix timestamp, when parsing, then the timestamp is used."""
        timestamp = int(datetime(2024, 6, 10, 13, 45, tzinfo=ZURICH).timestamp())
        journey = make_journey(stop={"departure": None, "departureTimestamp": timestamp})

        [departure] = parser.parse_departures([journey], NOW)

        assert departure.time == "13:45"
        assert departure.status == DepartureStatus.MISSED
        assert departure.is_estimated_time is False

    def test_falls_back_to_now_and_flags_estimate(self, parser: DepartureParser) -> None:
        """Given no departure time at all, when parsing, then now is used and flagged."""
        journey = make_journey(stop={"station": {"name": "Zürich Bürkliplatz (See)"}})

        [departure] = parser.parse_departures([journey], NOW)

        assert departure.time == "14:00"
        assert departure.scheduled_time == NOW
        assert departure.is_estimated_time is True

    def test_other_day_departures_are_planned(self, parser: DepartureParser) -> None:
        """Given a request for another day, when parsing, then every departure is PLANNED."""
        journey = make_journey(stop={"departure": "2024-06-10T09:00:00+0200"})

        [departure] = parser.parse_departures([journey], NOW, is_today=False)

        assert departure.status == DepartureStatus.PLANNED

    def test_unparseable_time_uses_timestamp(self, parser: DepartureParser) -> None:
        """Given a garbled ISO string, when parsing, then the timestamp fallback applies."""
        timestamp = int(datetime(2024, 6, 10, 16, 0, tzinfo=ZURICH).timestamp())
        journey = make_journey(stop={"departure": "soon", "departureTimestamp": timestamp})

        [departure] = parser.parse_departures([journey], NOW)

        assert departure.time == "16:00"
