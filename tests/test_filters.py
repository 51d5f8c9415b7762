"""
Tests for evstations/services/filters.py - station list filtering.
"""

import uuid
from datetime import datetime

import pytest

from evstations.errors import ValidationError
from evstations.schemas.station import StationFilter, StationResponse
from evstations.services.filters import apply_filters, parse_filter


def make_station(name, power, status="Active", connectors=(), address=None):
    now = datetime(2024, 1, 1)
    return StationResponse(
        id=uuid.uuid4(),
        name=name,
        location={"latitude": 0, "longitude": 0, "address": address},
        status=status,
        power=power,
        connector_types=list(connectors),
        created_by="user-1",
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def stations():
    return [
        make_station("Downtown Hub", 150, connectors=["CCS", "Type 2"], address="1 Main St"),
        make_station("Airport", 50, status="Maintenance", connectors=["CHAdeMO"]),
        make_station("Mall Garage", 22, status="Inactive", address="Shopping Ave"),
        make_station("Highway Stop", 350, connectors=["CCS", "Tesla Supercharger"]),
        make_station("Library", 151, connectors=["Type 1"], address="MAIN square"),
    ]


def names(result):
    return [s.name for s in result]


class TestApplyFilters:
    def test_empty_filter_returns_everything_in_order(self, stations):
        assert apply_filters(stations, StationFilter()) == stations
        assert apply_filters(stations) == stations

    def test_input_is_not_mutated(self, stations):
        before = list(stations)
        apply_filters(stations, StationFilter(status="Active"))
        assert stations == before

    def test_search_matches_name_or_address_case_insensitively(self, stations):
        result = apply_filters(stations, StationFilter(search="main"))
        assert names(result) == ["Downtown Hub", "Library"]

    def test_search_on_name(self, stations):
        assert names(apply_filters(stations, StationFilter(search="AIR"))) == ["Airport"]

    def test_status(self, stations):
        result = apply_filters(stations, StationFilter(status="Active"))
        assert names(result) == ["Downtown Hub", "Highway Stop", "Library"]

    def test_power_range_is_inclusive(self, stations):
        result = apply_filters(stations, StationFilter(min_power=50, max_power=150))
        assert names(result) == ["Downtown Hub", "Airport"]

    def test_min_power_only(self, stations):
        result = apply_filters(stations, StationFilter(min_power=151))
        assert names(result) == ["Highway Stop", "Library"]

    def test_max_power_only(self, stations):
        result = apply_filters(stations, StationFilter(max_power=22))
        assert names(result) == ["Mall Garage"]

    def test_connector_type(self, stations):
        result = apply_filters(stations, StationFilter(connector_type="CCS"))
        assert names(result) == ["Downtown Hub", "Highway Stop"]

    def test_station_without_connectors_is_excluded(self, stations):
        result = apply_filters(stations, StationFilter(connector_type="Type 2"))
        assert "Mall Garage" not in names(result)

    def test_predicates_are_combined(self, stations):
        spec = StationFilter(search="o", status="Active", min_power=100, connector_type="CCS")
        assert names(apply_filters(stations, spec)) == ["Downtown Hub", "Highway Stop"]


class TestParseFilter:
    def test_wire_names(self):
        spec = parse_filter({"minPower": "50", "maxPower": "150", "connectorType": "CCS"})
        assert spec.min_power == 50
        assert spec.max_power == 150
        assert spec.connector_type == "CCS"

    def test_blank_values_are_absent(self):
        spec = parse_filter({"search": "", "status": "", "minPower": " "})
        assert spec.model_dump() == StationFilter().model_dump()

    def test_none(self):
        assert parse_filter(None).model_dump() == StationFilter().model_dump()

    def test_bad_status(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_filter({"status": "Broken"})
        assert exc_info.value.violations[0][0] == "status"

    def test_bad_power(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_filter({"minPower": "fast"})
        assert exc_info.value.violations[0][0] == "minPower"

    def test_non_finite_power_bounds(self):
        for value in ("nan", "inf", "-inf"):
            with pytest.raises(ValidationError) as exc_info:
                parse_filter({"minPower": value})
            assert exc_info.value.violations[0][0] == "minPower"
        with pytest.raises(ValidationError):
            parse_filter({"maxPower": "NaN"})
