"""
Station filtering.
All supplied predicates must match; absent predicates match everything.
"""
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional
import pydantic
from evstations.errors import ValidationError
from evstations.schemas.station import StationFilter, StationResponse
from evstations.services.validation import field_path


def matches_search(station: StationResponse, term: str) -> bool:
    """Case-insensitive substring match on name or address."""
    needle = term.lower()
    if needle in station.name.lower():
        return True
    address = station.location.address
    return bool(address) and needle in address.lower()


def matches(station: StationResponse, spec: StationFilter) -> bool:
    """True when the station satisfies every predicate in spec."""
    if spec.search and not matches_search(station, spec.search):
        return False
    if spec.status is not None and station.status != spec.status:
        return False
    # Power bounds are inclusive
    if spec.min_power is not None and station.power < spec.min_power:
        return False
    if spec.max_power is not None and station.power > spec.max_power:
        return False
    if spec.connector_type is not None and spec.connector_type not in (station.connector_types or []):
        return False
    return True


def apply_filters(
    stations: Iterable[StationResponse], spec: Optional[StationFilter] = None
) -> List[StationResponse]:
    """Return matching stations in their original order."""
    if spec is None:
        return list(stations)
    return [station for station in stations if matches(station, spec)]


def parse_filter(params: Optional[Mapping[str, Any]]) -> StationFilter:
    """Build a filter from raw parameters, rejecting malformed values."""
    try:
        return StationFilter.model_validate(dict(params or {}))
    except pydantic.ValidationError as e:
        raise ValidationError(
            [(field_path(error["loc"]), error["msg"]) for error in e.errors()]
        ) from e
