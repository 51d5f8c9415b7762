"""
Station field validation.
Runs candidate payloads through the request schemas and turns pydantic
errors into ordered (field, message) violations.
"""
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple, Union
import pydantic
from evstations.errors import ValidationError, Violation
from evstations.schemas.station import StationCreate, StationUpdate


class ValidationMode(str, Enum):
    """CREATE requires all mandatory fields; UPDATE makes every field optional."""

    CREATE = "create"
    UPDATE = "update"


_SCHEMAS = {
    ValidationMode.CREATE: StationCreate,
    ValidationMode.UPDATE: StationUpdate,
}

_COMMON_MESSAGES = {
    "location": "Location must be an object with latitude and longitude",
    "location.latitude": "Valid latitude is required",
    "location.longitude": "Valid longitude is required",
    "location.address": "Address cannot exceed 200 characters",
    "connectorTypes": "Connector types must be an array",
    "connectorTypes.*": "Invalid connector type",
    "amenities": "Amenities must be an array",
    "amenities.*": "Amenities must be text",
}

_MESSAGES = {
    ValidationMode.CREATE: {
        **_COMMON_MESSAGES,
        "name": "Name is required and cannot exceed 100 characters",
        "power": "Power rating is required and must be positive",
        "pricePerKwh": "Price must be a positive number",
    },
    ValidationMode.UPDATE: {
        **_COMMON_MESSAGES,
        "name": "Name must be between 1 and 100 characters",
        "power": "Power must be positive",
        "pricePerKwh": "Price must be positive",
        "status": "Invalid status",
    },
}

# Python attribute names that differ from their wire names
_WIRE_NAMES = {
    "connector_types": "connectorTypes",
    "price_per_kwh": "pricePerKwh",
}


@dataclass
class ValidationResult:
    """Either normalized fields or the violations that prevented them."""

    fields: Optional[Union[StationCreate, StationUpdate]] = None
    violations: List[Violation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations


def _wire_parts(loc: Tuple[Any, ...]) -> List[Any]:
    return [_WIRE_NAMES.get(part, part) for part in loc]


def field_path(loc: Tuple[Any, ...]) -> str:
    """('connectorTypes', 2) -> 'connectorTypes[2]'"""
    path = ""
    for part in _wire_parts(loc):
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _message_key(loc: Tuple[Any, ...]) -> str:
    return ".".join("*" if isinstance(part, int) else str(part) for part in _wire_parts(loc))


def _to_violations(exc: pydantic.ValidationError, mode: ValidationMode) -> List[Violation]:
    messages = _MESSAGES[mode]
    violations: List[Violation] = []
    for error in exc.errors():
        loc = tuple(error["loc"])
        violation = (field_path(loc), messages.get(_message_key(loc), error["msg"]))
        if violation not in violations:
            violations.append(violation)
    return violations


def validate_station_fields(payload: Any, mode: ValidationMode) -> ValidationResult:
    """
    Validate a candidate field set.

    Every field is checked and all violations are collected, in field
    order. Unknown keys (including ``createdBy`` and, at creation,
    ``status``) are ignored.
    """
    if not isinstance(payload, Mapping):
        return ValidationResult(
            violations=[("body", "Request body must be a JSON object")]
        )

    schema = _SCHEMAS[ValidationMode(mode)]
    try:
        fields = schema.model_validate(dict(payload))
    except pydantic.ValidationError as e:
        return ValidationResult(violations=_to_violations(e, ValidationMode(mode)))
    return ValidationResult(fields=fields)


def validated_or_raise(payload: Any, mode: ValidationMode) -> Union[StationCreate, StationUpdate]:
    """Validate and return the normalized fields, raising ValidationError on any violation."""
    result = validate_station_fields(payload, mode)
    if not result.ok:
        raise ValidationError(result.violations)
    return result.fields

