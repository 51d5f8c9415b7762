"""
Pydantic schemas for charging station API.
"""
from datetime import datetime, timezone
from typing import Annotated, Any, Dict, List, Optional
from pydantic import BaseModel, BeforeValidator, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel
import uuid

from evstations.models.station import (
    ADDRESS_MAX_LENGTH,
    NAME_MAX_LENGTH,
    ConnectorType,
    StationStatus,
)


Name = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=NAME_MAX_LENGTH)
]
Address = Annotated[
    str, StringConstraints(strip_whitespace=True, max_length=ADDRESS_MAX_LENGTH)
]
def _reject_bool(value):
    # JSON true/false would otherwise coerce to 1.0/0.0
    if isinstance(value, bool):
        raise ValueError("Input should be a valid number")
    return value


Real = Annotated[float, BeforeValidator(_reject_bool), Field(allow_inf_nan=False)]
Latitude = Annotated[Real, Field(ge=-90, le=90)]
Longitude = Annotated[Real, Field(ge=-180, le=180)]
NonNegative = Annotated[Real, Field(ge=0)]


# ============ Request Schemas ============

class LocationCreate(BaseModel):
    """Location block of a new station."""
    latitude: Latitude
    longitude: Longitude
    address: Optional[Address] = None


class StationCreate(BaseModel):
    """
    Fields accepted when registering a station.
    Status, owner and timestamps are never taken from the client.
    """
    name: Name
    location: LocationCreate = Field(default_factory=dict, validate_default=True)
    power: NonNegative
    connector_types: Optional[List[ConnectorType]] = Field(None, alias="connectorTypes")
    price_per_kwh: Optional[NonNegative] = Field(None, alias="pricePerKwh")
    amenities: Optional[List[str]] = None

    class Config:
        populate_by_name = True
        coerce_numbers_to_str = True

    def to_columns(self) -> Dict[str, Any]:
        """Flatten into station column values."""
        return {
            "name": self.name,
            "latitude": self.location.latitude,
            "longitude": self.location.longitude,
            "address": self.location.address,
            "power": self.power,
            "connector_types": [c.value for c in self.connector_types or []],
            "price_per_kwh": self.price_per_kwh,
            "amenities": list(self.amenities or []),
        }


class LocationUpdate(BaseModel):
    """
    Partial location. Coordinates may be replaced but not cleared;
    the address may be cleared with an explicit null.
    """
    latitude: Latitude = None
    longitude: Longitude = None
    address: Optional[Address] = None


class StationUpdate(BaseModel):
    """
    Partial station update.

    Only keys present in the payload end up in ``model_fields_set``; an
    explicit ``null`` on an optional field clears it, while ``null`` on a
    required field fails validation.
    """
    name: Name = None
    location: LocationUpdate = None
    status: StationStatus = None
    power: NonNegative = None
    connector_types: Optional[List[ConnectorType]] = Field(None, alias="connectorTypes")
    price_per_kwh: Optional[NonNegative] = Field(None, alias="pricePerKwh")
    amenities: Optional[List[str]] = None

    class Config:
        populate_by_name = True
        coerce_numbers_to_str = True

    def to_changes(self) -> Dict[str, Any]:
        """Column values for the supplied fields only."""
        changes: Dict[str, Any] = {}
        supplied = self.model_fields_set

        if "name" in supplied:
            changes["name"] = self.name
        if "location" in supplied:
            for key in ("latitude", "longitude", "address"):
                if key in self.location.model_fields_set:
                    changes[key] = getattr(self.location, key)
        if "status" in supplied:
            changes["status"] = self.status.value
        if "power" in supplied:
            changes["power"] = self.power
        if "connector_types" in supplied:
            changes["connector_types"] = [c.value for c in self.connector_types or []]
        if "price_per_kwh" in supplied:
            changes["price_per_kwh"] = self.price_per_kwh
        if "amenities" in supplied:
            changes["amenities"] = list(self.amenities or [])
        return changes


class StationFilter(BaseModel):
    """Optional predicates narrowing a station listing."""
    search: Optional[str] = None
    status: Optional[StationStatus] = None
    min_power: Optional[Real] = Field(None, alias="minPower")
    max_power: Optional[Real] = Field(None, alias="maxPower")
    connector_type: Optional[ConnectorType] = Field(None, alias="connectorType")

    class Config:
        populate_by_name = True

    @field_validator("*", mode="before")
    @classmethod
    def blank_as_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


# ============ Response Schemas ============

class LocationResponse(BaseModel):
    """Station location."""
    latitude: float
    longitude: float
    address: Optional[str] = None


class StationResponse(BaseModel):
    """Charging station as returned to clients."""
    id: uuid.UUID
    name: str
    location: LocationResponse
    status: StationStatus
    power: float
    connector_types: List[ConnectorType] = []
    price_per_kwh: Optional[float] = None
    amenities: List[str] = []
    created_by: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        """Stores without timezone support return naive UTC values."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class StationListResponse(BaseModel):
    """Station list response."""
    stations: List[StationResponse]


class StationMessageResponse(BaseModel):
    """Mutation result with the affected station."""
    message: str
    station: StationResponse


class MessageResponse(BaseModel):
    """Plain message response."""
    message: str
