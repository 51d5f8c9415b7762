"""
Charging station data model for SQLAlchemy ORM.
Also holds the shared status/connector enumerations and the
record-level consistency predicate.
"""
import math
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Tuple
from sqlalchemy import String, Text, Float, DateTime, JSON, Uuid, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column
from evstations.database import Base


NAME_MAX_LENGTH = 100
ADDRESS_MAX_LENGTH = 200


class StationStatus(str, Enum):
    """Operational status of a station."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    MAINTENANCE = "Maintenance"


class ConnectorType(str, Enum):
    """Recognised charging connector standards."""

    TYPE_1 = "Type 1"
    TYPE_2 = "Type 2"
    CCS = "CCS"
    CHADEMO = "CHAdeMO"
    TESLA_SUPERCHARGER = "Tesla Supercharger"


STATUS_VALUES = [s.value for s in StationStatus]
CONNECTOR_VALUES = [c.value for c in ConnectorType]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _sql_in(values: List[str]) -> str:
    return ", ".join(f"'{v}'" for v in values)


def _is_real(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


class ChargingStation(Base):
    """A user-registered charging station."""

    __tablename__ = "charging_stations"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )

    # Basic info
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH))
    status: Mapped[str] = mapped_column(
        String(20), default=StationStatus.ACTIVE.value, index=True
    )

    # Location
    latitude: Mapped[float] = mapped_column(Float)
    longitude: Mapped[float] = mapped_column(Float)
    address: Mapped[str | None] = mapped_column(
        String(ADDRESS_MAX_LENGTH), nullable=True
    )

    # Charger info
    power: Mapped[float] = mapped_column(Float)
    connector_types: Mapped[list] = mapped_column(JSON, default=list)
    price_per_kwh: Mapped[float | None] = mapped_column(Float, nullable=True)
    amenities: Mapped[list] = mapped_column(JSON, default=list)

    # Ownership
    created_by: Mapped[str] = mapped_column(Text, index=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (
        CheckConstraint(
            f"length(name) BETWEEN 1 AND {NAME_MAX_LENGTH}", name="ck_station_name"
        ),
        CheckConstraint(
            "latitude BETWEEN -90 AND 90", name="ck_station_latitude"
        ),
        CheckConstraint(
            "longitude BETWEEN -180 AND 180", name="ck_station_longitude"
        ),
        CheckConstraint(
            f"address IS NULL OR length(address) <= {ADDRESS_MAX_LENGTH}",
            name="ck_station_address",
        ),
        CheckConstraint("power >= 0", name="ck_station_power"),
        CheckConstraint(
            "price_per_kwh IS NULL OR price_per_kwh >= 0", name="ck_station_price"
        ),
        CheckConstraint(
            f"status IN ({_sql_in(STATUS_VALUES)})", name="ck_station_status"
        ),
        Index('idx_station_location', 'latitude', 'longitude'),
    )

    @property
    def location(self) -> dict:
        """Composite location view over the flat columns."""
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "address": self.address,
        }

    def violations(self) -> List[Tuple[str, str]]:
        """
        Check every field of the record independently.
        Returns (field, message) pairs; empty when the record is consistent.
        """
        problems: List[Tuple[str, str]] = []

        if not isinstance(self.name, str) or not 1 <= len(self.name) <= NAME_MAX_LENGTH:
            problems.append(
                ("name", "Name is required and cannot exceed 100 characters")
            )

        # Location is checked as a unit
        if not _is_real(self.latitude) or not -90 <= self.latitude <= 90:
            problems.append(("location.latitude", "Latitude must be between -90 and 90"))
        if not _is_real(self.longitude) or not -180 <= self.longitude <= 180:
            problems.append(("location.longitude", "Longitude must be between -180 and 180"))
        if self.address is not None and (
            not isinstance(self.address, str) or len(self.address) > ADDRESS_MAX_LENGTH
        ):
            problems.append(("location.address", "Address cannot exceed 200 characters"))

        if self.status not in STATUS_VALUES:
            problems.append(("status", "Invalid status"))
        if not _is_real(self.power) or self.power < 0:
            problems.append(("power", "Power must be a positive number"))
        for index, connector in enumerate(self.connector_types or []):
            if connector not in CONNECTOR_VALUES:
                problems.append((f"connectorTypes[{index}]", "Invalid connector type"))
        if self.price_per_kwh is not None and (
            not _is_real(self.price_per_kwh) or self.price_per_kwh < 0
        ):
            problems.append(("pricePerKwh", "Price must be a positive number"))
        if not self.created_by:
            problems.append(("createdBy", "Owner is required"))

        return problems

    def is_consistent(self) -> bool:
        """True when every field satisfies its constraint."""
        return not self.violations()


def parse_station_id(value: str) -> Optional[uuid.UUID]:
    """Parse a station id; None when it is not a well-formed identifier."""
    try:
        return uuid.UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        return None
