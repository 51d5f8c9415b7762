"""
Station repository.
Thin CRUD boundary between the station service and the document store.
"""
import logging
from contextlib import asynccontextmanager
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from evstations.errors import InfrastructureError, ValidationError
from evstations.models.station import ChargingStation, StationStatus, parse_station_id
from evstations.schemas.station import StationCreate, StationUpdate

logger = logging.getLogger(__name__)


class StationRepository:
    """CRUD operations on charging station records."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def _store_call(self, action: str):
        """Roll back and translate store failures."""
        try:
            yield
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning("Store rejected %s: %s", action, e.orig)
            raise ValidationError([("station", "Station violates store constraints")]) from e
        except (SQLAlchemyError, OSError) as e:
            await self.session.rollback()
            logger.exception("Store failure during %s", action)
            raise InfrastructureError(f"Failed to {action}") from e

    async def _check(self, station: ChargingStation):
        problems = station.violations()
        if problems:
            await self.session.rollback()
            raise ValidationError(problems)

    async def find_all(self) -> List[ChargingStation]:
        """All stations, no filtering."""
        query = select(ChargingStation).order_by(
            ChargingStation.created_at, ChargingStation.id
        )
        async with self._store_call("fetch stations"):
            result = await self.session.execute(query)
            return list(result.scalars().all())

    async def find_by_id(self, station_id) -> Optional[ChargingStation]:
        """One station, or None when the id is unknown or malformed."""
        key = parse_station_id(station_id)
        if key is None:
            return None
        async with self._store_call("fetch station"):
            return await self.session.get(ChargingStation, key)

    async def create(self, fields: StationCreate, owner_id: str) -> ChargingStation:
        """Persist a new station owned by owner_id."""
        station = ChargingStation(
            **fields.to_columns(),
            status=StationStatus.ACTIVE.value,
            created_by=str(owner_id),
        )
        await self._check(station)

        async with self._store_call("create station"):
            self.session.add(station)
            await self.session.commit()
            await self.session.refresh(station)
        return station

    async def update(self, station_id, fields: StationUpdate) -> Optional[ChargingStation]:
        """
        Merge supplied fields onto an existing station.
        Returns None when the station does not exist.
        """
        station = await self.find_by_id(station_id)
        if station is None:
            return None

        for column, value in fields.to_changes().items():
            setattr(station, column, value)
        await self._check(station)

        async with self._store_call("update station"):
            await self.session.commit()
            await self.session.refresh(station)
        return station

    async def delete(self, station_id) -> Optional[ChargingStation]:
        """Remove a station; returns the removed record or None."""
        station = await self.find_by_id(station_id)
        if station is None:
            return None

        async with self._store_call("delete station"):
            await self.session.delete(station)
            await self.session.commit()
        return station
