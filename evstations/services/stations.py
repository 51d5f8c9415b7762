"""
Station service.
Coordinates validation, ownership stamping, persistence and filtering.
"""
import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Union
from evstations.errors import NotFoundError
from evstations.schemas.station import StationFilter, StationResponse
from evstations.services.filters import apply_filters, parse_filter
from evstations.services.repository import StationRepository
from evstations.services.validation import ValidationMode, validated_or_raise

logger = logging.getLogger(__name__)


class StationService:
    """Entry point for every station operation."""

    def __init__(self, repository: StationRepository):
        self.repository = repository

    async def list(
        self, filter_spec: Optional[Union[StationFilter, Mapping[str, Any]]] = None
    ) -> List[StationResponse]:
        """All stations matching the optional filter, in store order."""
        if not isinstance(filter_spec, StationFilter):
            filter_spec = parse_filter(filter_spec)
        stations = await self.repository.find_all()
        return apply_filters(
            [StationResponse.model_validate(s) for s in stations], filter_spec
        )

    async def get(self, station_id) -> StationResponse:
        station = await self.repository.find_by_id(station_id)
        if station is None:
            raise NotFoundError(station_id)
        return StationResponse.model_validate(station)

    async def create(self, caller_id: str, fields: Any) -> StationResponse:
        """
        Validate and persist a new station owned by the caller.
        The owner always comes from caller_id, never from fields.
        """
        validated = validated_or_raise(fields, ValidationMode.CREATE)
        station = await self.repository.create(validated, caller_id)
        logger.info("Station %s created by %s", station.id, caller_id)
        return StationResponse.model_validate(station)

    async def update(self, station_id, fields: Any) -> StationResponse:
        """Validate the supplied fields and merge them onto the station."""
        validated = validated_or_raise(fields, ValidationMode.UPDATE)
        station = await self.repository.update(station_id, validated)
        if station is None:
            raise NotFoundError(station_id)
        logger.info("Station %s updated", station.id)
        return StationResponse.model_validate(station)

    async def delete(self, station_id) -> StationResponse:
        station = await self.repository.delete(station_id)
        if station is None:
            raise NotFoundError(station_id)
        logger.info("Station %s deleted", station.id)
        return StationResponse.model_validate(station)
