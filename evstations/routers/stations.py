"""
Charging station API router.
Provides endpoints for listing, registering, editing and removing stations.
"""
from typing import Any, Optional
from fastapi import APIRouter, Body, Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession
from evstations.database import get_db
from evstations.schemas.station import (
    MessageResponse,
    StationListResponse,
    StationMessageResponse,
    StationResponse,
)
from evstations.services.auth import get_auth_service
from evstations.services.repository import StationRepository
from evstations.services.stations import StationService

router = APIRouter(prefix="/api/stations", tags=["Stations"])


def get_station_service(db: AsyncSession = Depends(get_db)) -> StationService:
    """Station service bound to the request's session."""
    return StationService(StationRepository(db))


def get_current_user_id(authorization: Optional[str] = Header(None)) -> str:
    """Verify the bearer token and return the caller id."""
    auth_service = get_auth_service()
    return auth_service.verify_access_token(auth_service.bearer_token(authorization))


@router.get("", response_model=StationListResponse)
async def list_stations(
    search: Optional[str] = Query(None, description="Match name or address"),
    status: Optional[str] = Query(None, description="Filter by status"),
    min_power: Optional[str] = Query(None, alias="minPower", description="Minimum power (kW)"),
    max_power: Optional[str] = Query(None, alias="maxPower", description="Maximum power (kW)"),
    connector_type: Optional[str] = Query(None, alias="connectorType", description="Required connector"),
    service: StationService = Depends(get_station_service),
):
    """
    Get all charging stations.
    Supports filtering by text, status, power range and connector type.
    """
    stations = await service.list({
        "search": search,
        "status": status,
        "minPower": min_power,
        "maxPower": max_power,
        "connectorType": connector_type,
    })
    return StationListResponse(stations=stations)


@router.post("/create", response_model=StationMessageResponse, status_code=201)
async def create_station(
    fields: Any = Body(None),
    caller_id: str = Depends(get_current_user_id),
    service: StationService = Depends(get_station_service),
):
    """Register a new charging station owned by the caller."""
    station = await service.create(caller_id, fields)
    return StationMessageResponse(
        message="Charging station created successfully", station=station
    )


@router.get("/{station_id}", response_model=StationResponse)
async def get_station(
    station_id: str,
    service: StationService = Depends(get_station_service),
):
    """Get single charging station by ID."""
    return await service.get(station_id)


@router.put("/{station_id}", response_model=StationMessageResponse)
async def update_station(
    station_id: str,
    fields: Any = Body(None),
    _: str = Depends(get_current_user_id),
    service: StationService = Depends(get_station_service),
):
    """Update the supplied fields of a station."""
    station = await service.update(station_id, fields)
    return StationMessageResponse(message="Station updated successfully", station=station)


@router.delete("/{station_id}", response_model=MessageResponse)
async def delete_station(
    station_id: str,
    _: str = Depends(get_current_user_id),
    service: StationService = Depends(get_station_service),
):
    """Remove a station."""
    await service.delete(station_id)
    return MessageResponse(message="Station deleted successfully")
