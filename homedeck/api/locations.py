"""
Location and room lookup endpoints.
"""

from fastapi import APIRouter, Depends

from ..capabilities import DeviceGateway
from .dependencies import get_gateway

router = APIRouter(prefix="/locations", tags=["Locations"])


@router.get("")
async def list_locations(gateway: DeviceGateway = Depends(get_gateway)):
    return await gateway.get_locations()


@router.get("/{location_id}")
async def get_location(location_id: str, gateway: DeviceGateway = Depends(get_gateway)):
    return await gateway.get_location(location_id)


@router.get("/{location_id}/rooms")
async def list_rooms(location_id: str, gateway: DeviceGateway = Depends(get_gateway)):
    """List the rooms of a location."""
    return await gateway.get_rooms(location_id)
