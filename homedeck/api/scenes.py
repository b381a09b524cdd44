"""
Scene endpoints.

Scenes carry no local state, so nothing here is cached.
"""

from fastapi import APIRouter, Depends

from ..capabilities import DeviceGateway
from .dependencies import get_gateway

router = APIRouter(prefix="/scenes", tags=["Scenes"])


@router.get("")
async def list_scenes(gateway: DeviceGateway = Depends(get_gateway)):
    """List all scenes."""
    return await gateway.get_scenes()


@router.post("/{scene_id}/execute")
async def execute_scene(scene_id: str, gateway: DeviceGateway = Depends(get_gateway)):
    """Run a scene."""
    return await gateway.execute_scene(scene_id)
