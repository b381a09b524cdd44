"""
Health check endpoints.
"""

from fastapi import APIRouter, Depends

from ..capabilities import DeviceGateway
from .dependencies import get_gateway

router = APIRouter(tags=["Health"])


@router.get("/ping")
async def ping():
    """Simple endpoint to verify server is running."""
    return {"status": "ok", "message": "pong"}


@router.get("/health")
async def health(gateway: DeviceGateway = Depends(get_gateway)):
    """Report whether the gateway has credentials to work with."""
    return {"status": "ok", "configured": gateway.has_token}
