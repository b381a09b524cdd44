"""
Settings endpoints.

The settings-persistence layer calls PUT /settings/token whenever the
user updates credentials.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..capabilities import DeviceGateway
from .dependencies import get_gateway

logger = logging.getLogger("homedeck.api.settings")

router = APIRouter(prefix="/settings", tags=["Settings"])


class TokenUpdate(BaseModel):
    """New access token; null or empty clears it."""
    token: Optional[str] = None


@router.put("/token")
async def update_token(body: TokenUpdate, gateway: DeviceGateway = Depends(get_gateway)):
    """Replace the access token and drop all cached data."""
    gateway.set_token(body.token)
    return {"status": "ok", "configured": gateway.has_token}
