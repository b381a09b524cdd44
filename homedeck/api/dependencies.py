"""
FastAPI dependencies for service injection.
"""

from fastapi import HTTPException, Request, status

from ..capabilities import DeviceGateway


def get_gateway(request: Request) -> DeviceGateway:
    """
    FastAPI dependency that provides the application's device gateway.

    Raises:
        HTTPException: 503 if the gateway has not been started
    """
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Device gateway is not running.",
        )
    return gateway
