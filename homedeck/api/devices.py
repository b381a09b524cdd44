"""
Device listing, status and control endpoints.
"""

import asyncio
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..capabilities import DeviceController, DeviceGateway, GatewayError, RemoteError, classify
from .dependencies import get_gateway

logger = logging.getLogger("homedeck.api.devices")

router = APIRouter(prefix="/devices", tags=["Devices"])


# --- Request/Response Models ---


class ArchetypeInfo(BaseModel):
    """Archetype summary attached to device responses."""
    type: str
    icon: str
    label: str
    capabilities: list[str]
    controls: list[str]


class DeviceInfo(BaseModel):
    """Device with its classification and, optionally, status."""
    id: str
    name: str
    archetype: ArchetypeInfo
    device: dict[str, Any]
    status: Optional[dict[str, Any]] = None


class DeviceStatusResponse(BaseModel):
    """Raw status together with the extracted record."""
    id: str
    archetype: ArchetypeInfo
    status: dict[str, Any]
    raw: Any


class CommandRequestBody(BaseModel):
    """Request to send a raw command to a device."""
    capability: str
    command: str
    arguments: list[Any] = []
    component: Optional[str] = None


class ActionRequestBody(BaseModel):
    """Request to execute a UI action on a device."""
    action: str
    params: dict[str, Any] = {}


class ActionResponse(BaseModel):
    """Response from an action execution."""
    success: bool
    message: str
    data: dict[str, Any] = {}
    error: Optional[str] = None


# --- Helpers ---


def _device_id(device: dict[str, Any]) -> str:
    return str(device.get("deviceId", ""))


def _device_name(device: dict[str, Any]) -> str:
    return str(device.get("label") or device.get("name") or _device_id(device))


async def _find_device(gateway: DeviceGateway, device_id: str) -> Optional[dict[str, Any]]:
    """
    Look a device up in the cached device list.

    Devices added since the list was cached, or a failed list read, fall
    back to fetching the descriptor directly. Returns None when the API
    does not know the device.
    """
    try:
        for device in await gateway.get_devices():
            if isinstance(device, dict) and _device_id(device) == device_id:
                return device
    except GatewayError as e:
        logger.warning("Device list unavailable, fetching %s directly: %s", device_id, e)

    try:
        device = await gateway.get_device(device_id)
    except RemoteError as e:
        logger.debug("Device lookup failed for %s: %s", device_id, e)
        return None
    return device if isinstance(device, dict) else None


async def _status_or_none(gateway: DeviceGateway, device: dict[str, Any]) -> Optional[dict[str, Any]]:
    try:
        raw = await gateway.get_device_status(_device_id(device))
    except GatewayError as e:
        logger.warning("Status unavailable for %s: %s", _device_id(device), e)
        return None
    return classify(device).get_status(raw).to_dict()


# --- Endpoints ---


@router.get("", response_model=list[DeviceInfo])
async def list_devices(
    refresh: bool = False,
    include_status: bool = False,
    gateway: DeviceGateway = Depends(get_gateway),
):
    """
    List all devices with their archetype.

    With include_status, statuses are fetched concurrently; a device whose
    status cannot be read is reported with status null.
    """
    devices = [d for d in await gateway.get_devices(force_refresh=refresh) if isinstance(d, dict)]

    statuses: list[Optional[dict[str, Any]]] = [None] * len(devices)
    if include_status:
        statuses = list(await asyncio.gather(*(_status_or_none(gateway, d) for d in devices)))

    return [
        DeviceInfo(
            id=_device_id(device),
            name=_device_name(device),
            archetype=ArchetypeInfo(**classify(device).to_dict()),
            device=device,
            status=status,
        )
        for device, status in zip(devices, statuses)
    ]


@router.get("/{device_id}", response_model=DeviceInfo)
async def get_device(device_id: str, gateway: DeviceGateway = Depends(get_gateway)):
    """Get details of a specific device."""
    device = await gateway.get_device(device_id)
    if not isinstance(device, dict):
        raise HTTPException(502, f"Unexpected device payload for {device_id}")

    return DeviceInfo(
        id=_device_id(device) or device_id,
        name=_device_name(device),
        archetype=ArchetypeInfo(**classify(device).to_dict()),
        device=device,
    )


@router.get("/{device_id}/status", response_model=DeviceStatusResponse)
async def get_device_status(
    device_id: str,
    refresh: bool = False,
    gateway: DeviceGateway = Depends(get_gateway),
):
    """Get the current status of a device, classified by its archetype."""
    device = await _find_device(gateway, device_id)
    if device is None:
        raise HTTPException(404, f"Device not found: {device_id}")

    archetype = classify(device)
    raw = await gateway.get_device_status(device_id, force_refresh=refresh)

    return DeviceStatusResponse(
        id=device_id,
        archetype=ArchetypeInfo(**archetype.to_dict()),
        status=archetype.get_status(raw).to_dict(),
        raw=raw,
    )


@router.get("/{device_id}/health")
async def get_device_health(device_id: str, gateway: DeviceGateway = Depends(get_gateway)):
    """Get the health of a device."""
    return await gateway.get_device_health(device_id)


@router.post("/{device_id}/commands")
async def execute_command(
    device_id: str,
    body: CommandRequestBody,
    gateway: DeviceGateway = Depends(get_gateway),
):
    """Send a single raw command to a device."""
    return await gateway.execute_command(
        device_id,
        body.capability,
        body.command,
        body.arguments,
        component=body.component,
    )


@router.post("/{device_id}/action", response_model=ActionResponse)
async def execute_device_action(
    device_id: str,
    body: ActionRequestBody,
    gateway: DeviceGateway = Depends(get_gateway),
):
    """Execute a UI action on a device, routed by its archetype."""
    device = await _find_device(gateway, device_id)
    if device is None:
        raise HTTPException(404, f"Device not found: {device_id}")

    result = await DeviceController(device, gateway).execute_action(body.action, body.params)

    if not result.success:
        raise HTTPException(400, detail=result.message)

    return ActionResponse(**result.to_dict())
