"""
Device gateway: cached access to the SmartThings API.

Owns the access token, the devices-list cache and the per-device status
cache. Issuing a command invalidates that device's status entry before
the request goes out, so the next status read is always fresh even when
the command itself fails.
"""

import logging
import time
from typing import Any, Optional
from urllib.parse import quote

import httpx

from ..config import SmartThingsConfig
from .backends.base import Backend
from .backends.smartthings import SmartThingsBackend
from .state_cache import Clock, ResponseCache

logger = logging.getLogger("homedeck.capabilities.gateway")

DEVICES_KEY = "devices"

DEFAULT_DEVICES_TTL = 10 * 60
DEFAULT_STATUS_TTL = 60


def _items(data: Any) -> list[Any]:
    """Return the items list of a paged response, empty if missing."""
    if isinstance(data, dict):
        items = data.get("items")
        if isinstance(items, list):
            return items
    return []


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class DeviceGateway:
    """
    Cached SmartThings client.

    Callers hold one instance and pass it where needed. set_token and
    clear_cache are the only operations that empty the caches wholesale.
    """

    def __init__(
        self,
        backend: Optional[Backend] = None,
        devices_ttl: float = DEFAULT_DEVICES_TTL,
        status_ttl: float = DEFAULT_STATUS_TTL,
        default_component: str = "main",
        clock: Clock = time.monotonic,
    ):
        self._backend = backend if backend is not None else SmartThingsBackend()
        self._devices_ttl = devices_ttl
        self._status_ttl = status_ttl
        self._clock = clock
        self.default_component = default_component
        self._devices_cache: ResponseCache[list[Any]] = self._new_devices_cache()
        self._status_cache: ResponseCache[dict[str, Any]] = self._new_status_cache()

    @classmethod
    def from_config(
        cls,
        config: SmartThingsConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Clock = time.monotonic,
    ) -> "DeviceGateway":
        """Build a gateway from SmartThings settings."""
        backend = SmartThingsBackend(
            token=config.token,
            base_url=config.base_url,
            timeout=config.timeout,
            transport=transport,
        )
        return cls(
            backend=backend,
            devices_ttl=config.devices_cache_ttl,
            status_ttl=config.status_cache_ttl,
            default_component=config.default_component,
            clock=clock,
        )

    async def __aenter__(self) -> "DeviceGateway":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._backend.aclose()

    # ========== Token & cache ==========

    def _new_devices_cache(self) -> ResponseCache[list[Any]]:
        return ResponseCache(self._devices_ttl, clock=self._clock, name="devices cache")

    def _new_status_cache(self) -> ResponseCache[dict[str, Any]]:
        return ResponseCache(self._status_ttl, clock=self._clock, name="status cache")

    @property
    def has_token(self) -> bool:
        return self._backend.has_token

    def set_token(self, token: Optional[str]) -> None:
        """Replace the token; all cached data belonged to the old identity."""
        self._backend.set_token(token)
        self.clear_cache()
        logger.info("SmartThings token %s", "updated" if token else "cleared")

    def clear_cache(self) -> None:
        """Swap in empty caches; in-flight fetches write to the discarded ones."""
        self._devices_cache = self._new_devices_cache()
        self._status_cache = self._new_status_cache()
        logger.info("Gateway caches cleared")

    # ========== Devices ==========

    async def get_devices(self, force_refresh: bool = False) -> list[Any]:
        """Return the device list, from cache while it is fresh."""
        cache = self._devices_cache
        if not force_refresh:
            entry = cache.get(DEVICES_KEY)
            if entry is not None:
                logger.debug("Cache hit: %s", DEVICES_KEY)
                return entry.data

        generation = cache.generation(DEVICES_KEY)
        data = await self._backend.request("GET", "/devices")
        devices = _items(data)
        cache.put(DEVICES_KEY, devices, generation)
        return devices

    async def get_device(self, device_id: str) -> Any:
        return await self._backend.request("GET", f"/devices/{_segment(device_id)}")

    async def get_device_status(self, device_id: str, force_refresh: bool = False) -> Any:
        """Return a device's status document, from cache while it is fresh."""
        cache = self._status_cache
        if not force_refresh:
            entry = cache.get(device_id)
            if entry is not None:
                logger.debug("Cache hit: status %s", device_id)
                return entry.data
            logger.debug("Cache miss: status %s", device_id)

        generation = cache.generation(device_id)
        status = await self._backend.request("GET", f"/devices/{_segment(device_id)}/status")
        cache.put(device_id, status, generation)
        return status

    async def get_device_health(self, device_id: str) -> Any:
        return await self._backend.request("GET", f"/devices/{_segment(device_id)}/health")

    async def execute_command(
        self,
        device_id: str,
        capability: str,
        command: str,
        arguments: Optional[list[Any]] = None,
        component: Optional[str] = None,
    ) -> Any:
        """
        Send a single command to a device.

        The device's cached status is invalidated before the request is
        made, so even a failed command leaves the status marked unknown.

        Args:
            device_id: Target device
            capability: Capability id, e.g. "switch"
            command: Command name, e.g. "on"
            arguments: Positional command arguments
            component: Component id, defaults to the configured component

        Returns:
            The API acknowledgement payload
        """
        self._status_cache.invalidate(device_id)

        body = {
            "commands": [
                {
                    "component": component or self.default_component,
                    "capability": capability,
                    "command": command,
                    "arguments": list(arguments) if arguments else [],
                }
            ]
        }
        logger.info("Command %s.%s(%s) -> %s", capability, command, arguments or [], device_id)
        return await self._backend.request(
            "POST", f"/devices/{_segment(device_id)}/commands", body
        )

    # ========== Common Device Commands ==========

    async def toggle_switch(self, device_id: str, on: bool) -> Any:
        return await self.execute_command(device_id, "switch", "on" if on else "off")

    async def set_level(self, device_id: str, level: int) -> Any:
        return await self.execute_command(device_id, "switchLevel", "setLevel", [level])

    async def set_color(self, device_id: str, hue: float, saturation: float) -> Any:
        return await self.execute_command(
            device_id, "colorControl", "setColor", [{"hue": hue, "saturation": saturation}]
        )

    async def set_color_temperature(self, device_id: str, temperature: int) -> Any:
        return await self.execute_command(
            device_id, "colorTemperature", "setColorTemperature", [temperature]
        )

    async def set_thermostat_mode(self, device_id: str, mode: str) -> Any:
        return await self.execute_command(
            device_id, "thermostatMode", "setThermostatMode", [mode]
        )

    async def set_heating_setpoint(self, device_id: str, temperature: float) -> Any:
        return await self.execute_command(
            device_id, "thermostatHeatingSetpoint", "setHeatingSetpoint", [temperature]
        )

    async def set_cooling_setpoint(self, device_id: str, temperature: float) -> Any:
        return await self.execute_command(
            device_id, "thermostatCoolingSetpoint", "setCoolingSetpoint", [temperature]
        )

    async def set_air_conditioner_mode(self, device_id: str, mode: str) -> Any:
        return await self.execute_command(
            device_id, "airConditionerMode", "setAirConditionerMode", [mode]
        )

    async def set_fan_mode(self, device_id: str, fan_mode: str) -> Any:
        return await self.execute_command(
            device_id, "airConditionerFanMode", "setFanMode", [fan_mode]
        )

    async def set_fan_oscillation_mode(self, device_id: str, mode: str) -> Any:
        return await self.execute_command(
            device_id, "fanOscillationMode", "setFanOscillationMode", [mode]
        )

    async def set_volume(self, device_id: str, volume: int) -> Any:
        return await self.execute_command(device_id, "audioVolume", "setVolume", [volume])

    async def set_playback_status(self, device_id: str, status: str) -> Any:
        """Send play, pause or stop."""
        if status not in ("play", "pause", "stop"):
            raise ValueError(f"Unsupported playback command: {status}")
        return await self.execute_command(device_id, "mediaPlayback", status)

    async def lock_door(self, device_id: str) -> Any:
        return await self.execute_command(device_id, "lock", "lock")

    async def unlock_door(self, device_id: str) -> Any:
        return await self.execute_command(device_id, "lock", "unlock")

    # ========== Scenes ==========

    async def get_scenes(self) -> list[Any]:
        return _items(await self._backend.request("GET", "/scenes"))

    async def execute_scene(self, scene_id: str) -> Any:
        return await self._backend.request("POST", f"/scenes/{_segment(scene_id)}/execute")

    # ========== Locations ==========

    async def get_locations(self) -> list[Any]:
        return _items(await self._backend.request("GET", "/locations"))

    async def get_location(self, location_id: str) -> Any:
        return await self._backend.request("GET", f"/locations/{_segment(location_id)}")

    # ========== Rooms ==========

    async def get_rooms(self, location_id: str) -> list[Any]:
        return _items(
            await self._backend.request("GET", f"/locations/{_segment(location_id)}/rooms")
        )
