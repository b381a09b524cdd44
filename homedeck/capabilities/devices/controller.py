"""
Device controller: binds a device descriptor to its archetype and gateway.

Routes UI actions to the gateway command wrappers. Which actions a
device accepts follows from the controls its archetype exposes.
"""

import logging
from typing import Any, Mapping

from ..archetypes import Archetype, StatusRecord
from ..classifier import classify
from ..gateway import DeviceGateway
from ..protocols import ActionResult, ArchetypeKind, Control

logger = logging.getLogger("homedeck.capabilities.devices")

CONTROL_ACTIONS: dict[Control, tuple[str, ...]] = {
    Control.TOGGLE: ("turn_on", "turn_off", "toggle"),
    Control.BRIGHTNESS: ("set_brightness",),
    Control.COLOR: ("set_color", "set_color_temperature"),
    Control.MODE: ("set_mode",),
    Control.TEMPERATURE: ("set_heating_setpoint", "set_cooling_setpoint"),
    Control.FAN_SPEED: ("set_fan_speed",),
    Control.SWING: ("set_swing",),
    Control.VOLUME: ("set_volume",),
    Control.PLAYBACK: ("play", "pause", "stop"),
    Control.LOCK: ("lock", "unlock"),
}


class DeviceController:
    """Action routing for a single classified device."""

    def __init__(self, device: Mapping[str, Any], gateway: DeviceGateway):
        self._device = device
        self._gateway = gateway
        self._archetype = classify(device)

    @property
    def id(self) -> str:
        return str(self._device.get("deviceId", ""))

    @property
    def name(self) -> str:
        return str(self._device.get("label") or self._device.get("name") or self.id)

    @property
    def archetype(self) -> Archetype:
        return self._archetype

    @property
    def supported_actions(self) -> list[str]:
        actions: list[str] = []
        for control in self._archetype.controls:
            actions.extend(CONTROL_ACTIONS[control])
        return actions

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            **self._archetype.to_dict(),
            "supported_actions": self.supported_actions,
        }

    async def get_state(self, force_refresh: bool = False) -> StatusRecord:
        raw = await self._gateway.get_device_status(self.id, force_refresh=force_refresh)
        return self._archetype.get_status(raw)

    async def execute_action(self, action: str, params: dict[str, Any]) -> ActionResult:
        """Route action to the matching gateway command."""
        if action not in self.supported_actions:
            return ActionResult(
                success=False,
                message=f"Unknown action: {action}",
                error="UNKNOWN_ACTION",
            )

        try:
            data = await self._dispatch(action, params)
        except (KeyError, TypeError, ValueError) as e:
            return ActionResult(
                success=False,
                message=f"Invalid parameters for {action}: {e}",
                error="INVALID_PARAMS",
            )

        logger.info("%s: %s(%s)", self.name, action, params)
        return ActionResult(
            success=True,
            message=f"{self.name}: {action.replace('_', ' ')}",
            data=data if isinstance(data, dict) else {"response": data},
        )

    async def _dispatch(self, action: str, params: dict[str, Any]) -> Any:
        gw = self._gateway
        device_id = self.id

        if action == "turn_on":
            return await gw.toggle_switch(device_id, True)
        elif action == "turn_off":
            return await gw.toggle_switch(device_id, False)
        elif action == "toggle":
            state = await self.get_state()
            return await gw.toggle_switch(device_id, not getattr(state, "is_on", False))
        elif action == "set_brightness":
            return await gw.set_level(device_id, int(params["level"]))
        elif action == "set_color":
            return await gw.set_color(device_id, params["hue"], params["saturation"])
        elif action == "set_color_temperature":
            return await gw.set_color_temperature(device_id, int(params["temperature"]))
        elif action == "set_mode":
            if self._archetype.kind is ArchetypeKind.AIR_CONDITIONER:
                return await gw.set_air_conditioner_mode(device_id, params["mode"])
            return await gw.set_thermostat_mode(device_id, params["mode"])
        elif action == "set_heating_setpoint":
            return await gw.set_heating_setpoint(device_id, float(params["temperature"]))
        elif action == "set_cooling_setpoint":
            return await gw.set_cooling_setpoint(device_id, float(params["temperature"]))
        elif action == "set_fan_speed":
            return await gw.set_fan_mode(device_id, params["fan_mode"])
        elif action == "set_swing":
            return await gw.set_fan_oscillation_mode(device_id, params["mode"])
        elif action == "set_volume":
            return await gw.set_volume(device_id, int(params["volume"]))
        elif action in ("play", "pause", "stop"):
            return await gw.set_playback_status(device_id, action)
        elif action == "lock":
            return await gw.lock_door(device_id)
        elif action == "unlock":
            return await gw.unlock_door(device_id)
        raise ValueError(f"Unhandled action: {action}")
