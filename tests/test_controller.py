"""
Tests for DeviceController action routing.

The gateway is replaced by a MagicMock with AsyncMock command methods so
the tests only check which wrapper each UI action lands on.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from homedeck.capabilities import ArchetypeKind, DeviceController, DeviceGateway


def _make_gateway(status: dict | None = None) -> MagicMock:
    gateway = MagicMock(spec=DeviceGateway)
    for name in (
        "toggle_switch",
        "set_level",
        "set_color",
        "set_color_temperature",
        "set_thermostat_mode",
        "set_heating_setpoint",
        "set_cooling_setpoint",
        "set_air_conditioner_mode",
        "set_fan_mode",
        "set_fan_oscillation_mode",
        "set_volume",
        "set_playback_status",
        "lock_door",
        "unlock_door",
    ):
        setattr(gateway, name, AsyncMock(return_value={"results": [{"status": "ACCEPTED"}]}))
    gateway.get_device_status = AsyncMock(return_value=status or {})
    return gateway


class TestMetadata:

    def test_name_prefers_label(self, make_device):
        device = make_device("d1", "switch", label="Porch")
        controller = DeviceController(device, _make_gateway())
        assert controller.id == "d1"
        assert controller.name == "Porch"

    def test_name_falls_back_to_name_then_id(self):
        assert DeviceController({"deviceId": "d1", "name": "raw"}, _make_gateway()).name == "raw"
        assert DeviceController({"deviceId": "d1"}, _make_gateway()).name == "d1"

    def test_supported_actions_follow_controls(self, make_device):
        dimmer = DeviceController(make_device("d1", "switch", "switchLevel"), _make_gateway())
        assert dimmer.archetype.kind is ArchetypeKind.DIMMER
        assert dimmer.supported_actions == ["turn_on", "turn_off", "toggle", "set_brightness"]

        sensor = DeviceController(make_device("d2", "motionSensor"), _make_gateway())
        assert sensor.supported_actions == []

    def test_to_dict(self, make_device):
        data = DeviceController(make_device("d1", "lock", label="Front door"), _make_gateway()).to_dict()
        assert data["type"] == "lock"
        assert data["name"] == "Front door"
        assert data["supported_actions"] == ["lock", "unlock"]


class TestRouting:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "capabilities, action, params, method, args",
        [
            (("switch",), "turn_on", {}, "toggle_switch", ("d1", True)),
            (("switch",), "turn_off", {}, "toggle_switch", ("d1", False)),
            (("switch", "switchLevel"), "set_brightness", {"level": "40"}, "set_level", ("d1", 40)),
            (("switch", "colorControl"), "set_color", {"hue": 5, "saturation": 50}, "set_color", ("d1", 5, 50)),
            (("switch", "colorControl"), "set_color_temperature", {"temperature": 2700},
             "set_color_temperature", ("d1", 2700)),
            (("thermostatMode",), "set_mode", {"mode": "heat"}, "set_thermostat_mode", ("d1", "heat")),
            (("thermostatMode",), "set_heating_setpoint", {"temperature": 20},
             "set_heating_setpoint", ("d1", 20.0)),
            (("airConditionerMode",), "set_mode", {"mode": "cool"}, "set_air_conditioner_mode", ("d1", "cool")),
            (("airConditionerMode",), "set_cooling_setpoint", {"temperature": 23},
             "set_cooling_setpoint", ("d1", 23.0)),
            (("airConditionerMode",), "set_fan_speed", {"fan_mode": "low"}, "set_fan_mode", ("d1", "low")),
            (("airConditionerMode",), "set_swing", {"mode": "fixed"}, "set_fan_oscillation_mode", ("d1", "fixed")),
            (("audioVolume",), "set_volume", {"volume": 9}, "set_volume", ("d1", 9)),
            (("mediaPlayback",), "play", {}, "set_playback_status", ("d1", "play")),
            (("lock",), "lock", {}, "lock_door", ("d1",)),
            (("lock",), "unlock", {}, "unlock_door", ("d1",)),
        ],
    )
    async def test_action_calls_wrapper(self, make_device, capabilities, action, params, method, args):
        gateway = _make_gateway()
        controller = DeviceController(make_device("d1", *capabilities), gateway)

        result = await controller.execute_action(action, params)

        assert result.success
        getattr(gateway, method).assert_awaited_once_with(*args)

    @pytest.mark.asyncio
    async def test_toggle_reads_state_first(self, make_device, make_status):
        gateway = _make_gateway(status=make_status(switch={"switch": "on"}))
        controller = DeviceController(make_device("d1", "switch"), gateway)

        await controller.execute_action("toggle", {})

        gateway.get_device_status.assert_awaited_once_with("d1", force_refresh=False)
        gateway.toggle_switch.assert_awaited_once_with("d1", False)

    @pytest.mark.asyncio
    async def test_toggle_with_unknown_state_turns_on(self, make_device):
        gateway = _make_gateway(status={})
        controller = DeviceController(make_device("d1", "switch"), gateway)

        await controller.execute_action("toggle", {})

        gateway.toggle_switch.assert_awaited_once_with("d1", True)

    @pytest.mark.asyncio
    async def test_unsupported_action_is_rejected_without_command(self, make_device):
        gateway = _make_gateway()
        controller = DeviceController(make_device("d1", "motionSensor"), gateway)

        result = await controller.execute_action("turn_on", {})

        assert not result.success
        assert result.error == "UNKNOWN_ACTION"
        gateway.toggle_switch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_params_are_reported(self, make_device):
        gateway = _make_gateway()
        controller = DeviceController(make_device("d1", "switch", "switchLevel"), gateway)

        result = await controller.execute_action("set_brightness", {})

        assert not result.success
        assert result.error == "INVALID_PARAMS"
        gateway.set_level.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_gateway_errors_propagate(self, make_device):
        from homedeck.capabilities import RemoteError

        gateway = _make_gateway()
        gateway.lock_door.side_effect = RemoteError(409, "Lock jammed")
        controller = DeviceController(make_device("d1", "lock"), gateway)

        with pytest.raises(RemoteError, match="Lock jammed"):
            await controller.execute_action("lock", {})

    @pytest.mark.asyncio
    async def test_get_state_extracts_record(self, make_device, make_status):
        gateway = _make_gateway(status=make_status(lock={"lock": "locked"}))
        controller = DeviceController(make_device("d1", "lock"), gateway)

        state = await controller.get_state()

        assert state.to_dict() == {"is_locked": True}
