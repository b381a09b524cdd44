"""
Protocol definitions for the capability/device system.

Capabilities are the remotely-defined features a device declares. The
vocabulary is open on the server side, so anything this module does not
know about collapses into Capability.UNRECOGNIZED.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Capability(str, Enum):
    """Capability identifiers recognized by the classifier."""
    SWITCH = "switch"
    SWITCH_LEVEL = "switchLevel"
    COLOR_CONTROL = "colorControl"
    COLOR_TEMPERATURE = "colorTemperature"
    POWER_METER = "powerMeter"
    ENERGY_METER = "energyMeter"
    AIR_CONDITIONER_MODE = "airConditionerMode"
    AIR_CONDITIONER_FAN_MODE = "airConditionerFanMode"
    FAN_OSCILLATION_MODE = "fanOscillationMode"
    AUDIO_VOLUME = "audioVolume"
    AUDIO_MUTE = "audioMute"
    MEDIA_PLAYBACK = "mediaPlayback"
    THERMOSTAT_MODE = "thermostatMode"
    THERMOSTAT_HEATING_SETPOINT = "thermostatHeatingSetpoint"
    THERMOSTAT_COOLING_SETPOINT = "thermostatCoolingSetpoint"
    TEMPERATURE_MEASUREMENT = "temperatureMeasurement"
    RELATIVE_HUMIDITY_MEASUREMENT = "relativeHumidityMeasurement"
    LOCK = "lock"
    MOTION_SENSOR = "motionSensor"
    CONTACT_SENSOR = "contactSensor"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def parse(cls, capability_id: Any) -> "Capability":
        """Map a raw capability id to a member, UNRECOGNIZED if unknown."""
        if isinstance(capability_id, str) and capability_id != cls.UNRECOGNIZED.value:
            try:
                return cls(capability_id)
            except ValueError:
                pass
        return cls.UNRECOGNIZED


class Control(str, Enum):
    """Interactive controls an archetype exposes to the UI."""
    TOGGLE = "toggle"
    BRIGHTNESS = "brightness"
    COLOR = "color"
    MODE = "mode"
    TEMPERATURE = "temperature"
    FAN_SPEED = "fan_speed"
    SWING = "swing"
    VOLUME = "volume"
    PLAYBACK = "playback"
    LOCK = "lock"


class ArchetypeKind(str, Enum):
    """Classification of device archetypes."""
    OUTLET = "outlet"
    AIR_CONDITIONER = "airConditioner"
    MEDIA = "media"
    LIGHT = "light"
    DIMMER = "dimmer"
    THERMOSTAT = "thermostat"
    LOCK = "lock"
    MOTION_SENSOR = "motionSensor"
    CONTACT_SENSOR = "contactSensor"
    HUMIDITY_SENSOR = "humiditySensor"
    TEMPERATURE_SENSOR = "temperatureSensor"
    SWITCH = "switch"
    GENERIC = "generic"


@dataclass
class ActionResult:
    """Result of executing an action on a device."""
    success: bool
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "data": self.data,
            "error": self.error,
        }
