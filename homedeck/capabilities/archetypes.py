"""
Device archetype definitions.

Maps SmartThings capabilities to UI controls, icons and a status
extractor. Archetypes are static configuration; nothing here is created
at runtime.
"""

from dataclasses import asdict, dataclass
from typing import Any, Callable, Mapping, Optional

from .protocols import ArchetypeKind, Capability, Control
from .status import Number, StatusDocument

RawStatus = Optional[Mapping[str, Any]]


# Status records

@dataclass(frozen=True)
class StatusRecord:
    """Base flat status record; the generic archetype returns this empty."""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SwitchStatus(StatusRecord):
    is_on: Optional[bool] = None


@dataclass(frozen=True)
class OutletStatus(StatusRecord):
    is_on: Optional[bool] = None
    power: Optional[Number] = None
    energy: Optional[Number] = None


@dataclass(frozen=True)
class DimmerStatus(StatusRecord):
    is_on: Optional[bool] = None
    level: Optional[Number] = None


@dataclass(frozen=True)
class LightStatus(StatusRecord):
    is_on: Optional[bool] = None
    level: Optional[Number] = None
    hue: Optional[Number] = None
    saturation: Optional[Number] = None
    color_temperature: Optional[Number] = None


@dataclass(frozen=True)
class AirConditionerStatus(StatusRecord):
    is_on: Optional[bool] = None
    mode: Optional[str] = None
    fan_mode: Optional[str] = None
    swing_mode: Optional[str] = None
    cooling_setpoint: Optional[Number] = None
    temperature: Optional[Number] = None


@dataclass(frozen=True)
class MediaStatus(StatusRecord):
    is_on: Optional[bool] = None
    volume: Optional[Number] = None
    is_muted: Optional[bool] = None
    is_playing: Optional[bool] = None
    playback_status: Optional[str] = None


@dataclass(frozen=True)
class ThermostatStatus(StatusRecord):
    mode: Optional[str] = None
    heating_setpoint: Optional[Number] = None
    cooling_setpoint: Optional[Number] = None
    temperature: Optional[Number] = None


@dataclass(frozen=True)
class LockStatus(StatusRecord):
    is_locked: Optional[bool] = None


@dataclass(frozen=True)
class MotionStatus(StatusRecord):
    motion: Optional[bool] = None


@dataclass(frozen=True)
class ContactStatus(StatusRecord):
    is_open: Optional[bool] = None


@dataclass(frozen=True)
class HumidityStatus(StatusRecord):
    humidity: Optional[Number] = None


@dataclass(frozen=True)
class TemperatureStatus(StatusRecord):
    temperature: Optional[Number] = None
    unit: str = "C"


# Extractors

def _is_on(doc: StatusDocument) -> Optional[bool]:
    return doc.flag(Capability.SWITCH, "switch", "on")


def _switch_status(raw: RawStatus) -> SwitchStatus:
    return SwitchStatus(is_on=_is_on(StatusDocument(raw)))


def _outlet_status(raw: RawStatus) -> OutletStatus:
    doc = StatusDocument(raw)
    return OutletStatus(
        is_on=_is_on(doc),
        power=doc.number(Capability.POWER_METER, "power"),
        energy=doc.number(Capability.ENERGY_METER, "energy"),
    )


def _dimmer_status(raw: RawStatus) -> DimmerStatus:
    doc = StatusDocument(raw)
    return DimmerStatus(
        is_on=_is_on(doc),
        level=doc.number(Capability.SWITCH_LEVEL, "level"),
    )


def _light_status(raw: RawStatus) -> LightStatus:
    doc = StatusDocument(raw)
    return LightStatus(
        is_on=_is_on(doc),
        level=doc.number(Capability.SWITCH_LEVEL, "level"),
        hue=doc.number(Capability.COLOR_CONTROL, "hue"),
        saturation=doc.number(Capability.COLOR_CONTROL, "saturation"),
        color_temperature=doc.number(Capability.COLOR_TEMPERATURE, "colorTemperature"),
    )


def _air_conditioner_status(raw: RawStatus) -> AirConditionerStatus:
    doc = StatusDocument(raw)
    return AirConditionerStatus(
        is_on=_is_on(doc),
        mode=doc.text(Capability.AIR_CONDITIONER_MODE, "airConditionerMode"),
        fan_mode=doc.text(Capability.AIR_CONDITIONER_FAN_MODE, "fanMode"),
        swing_mode=doc.text(Capability.FAN_OSCILLATION_MODE, "fanOscillationMode"),
        cooling_setpoint=doc.number(Capability.THERMOSTAT_COOLING_SETPOINT, "coolingSetpoint"),
        temperature=doc.number(Capability.TEMPERATURE_MEASUREMENT, "temperature"),
    )


def _media_status(raw: RawStatus) -> MediaStatus:
    doc = StatusDocument(raw)
    return MediaStatus(
        is_on=_is_on(doc),
        volume=doc.number(Capability.AUDIO_VOLUME, "volume"),
        is_muted=doc.flag(Capability.AUDIO_MUTE, "mute", "muted"),
        is_playing=doc.flag(Capability.MEDIA_PLAYBACK, "playbackStatus", "playing"),
        playback_status=doc.text(Capability.MEDIA_PLAYBACK, "playbackStatus"),
    )


def _thermostat_status(raw: RawStatus) -> ThermostatStatus:
    doc = StatusDocument(raw)
    return ThermostatStatus(
        mode=doc.text(Capability.THERMOSTAT_MODE, "thermostatMode"),
        heating_setpoint=doc.number(Capability.THERMOSTAT_HEATING_SETPOINT, "heatingSetpoint"),
        cooling_setpoint=doc.number(Capability.THERMOSTAT_COOLING_SETPOINT, "coolingSetpoint"),
        temperature=doc.number(Capability.TEMPERATURE_MEASUREMENT, "temperature"),
    )


def _lock_status(raw: RawStatus) -> LockStatus:
    return LockStatus(is_locked=StatusDocument(raw).flag(Capability.LOCK, "lock", "locked"))


def _motion_status(raw: RawStatus) -> MotionStatus:
    return MotionStatus(
        motion=StatusDocument(raw).flag(Capability.MOTION_SENSOR, "motion", "active")
    )


def _contact_status(raw: RawStatus) -> ContactStatus:
    return ContactStatus(
        is_open=StatusDocument(raw).flag(Capability.CONTACT_SENSOR, "contact", "open")
    )


def _humidity_status(raw: RawStatus) -> HumidityStatus:
    return HumidityStatus(
        humidity=StatusDocument(raw).number(
            Capability.RELATIVE_HUMIDITY_MEASUREMENT, "humidity"
        )
    )


def _temperature_status(raw: RawStatus) -> TemperatureStatus:
    doc = StatusDocument(raw)
    return TemperatureStatus(
        temperature=doc.number(Capability.TEMPERATURE_MEASUREMENT, "temperature"),
        unit=doc.unit(Capability.TEMPERATURE_MEASUREMENT, "temperature") or "C",
    )


def _generic_status(raw: RawStatus) -> StatusRecord:
    return StatusRecord()


# Archetypes

@dataclass(frozen=True)
class Archetype:
    """A named device category with its controls and status extractor."""

    kind: ArchetypeKind
    icon: str
    label: str
    capabilities: tuple[Capability, ...]
    controls: tuple[Control, ...]
    extractor: Callable[[RawStatus], StatusRecord]

    def get_status(self, raw: RawStatus) -> StatusRecord:
        """Extract the flat status record from a raw status document."""
        return self.extractor(raw)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "icon": self.icon,
            "label": self.label,
            "capabilities": [c.value for c in self.capabilities],
            "controls": [c.value for c in self.controls],
        }


OUTLET = Archetype(
    kind=ArchetypeKind.OUTLET,
    icon="🔌",
    label="Outlet",
    capabilities=(Capability.SWITCH, Capability.POWER_METER, Capability.ENERGY_METER),
    controls=(Control.TOGGLE,),
    extractor=_outlet_status,
)

AIR_CONDITIONER = Archetype(
    kind=ArchetypeKind.AIR_CONDITIONER,
    icon="❄️",
    label="Air Conditioner",
    capabilities=(
        Capability.SWITCH,
        Capability.AIR_CONDITIONER_MODE,
        Capability.AIR_CONDITIONER_FAN_MODE,
        Capability.FAN_OSCILLATION_MODE,
        Capability.THERMOSTAT_COOLING_SETPOINT,
        Capability.TEMPERATURE_MEASUREMENT,
    ),
    controls=(
        Control.TOGGLE,
        Control.MODE,
        Control.FAN_SPEED,
        Control.SWING,
        Control.TEMPERATURE,
    ),
    extractor=_air_conditioner_status,
)

MEDIA = Archetype(
    kind=ArchetypeKind.MEDIA,
    icon="📺",
    label="Media Player",
    capabilities=(
        Capability.SWITCH,
        Capability.AUDIO_VOLUME,
        Capability.AUDIO_MUTE,
        Capability.MEDIA_PLAYBACK,
    ),
    controls=(Control.TOGGLE, Control.VOLUME, Control.PLAYBACK),
    extractor=_media_status,
)

LIGHT = Archetype(
    kind=ArchetypeKind.LIGHT,
    icon="💡",
    label="Light",
    capabilities=(
        Capability.SWITCH,
        Capability.SWITCH_LEVEL,
        Capability.COLOR_CONTROL,
        Capability.COLOR_TEMPERATURE,
    ),
    controls=(Control.TOGGLE, Control.BRIGHTNESS, Control.COLOR),
    extractor=_light_status,
)

DIMMER = Archetype(
    kind=ArchetypeKind.DIMMER,
    icon="🔆",
    label="Dimmer",
    capabilities=(Capability.SWITCH, Capability.SWITCH_LEVEL),
    controls=(Control.TOGGLE, Control.BRIGHTNESS),
    extractor=_dimmer_status,
)

THERMOSTAT = Archetype(
    kind=ArchetypeKind.THERMOSTAT,
    icon="🌡️",
    label="Thermostat",
    capabilities=(
        Capability.THERMOSTAT_MODE,
        Capability.THERMOSTAT_HEATING_SETPOINT,
        Capability.THERMOSTAT_COOLING_SETPOINT,
        Capability.TEMPERATURE_MEASUREMENT,
    ),
    controls=(Control.MODE, Control.TEMPERATURE),
    extractor=_thermostat_status,
)

LOCK = Archetype(
    kind=ArchetypeKind.LOCK,
    icon="🔒",
    label="Lock",
    capabilities=(Capability.LOCK,),
    controls=(Control.LOCK,),
    extractor=_lock_status,
)

MOTION_SENSOR = Archetype(
    kind=ArchetypeKind.MOTION_SENSOR,
    icon="👁️",
    label="Motion Sensor",
    capabilities=(Capability.MOTION_SENSOR,),
    controls=(),
    extractor=_motion_status,
)

CONTACT_SENSOR = Archetype(
    kind=ArchetypeKind.CONTACT_SENSOR,
    icon="🚪",
    label="Contact Sensor",
    capabilities=(Capability.CONTACT_SENSOR,),
    controls=(),
    extractor=_contact_status,
)

HUMIDITY_SENSOR = Archetype(
    kind=ArchetypeKind.HUMIDITY_SENSOR,
    icon="💧",
    label="Humidity Sensor",
    capabilities=(Capability.RELATIVE_HUMIDITY_MEASUREMENT,),
    controls=(),
    extractor=_humidity_status,
)

TEMPERATURE_SENSOR = Archetype(
    kind=ArchetypeKind.TEMPERATURE_SENSOR,
    icon="🌡️",
    label="Temperature Sensor",
    capabilities=(Capability.TEMPERATURE_MEASUREMENT,),
    controls=(),
    extractor=_temperature_status,
)

SWITCH = Archetype(
    kind=ArchetypeKind.SWITCH,
    icon="💡",
    label="Switch",
    capabilities=(Capability.SWITCH,),
    controls=(Control.TOGGLE,),
    extractor=_switch_status,
)

GENERIC = Archetype(
    kind=ArchetypeKind.GENERIC,
    icon="📱",
    label="Device",
    capabilities=(),
    controls=(),
    extractor=_generic_status,
)


ARCHETYPES: dict[ArchetypeKind, Archetype] = {
    a.kind: a
    for a in (
        OUTLET,
        AIR_CONDITIONER,
        MEDIA,
        LIGHT,
        DIMMER,
        THERMOSTAT,
        LOCK,
        MOTION_SENSOR,
        CONTACT_SENSOR,
        HUMIDITY_SENSOR,
        TEMPERATURE_SENSOR,
        SWITCH,
        GENERIC,
    )
}
