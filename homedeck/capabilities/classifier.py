"""
Capability-to-archetype classification.

Rules are evaluated from most to least specific because capability sets
overlap (a color light also has switch, a metered outlet is also a
switch). The first matching rule wins; the order below is load-bearing.
"""

import logging
from typing import Any, Callable, Iterable, Mapping

from .archetypes import (
    AIR_CONDITIONER,
    CONTACT_SENSOR,
    DIMMER,
    GENERIC,
    HUMIDITY_SENSOR,
    LIGHT,
    LOCK,
    MEDIA,
    MOTION_SENSOR,
    OUTLET,
    SWITCH,
    TEMPERATURE_SENSOR,
    THERMOSTAT,
    Archetype,
)
from .protocols import Capability

logger = logging.getLogger("homedeck.capabilities.classifier")

CapabilitySet = frozenset[Capability]
Predicate = Callable[[CapabilitySet], bool]


def _all_of(*required: Capability) -> Predicate:
    def predicate(caps: CapabilitySet) -> bool:
        return all(c in caps for c in required)
    return predicate


def _any_of(*candidates: Capability) -> Predicate:
    def predicate(caps: CapabilitySet) -> bool:
        return any(c in caps for c in candidates)
    return predicate


CLASSIFICATION_RULES: tuple[tuple[Predicate, Archetype], ...] = (
    (_all_of(Capability.POWER_METER, Capability.SWITCH), OUTLET),
    (_all_of(Capability.AIR_CONDITIONER_MODE), AIR_CONDITIONER),
    (_any_of(Capability.AUDIO_VOLUME, Capability.MEDIA_PLAYBACK), MEDIA),
    (_all_of(Capability.COLOR_CONTROL), LIGHT),
    (_all_of(Capability.SWITCH_LEVEL, Capability.SWITCH), DIMMER),
    (_all_of(Capability.THERMOSTAT_MODE), THERMOSTAT),
    (_all_of(Capability.LOCK), LOCK),
    (_all_of(Capability.MOTION_SENSOR), MOTION_SENSOR),
    (_all_of(Capability.CONTACT_SENSOR), CONTACT_SENSOR),
    (_all_of(Capability.RELATIVE_HUMIDITY_MEASUREMENT), HUMIDITY_SENSOR),
    (_all_of(Capability.TEMPERATURE_MEASUREMENT), TEMPERATURE_SENSOR),
    (_all_of(Capability.SWITCH), SWITCH),
)


def _iter_capability_ids(device: Any) -> Iterable[Any]:
    if not isinstance(device, Mapping):
        return
    components = device.get("components")
    if not isinstance(components, list):
        return
    for component in components:
        if not isinstance(component, Mapping):
            continue
        capabilities = component.get("capabilities")
        if not isinstance(capabilities, list):
            continue
        for capability in capabilities:
            # Descriptors carry {"id": ..., "version": ...}; bare ids are accepted too.
            if isinstance(capability, Mapping):
                yield capability.get("id")
            else:
                yield capability


def capability_set(device: Any) -> CapabilitySet:
    """Flatten every capability id across all components of a raw device."""
    return frozenset(Capability.parse(cid) for cid in _iter_capability_ids(device))


def classify_capabilities(capabilities: Iterable[Capability]) -> Archetype:
    caps = frozenset(capabilities)
    for predicate, archetype in CLASSIFICATION_RULES:
        if predicate(caps):
            return archetype
    return GENERIC


def classify(device: Any) -> Archetype:
    """
    Determine the archetype of a raw device descriptor.

    Never raises: malformed or empty descriptors resolve to GENERIC.
    """
    archetype = classify_capabilities(capability_set(device))
    if archetype is GENERIC and isinstance(device, Mapping):
        logger.debug("No archetype matched device %s", device.get("deviceId"))
    return archetype
