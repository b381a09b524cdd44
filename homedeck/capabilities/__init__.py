"""
Capability system for SmartThings devices.

This module provides:
- Capability vocabulary and archetype definitions
- Classification of devices into archetypes
- A cached gateway to the SmartThings API
- Per-device action routing
"""

from .archetypes import ARCHETYPES, GENERIC, Archetype, StatusRecord
from .classifier import capability_set, classify
from .devices import DeviceController
from .exceptions import ConfigurationError, GatewayError, RemoteError, TransportError
from .gateway import DeviceGateway
from .protocols import ActionResult, ArchetypeKind, Capability, Control
from .state_cache import CacheEntry, ResponseCache
from .status import AttributeReading, StatusDocument

__all__ = [
    # Protocols
    "Capability",
    "Control",
    "ArchetypeKind",
    "ActionResult",
    # Archetypes
    "Archetype",
    "ARCHETYPES",
    "GENERIC",
    "StatusRecord",
    "StatusDocument",
    "AttributeReading",
    # Classification
    "classify",
    "capability_set",
    # Gateway
    "DeviceGateway",
    "CacheEntry",
    "ResponseCache",
    "DeviceController",
    # Errors
    "GatewayError",
    "ConfigurationError",
    "TransportError",
    "RemoteError",
]
