"""
Read-only accessor for raw device status documents.

A status document is a sparse, externally defined tree:

    {"components": {"main": {"switch": {"switch": {"value": "on"}}}}}

Every accessor here is total: a missing component, capability or
attribute, or a node of the wrong shape, yields None instead of raising.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .protocols import Capability

Number = Union[int, float]

DEFAULT_COMPONENT = "main"


@dataclass(frozen=True)
class AttributeReading:
    """A single attribute value with its optional unit."""
    value: Any
    unit: Optional[str] = None


def _child(node: Any, key: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(key)
    return None


class StatusDocument:
    """Typed optional-field view over a raw status mapping."""

    def __init__(self, raw: Optional[Mapping[str, Any]]):
        self._raw = raw if isinstance(raw, Mapping) else {}

    def component_ids(self) -> list[str]:
        components = self._raw.get("components")
        if isinstance(components, Mapping):
            return [str(key) for key in components]
        return []

    def attribute(
        self,
        capability: Union[Capability, str],
        attribute: str,
        component: str = DEFAULT_COMPONENT,
    ) -> Optional[AttributeReading]:
        """Return the reading at component/capability/attribute, if present."""
        capability_id = capability.value if isinstance(capability, Capability) else capability
        node = _child(self._raw.get("components"), component)
        node = _child(node, capability_id)
        node = _child(node, attribute)
        if not isinstance(node, Mapping) or "value" not in node:
            return None
        unit = node.get("unit")
        return AttributeReading(
            value=node["value"],
            unit=unit if isinstance(unit, str) else None,
        )

    def value(
        self,
        capability: Union[Capability, str],
        attribute: str,
        component: str = DEFAULT_COMPONENT,
    ) -> Any:
        reading = self.attribute(capability, attribute, component)
        return reading.value if reading else None

    def unit(
        self,
        capability: Union[Capability, str],
        attribute: str,
        component: str = DEFAULT_COMPONENT,
    ) -> Optional[str]:
        reading = self.attribute(capability, attribute, component)
        return reading.unit if reading else None

    def text(
        self,
        capability: Union[Capability, str],
        attribute: str,
        component: str = DEFAULT_COMPONENT,
    ) -> Optional[str]:
        """Value as a string, or None when absent or not a string."""
        value = self.value(capability, attribute, component)
        return value if isinstance(value, str) else None

    def number(
        self,
        capability: Union[Capability, str],
        attribute: str,
        component: str = DEFAULT_COMPONENT,
    ) -> Optional[Number]:
        """Value as a number, or None when absent or not numeric."""
        value = self.value(capability, attribute, component)
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return value

    def flag(
        self,
        capability: Union[Capability, str],
        attribute: str,
        expected: str,
        component: str = DEFAULT_COMPONENT,
    ) -> Optional[bool]:
        """
        Compare the value against an enumerated string.

        Returns None when the attribute is unknown, so absence is never
        reported as False.
        """
        value = self.value(capability, attribute, component)
        if value is None:
            return None
        return value == expected
