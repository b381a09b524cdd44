"""
API backends for device capabilities.

Backends handle the actual communication with the remote service.
"""

from .base import Backend
from .smartthings import SMARTTHINGS_API_BASE, SmartThingsBackend

__all__ = ["Backend", "SmartThingsBackend", "SMARTTHINGS_API_BASE"]
