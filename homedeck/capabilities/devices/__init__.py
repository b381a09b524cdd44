"""
Device implementations for the capability system.
"""

from .controller import CONTROL_ACTIONS, DeviceController

__all__ = [
    "CONTROL_ACTIONS",
    "DeviceController",
]
