"""
homedeck - control surface for SmartThings devices and scenes.
"""

__version__ = "0.1.0"
