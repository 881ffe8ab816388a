"""
UI package for the hex viewer.

This package implements the terminal surface, the area registry, the
hex view area and the application shell running the event loop.
"""

from .app import Application
from .areas import Area, AreaRegistry
from .hex_view import HexView
from .surface import CursesDevice, Surface

__all__ = ['Application', 'Area', 'AreaRegistry', 'HexView', 'CursesDevice', 'Surface']
