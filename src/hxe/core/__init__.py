"""
Core package for the hex viewer.

This package implements the parts of the viewer that do not touch the
terminal: configuration, the encoding service, screen layout, the
windowed file buffer and row colouring.
"""

from .buffer import FileWindow
from .config import Config
from .errors import ConfigError, DeviceError, EncodingError, HxeError
from .layout import Layout

__all__ = ['FileWindow', 'Config', 'Layout', 'HxeError', 'ConfigError', 'EncodingError', 'DeviceError']
