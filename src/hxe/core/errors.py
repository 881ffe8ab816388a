"""
Exception types raised by the hex viewer.
"""


class HxeError(Exception):
    """Base class for all errors raised by hxe."""


class ConfigError(HxeError, ValueError):
    """Invalid combination of command line options."""


class EncodingError(HxeError, LookupError):
    """Unknown character encoding name."""

    def __init__(self, name: str) -> None:
        super().__init__(f'invalid character set "{name}"')
        self.name = name


class DeviceError(HxeError, RuntimeError):
    """Terminal device could not be initialized or queried."""
