"""
Utility functions for formatting offsets and byte groups.
"""

from typing import Dict, Final

RADIX: Final[Dict[str, int]] = {
    'hex': 16,
    'dec': 10,
    'oct': 8,
}

OFFSET_FORMAT: Final[Dict[str, str]] = {
    'hex': 'X',
    'dec': 'd',
    'oct': 'o',
}

RULER_LABEL: Final[Dict[str, str]] = {
    'hex': 'Offset(h) ',
    'dec': 'Offset(d) ',
    'oct': 'Offset(o) ',
}


def format_offset(offset: int, base: str = 'hex', width: int = 8) -> str:
    """
    Format a byte offset in the given radix.

    Args:
        offset (int): Byte offset to format
        base (str): One of 'hex', 'dec' or 'oct'
        width (int): Minimum number of digits, zero-padded

    Returns:
        str: Formatted offset
    """

    return f"{offset:0{width}{OFFSET_FORMAT[base]}}"


def offset_digits(file_size: int, base: str = 'hex') -> int:
    """Digits needed for the largest offset of a file, at least 8."""

    return max(8, len(format_offset(max(file_size - 1, 0), base, 1)))


def parse_offset(text: str, base: str = 'hex') -> int:
    """
    Parse an offset printed by format_offset.

    Args:
        text (str): Offset digits
        base (str): One of 'hex', 'dec' or 'oct'

    Returns:
        int: The offset value
    """

    return int(text, RADIX[base])


def format_ruler_label(column: int, base: str = 'hex') -> str:
    """Two digit label for a column offset inside a row."""

    return format_offset(column % (RADIX[base] ** 2), base, 2)


def format_group(data: bytes) -> str:
    """Format a group of bytes as concatenated uppercase hex digits."""

    return data.hex().upper()
