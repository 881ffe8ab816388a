"""
Utility package for offset and byte formatting.
"""

from .hex_utils import (
    format_offset,
    offset_digits,
    parse_offset,
    format_ruler_label,
    format_group
)

__all__ = [
    'format_offset',
    'offset_digits',
    'parse_offset',
    'format_ruler_label',
    'format_group'
]
