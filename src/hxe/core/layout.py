"""
Screen geometry of the hex view.

Every column boundary used by the header and by the byte grid comes
from a Layout so both stay aligned.
"""

from dataclasses import dataclass
from typing import Final, Tuple

OFFSET_WIDTH: Final[int] = len('00000000  ')
TITLE_ROW: Final[int] = 0
RULER_ROW: Final[int] = 1
DATA_TOP: Final[int] = 2


@dataclass(frozen=True)
class Layout:
    """Derived geometry for one terminal size and configuration."""

    width: int
    height: int
    group: int
    bytes_per_row: int
    rows: int
    show_keys: bool
    offset_width: int = OFFSET_WIDTH

    @classmethod
    def compute(cls, width: int, height: int, group: int,
                configured_bytes_per_row: int, show_keys: bool,
                offset_width: int = OFFSET_WIDTH) -> 'Layout':
        """
        Derive the layout for a surface size and configuration.

        ``offset_width`` grows past the default for files whose offsets
        need more than 8 digits.
        """

        return cls(
            width=width,
            height=height,
            group=group,
            bytes_per_row=fit_bytes_per_row(width, group, configured_bytes_per_row,
                                            offset_width),
            rows=max(1, height - reserved_rows(show_keys)),
            show_keys=show_keys,
            offset_width=offset_width,
        )

    @property
    def capacity(self) -> int:
        """Number of bytes visible at once."""

        return self.bytes_per_row * self.rows

    @property
    def offset_digits(self) -> int:
        """Digits in the offset label, not counting its two trailing spaces."""

        return self.offset_width - 2

    @property
    def group_width(self) -> int:
        """Screen width of one rendered group including its separator."""

        return 2 * self.group + 1

    @property
    def hex_width(self) -> int:
        """Screen width of the hex groups of one row."""

        return (self.bytes_per_row // self.group) * self.group_width

    @property
    def legend_row(self) -> int:
        return self.height - 1

    def byte_x(self, column: int) -> int:
        """Screen x of the byte at ``column`` within a row."""

        return (self.offset_width
                + (column // self.group) * self.group_width
                + (column % self.group) * 2)

    def text_x(self, show_hex: bool = True) -> int:
        """Screen x where the decoded text column starts."""

        if not show_hex:
            return 0

        return self.offset_width + self.hex_width + 1

    def cursor_position(self, cursor_offset: int, window_length: int,
                        show_hex: bool = True) -> Tuple[int, int]:
        """
        Map a cursor offset within the window to a screen position.

        A cursor resting one past the last byte exactly on a row boundary
        is placed after the last byte of the previous row.
        """

        row, column = divmod(cursor_offset, self.bytes_per_row)
        at_row_end = cursor_offset == window_length and cursor_offset > 0 and column == 0

        if not show_hex:
            if at_row_end:
                return self.bytes_per_row, DATA_TOP + row - 1
            return column, DATA_TOP + row

        if at_row_end:
            return self.offset_width + self.hex_width - 1, DATA_TOP + row - 1

        return self.byte_x(column), DATA_TOP + row


def reserved_rows(show_keys: bool) -> int:
    """Rows taken by the title bar, the offset ruler and the key legend."""

    return DATA_TOP + (1 if show_keys else 0)


def fit_bytes_per_row(width: int, group: int, configured: int,
                      offset_width: int = OFFSET_WIDTH) -> int:
    """
    Clamp the configured row width to what fits on screen.

    The result is a whole number of groups and at least one group.
    """

    max_groups = (width - offset_width) // (2 * group + 1)
    return max(group, min(configured, max_groups * group))
