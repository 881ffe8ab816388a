"""
Hex view area: renders the windowed file and moves the cursor through it.
"""

import logging
import os
from typing import Callable, Dict, Final, List, Optional, Tuple

from .. import __version__
from ..core import encoding
from ..core.buffer import FileWindow
from ..core.config import Config
from ..core.layout import DATA_TOP, RULER_ROW, TITLE_ROW, Layout
from ..core.syntax import RowHighlighter
from ..utils.hex_utils import (
    RULER_LABEL,
    format_group,
    format_offset,
    format_ruler_label,
    offset_digits,
)
from .areas import Area
from .surface import Event, EventType, Key, Surface

logger = logging.getLogger(__name__)

KEY_LEGEND: Final[List[Tuple[str, str]]] = [
    ("F10", "Quit"),
    ("Arrows", "Move"),
    ("PgUp/PgDn", "Page"),
]


class HexView(Area):
    """The hex editor area showing offsets, hex groups and decoded text."""

    def __init__(self, config: Config, surface: Surface) -> None:
        self.config = config
        self.surface = surface
        self.window = FileWindow(config.filename)
        self.layout: Optional[Layout] = None
        self.highlighter = RowHighlighter(default_color=surface.style.fg)
        self.focused = False
        self.saved_cursor_pos: Optional[Tuple[int, int]] = None
        self.key_handlers: Dict[Key, Callable[[], int]] = self._setup_handlers()

    def _setup_handlers(self) -> Dict[Key, Callable[[], int]]:
        """Map movement keys to the cursor delta they apply."""

        return {
            Key.LEFT: lambda: -1,
            Key.RIGHT: lambda: 1,
            Key.UP: lambda: -self.layout.bytes_per_row,
            Key.DOWN: lambda: self.layout.bytes_per_row,
            Key.PAGE_UP: lambda: -self.layout.capacity,
            Key.PAGE_DOWN: lambda: self.layout.capacity,
        }

    @property
    def show_hex(self) -> bool:
        return self.config.has_column('hex')

    @property
    def show_text(self) -> bool:
        return self.config.has_column('text')

    @property
    def show_keys(self) -> bool:
        return self.config.has_column('keys')

    # lifecycle

    def init(self) -> None:
        """Open the file and load the first window."""

        encoding.lookup(self.config.encoding)
        self.window.open()
        self.update_layout()
        self.window.load()

    def on_focus(self) -> None:
        self.focused = True

        # resize events only reach the focused area
        if (self.layout.width, self.layout.height) != (self.surface.w, self.surface.h):
            self.saved_cursor_pos = None
            self.update_layout()
            self.window.move(0)
            self.window.load()

        self.draw_static()
        self.draw_dynamic()

        if self.saved_cursor_pos is None:
            self.place_cursor()
            return

        self.surface.set_cursor(*self.saved_cursor_pos)
        self.surface.show_cursor()

    def on_unfocus(self) -> None:
        self.focused = False
        self.saved_cursor_pos = (self.surface.x, self.surface.y)
        self.surface.hide_cursor()

    def on_close(self) -> None:
        self.window.close()

    def on_event(self, event: Event) -> None:
        """Handle a resize or key event routed from the application."""

        if event.type is EventType.RESIZE:
            self.handle_resize()
            return

        if event.type is EventType.KEY and event.key in self.key_handlers:
            self.move(self.key_handlers[event.key]())

    # layout and movement

    def update_layout(self) -> None:
        """Recompute the layout from the surface size and resize the window."""

        self.layout = Layout.compute(
            self.surface.w,
            self.surface.h,
            self.config.group,
            self.config.bytes_per_row,
            self.show_keys,
            offset_digits(self.window.file_size, self.config.offset_base) + 2,
        )
        self.window.set_capacity(self.layout.capacity)
        logger.debug(
            "layout %dx%d: %d bytes per row, %d rows",
            self.layout.width, self.layout.height,
            self.layout.bytes_per_row, self.layout.rows
        )

    def handle_resize(self) -> None:
        """Recompute everything that depends on the terminal size and redraw."""

        self.surface.reset()
        self.update_layout()
        self.window.move(0)
        self.window.load()
        self.redraw()

    def move(self, delta: int) -> None:
        """Move the cursor, reloading and redrawing the byte grid on a page change."""

        if self.window.move(delta):
            self.window.load()
            self.draw_dynamic()

        self.place_cursor()

    def place_cursor(self) -> None:
        """Move the device cursor onto the byte under the cursor offset."""

        x, y = self.layout.cursor_position(
            self.window.cursor_offset, self.window.length, self.show_hex
        )
        # rows cut off by a narrow terminal keep the cursor on the last column
        x = max(0, min(x, self.surface.w - 1))
        y = max(0, min(y, self.surface.h - 1))
        self.surface.set_cursor(x, y)
        self.surface.show_cursor()

    # drawing

    def redraw(self) -> None:
        """Draw the whole area and put the cursor back."""

        self.draw_static()
        self.draw_dynamic()
        self.place_cursor()

    def draw_static(self) -> None:
        """Draw the title bar, the offset ruler and the key legend."""

        with self.surface.inverted():
            self._draw_title()
            self._draw_ruler()
            if self.show_keys:
                self._draw_legend()

    def _fill_row(self) -> None:
        """Draw spaces up to the right edge of the current row."""

        while self.surface.x < self.surface.w:
            self.surface.write_glyph(' ')

    def _draw_title(self) -> None:
        name = os.path.basename(self.config.filename)
        title = f" hxe {__version__}  {name}  [{self.window.file_size} bytes]"

        self.surface.set_cursor(0, TITLE_ROW)
        self.surface.write_overflow(title)
        self._fill_row()

    def _draw_ruler(self) -> None:
        self.surface.set_cursor(0, RULER_ROW)
        base = self.config.offset_base

        if self.show_hex:
            label = RULER_LABEL[base].ljust(self.layout.offset_width)
            self.surface.write_overflow(label)
            pad = ' ' * (2 * self.config.group - 1)
            for column in range(0, self.layout.bytes_per_row, self.config.group):
                self.surface.write_overflow(format_ruler_label(column, base) + pad)

            if self.show_text:
                self.surface.write_overflow(' ')

        if self.show_text:
            self.surface.write_overflow("Decoded text")

        self._fill_row()

    def _draw_legend(self) -> None:
        self.surface.set_cursor(0, self.layout.legend_row)

        for key, description in KEY_LEGEND:
            # key names are drawn inverted against the inverted bar
            with self.surface.inverted():
                self.surface.write_overflow(key)
            self.surface.write_overflow(description + ' ')

        self._fill_row()

    def draw_dynamic(self) -> None:
        """Draw the rows of the byte grid for the current window."""

        bytes_per_row = self.layout.bytes_per_row
        data = bytes(self.window.buffer)

        for row in range(self.layout.rows):
            self.surface.set_cursor(0, DATA_TOP + row)
            start = row * bytes_per_row

            if start < len(data):
                line = self.render_row(self.window.window_offset + start,
                                       data[start:start + bytes_per_row])
                for text, color in self.highlighter.highlight_row(line, self.show_hex):
                    with self.surface.foreground(color):
                        self.surface.write_overflow(text)

            self._fill_row()

    def render_row(self, offset: int, chunk: bytes) -> str:
        """
        Render one row of the byte grid.

        Args:
            offset: File offset of the first byte in the row
            chunk: The bytes of the row, possibly fewer than a full row

        Returns:
            The row as drawn on screen
        """

        group = self.config.group
        parts = []

        if self.show_hex:
            label = format_offset(offset, self.config.offset_base, self.layout.offset_digits)
            parts.append(label + '  ')
            for i in range(0, self.layout.bytes_per_row, group):
                parts.append(format_group(chunk[i:i + group]).ljust(2 * group) + ' ')

            if self.show_text:
                parts.append(' ')

        if self.show_text:
            parts.append(encoding.printable(encoding.decode(chunk, self.config.encoding)))

        return ''.join(parts)
