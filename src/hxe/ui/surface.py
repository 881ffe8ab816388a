"""
Virtual terminal surface and the curses device behind it.

The surface tracks a logical cursor, the terminal size, the current
style and whether anything was drawn since the last flush. Layout code
draws against surface coordinates; the device is only synced on flush.
"""

import curses
import logging
from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterator, Optional, Protocol, Tuple

from ..core.errors import DeviceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Style:
    """Foreground and background colour of a cell."""

    fg: int = curses.COLOR_WHITE
    bg: int = curses.COLOR_BLACK

    def inverted(self) -> 'Style':
        return Style(fg=self.bg, bg=self.fg)


class EventType(Enum):
    RESIZE = 'resize'
    KEY = 'key'
    OTHER = 'other'


class Key(Enum):
    LEFT = 'left'
    RIGHT = 'right'
    UP = 'up'
    DOWN = 'down'
    PAGE_UP = 'page_up'
    PAGE_DOWN = 'page_down'
    QUIT = 'quit'
    CHAR = 'char'


@dataclass(frozen=True)
class Event:
    """An input event read from the device."""

    type: EventType
    key: Optional[Key] = None
    char: str = ''
    width: int = 0
    height: int = 0


class Device(Protocol):
    """Capabilities the surface needs from a terminal."""

    def init(self) -> None: ...

    def close(self) -> None: ...

    def size(self) -> Tuple[int, int]: ...

    def clear(self) -> None: ...

    def set_cell(self, x: int, y: int, ch: str, style: Style) -> None: ...

    def show_cursor(self, x: int, y: int) -> None: ...

    def hide_cursor(self) -> None: ...

    def sync(self) -> None: ...

    def poll_event(self) -> Event: ...


CURSES_KEYS: Dict[int, Key] = {
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_PPAGE: Key.PAGE_UP,
    curses.KEY_NPAGE: Key.PAGE_DOWN,
    curses.KEY_F10: Key.QUIT,
    ord('c') & 0x1f: Key.QUIT,  # Ctrl + C
}


class CursesDevice:
    """Terminal device implemented with curses."""

    def __init__(self) -> None:
        self.stdscr: Optional['curses.window'] = None
        self.color_pairs: Dict[Tuple[int, int], int] = {}
        self.cursor: Optional[Tuple[int, int]] = None

    def init(self) -> None:
        """Put the terminal in raw mode and take over the screen."""

        try:
            self.stdscr = curses.initscr()
            curses.noecho()
            curses.raw()
            self.stdscr.keypad(True)
            curses.start_color()
            curses.curs_set(0)
        except curses.error as e:
            self.close()
            raise DeviceError(f"Failed to initialize terminal: {e}") from e

    def close(self) -> None:
        """Restore the terminal to cooperative mode."""

        if not self.stdscr:
            return

        self.stdscr.keypad(False)
        curses.noraw()
        curses.echo()
        curses.endwin()
        self.stdscr = None

    def size(self) -> Tuple[int, int]:
        height, width = self.stdscr.getmaxyx()
        return width, height

    def clear(self) -> None:
        self.stdscr.erase()

    def _pair_for(self, style: Style) -> int:
        """Allocate a colour pair per (fg, bg) combination on first use."""

        key = (style.fg, style.bg)
        if key not in self.color_pairs:
            pair = len(self.color_pairs) + 1
            if pair >= curses.COLOR_PAIRS:
                return 0
            curses.init_pair(pair, style.fg, style.bg)
            self.color_pairs[key] = pair

        return curses.color_pair(self.color_pairs[key])

    def set_cell(self, x: int, y: int, ch: str, style: Style) -> None:
        height, width = self.stdscr.getmaxyx()
        if not (0 <= x < width and 0 <= y < height):
            return

        try:
            self.stdscr.addstr(y, x, ch, self._pair_for(style))
        except curses.error:
            # writing the bottom-right cell moves the cursor off screen
            pass

    def show_cursor(self, x: int, y: int) -> None:
        try:
            self.stdscr.move(y, x)
            curses.curs_set(1)
        except curses.error:
            logger.debug("cannot show cursor at %d,%d", x, y)
            self.hide_cursor()
            return

        self.cursor = (x, y)
        self.stdscr.noutrefresh()
        curses.doupdate()

    def hide_cursor(self) -> None:
        self.cursor = None
        try:
            curses.curs_set(0)
        except curses.error:
            # terminal cannot change cursor visibility
            pass

    def sync(self) -> None:
        if self.cursor:
            x, y = self.cursor
            try:
                self.stdscr.move(y, x)
            except curses.error:
                self.cursor = None
        self.stdscr.refresh()

    def poll_event(self) -> Event:
        """Block until the next key or resize."""

        try:
            ch = self.stdscr.get_wch()
        except curses.error:
            return Event(EventType.OTHER)

        if isinstance(ch, str):
            if len(ch) == 1 and ord(ch) in CURSES_KEYS:
                return Event(EventType.KEY, key=CURSES_KEYS[ord(ch)])
            return Event(EventType.KEY, key=Key.CHAR, char=ch)

        if ch == curses.KEY_RESIZE:
            width, height = self.size()
            return Event(EventType.RESIZE, width=width, height=height)

        if ch in CURSES_KEYS:
            return Event(EventType.KEY, key=CURSES_KEYS[ch])

        return Event(EventType.OTHER)


class Surface:
    """Logical drawing surface over a terminal device."""

    def __init__(self, device: Device, style: Optional[Style] = None) -> None:
        self.device = device
        self.x = 0
        self.y = 0
        self.w = 0
        self.h = 0
        self.style = style or Style()
        self.dirty = False

    def init(self) -> None:
        """Initialize the device and read its size."""

        self.device.init()
        self.reset()
        logger.debug("terminal initialized at %dx%d", self.w, self.h)

    def close(self) -> None:
        """Release the device."""

        self.device.close()

    def reset(self) -> None:
        """Clear the screen, re-read the size and home the cursor."""

        self.device.clear()
        self.w, self.h = self.device.size()
        self.x, self.y = 0, 0

    def resize(self, w: int, h: int) -> None:
        self.w, self.h = w, h

    def poll_event(self) -> Event:
        """Block until the device delivers the next event."""

        return self.device.poll_event()

    def flush(self) -> None:
        """Push pending changes to the device if anything was drawn."""

        if not self.dirty:
            return

        self.device.sync()
        self.dirty = False
        self.w, self.h = self.device.size()

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.w and 0 <= y < self.h

    def set_cursor(self, x: int, y: int) -> None:
        """Move the logical cursor; positions outside the surface are ignored."""

        if self.contains(x, y):
            self.x, self.y = x, y

    def show_cursor(self) -> None:
        """Reveal the device cursor, or hide it while the logical cursor is off screen."""

        if not self.contains(self.x, self.y):
            self.device.hide_cursor()
            return

        self.device.show_cursor(self.x, self.y)

    def hide_cursor(self) -> None:
        self.device.hide_cursor()

    @contextmanager
    def inverted(self) -> Iterator[None]:
        """Swap foreground and background for the duration of the block."""

        saved = self.style
        self.style = saved.inverted()
        try:
            yield
        finally:
            self.style = saved

    @contextmanager
    def foreground(self, fg: int) -> Iterator[None]:
        """Draw with another foreground colour for the duration of the block."""

        saved = self.style
        self.style = replace(saved, fg=fg)
        try:
            yield
        finally:
            self.style = saved

    def write_glyph(self, ch: str) -> None:
        """Draw one character at the cursor without wrapping."""

        self.dirty = True
        if ch == '\n':
            self.y += 1
        elif ch == '\r':
            self.x = 0
        else:
            self.device.set_cell(self.x, self.y, ch, self.style)
            self.x += 1

    def write_overflow(self, text: str) -> None:
        """Draw text at the cursor, letting it run past the right edge."""

        for ch in text:
            self.write_glyph(ch)

    def write_wrapped(self, text: str) -> None:
        """Draw text at the cursor, wrapping at the right and bottom edges."""

        for ch in text:
            if self.x >= self.w:
                self.x = 0
                self.y += 1
            if self.y >= self.h:
                self.x, self.y = 0, 0
            self.write_glyph(ch)
