from typing import Dict, Iterable, List, Optional, Tuple

import pytest

from hxe.core.config import Config
from hxe.ui.surface import Event, EventType, Key, Style, Surface


class FakeDevice:
    """Terminal device that records cells in a grid instead of drawing them."""

    def __init__(self, width: int = 80, height: int = 24, events: Iterable[Event] = ()) -> None:
        self.width = width
        self.height = height
        self.events: List[Event] = list(events)
        self.cells: Dict[Tuple[int, int], Tuple[str, Style]] = {}
        self.cursor: Optional[Tuple[int, int]] = None
        self.syncs = 0
        self.initialized = False
        self.closed = False
        self.log: List[str] = []

    def init(self) -> None:
        self.initialized = True

    def close(self) -> None:
        self.closed = True
        self.log.append("device closed")

    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def clear(self) -> None:
        self.cells.clear()

    def set_cell(self, x: int, y: int, ch: str, style: Style) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.cells[(x, y)] = (ch, style)

    def show_cursor(self, x: int, y: int) -> None:
        self.cursor = (x, y)

    def hide_cursor(self) -> None:
        self.cursor = None

    def sync(self) -> None:
        self.syncs += 1

    def poll_event(self) -> Event:
        if not self.events:
            return Event(EventType.KEY, key=Key.QUIT)
        return self.events.pop(0)

    def row(self, y: int) -> str:
        return ''.join(self.cells.get((x, y), (' ', None))[0] for x in range(self.width))

    def style_at(self, x: int, y: int) -> Optional[Style]:
        cell = self.cells.get((x, y))
        return cell[1] if cell else None


def key(k: Key) -> Event:
    return Event(EventType.KEY, key=k)


@pytest.fixture
def make_file(tmp_path):
    def _make(data: bytes, name: str = "data.bin") -> str:
        path = tmp_path / name
        path.write_bytes(data)
        return str(path)

    return _make


@pytest.fixture
def make_surface():
    def _make(width: int = 80, height: int = 24, events: Iterable[Event] = ()) -> Surface:
        surface = Surface(FakeDevice(width, height, events))
        surface.init()
        return surface

    return _make


@pytest.fixture
def make_config():
    def _make(filename: str, **kwargs) -> Config:
        kwargs.setdefault("columns", frozenset({"hex", "text"}))
        return Config(filename=filename, **kwargs)

    return _make
