"""
Application shell: owns the surface and the areas and runs the event loop.
"""

import logging
from typing import Optional

from ..core.config import Config
from .areas import AreaRegistry
from .hex_view import HexView
from .surface import CursesDevice, Device, Event, EventType, Key, Surface

logger = logging.getLogger(__name__)

QUIT_CHARS = ('q', 'Q')


class Application:
    """One viewer session."""

    def __init__(self, config: Config, device: Optional[Device] = None) -> None:
        self.config = config
        self.surface = Surface(device if device is not None else CursesDevice())
        self.areas = AreaRegistry()

    def run(self) -> None:
        """
        Run the session until the user quits.

        The terminal is restored and the file closed on every exit path;
        errors propagate to the caller afterwards.
        """

        try:
            self.surface.init()
            self.areas.add("editor", HexView(self.config, self.surface))
            self.areas.focus("editor")
            self.loop()
        finally:
            self.close()

    def loop(self) -> None:
        """Read and dispatch events until a quit key is pressed."""

        while True:
            self.surface.flush()
            event = self.surface.poll_event()

            if event.type is EventType.RESIZE:
                self.surface.resize(event.width, event.height)
                logger.debug("resized to %dx%d", event.width, event.height)
            elif event.type is EventType.KEY and self.is_quit(event):
                logger.debug("quit requested")
                return

            self.areas.dispatch(event)

    @staticmethod
    def is_quit(event: Event) -> bool:
        return event.key is Key.QUIT or (event.key is Key.CHAR and event.char in QUIT_CHARS)

    def close(self) -> None:
        """Restore the terminal, then close every area."""

        try:
            self.surface.close()
        finally:
            self.areas.close_all()
        logger.debug("session closed")
