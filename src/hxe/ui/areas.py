"""
Named areas of the screen and routing of focus between them.
"""

import logging
from typing import Dict, List, Optional

from .surface import Event

logger = logging.getLogger(__name__)


class Area:
    """A view that can be focused and receives the input events while focused."""

    def init(self) -> None:
        pass

    def on_focus(self) -> None:
        pass

    def on_unfocus(self) -> None:
        pass

    def on_close(self) -> None:
        pass

    def on_event(self, event: Event) -> None:
        pass


class AreaRegistry:
    """
    Name-keyed collection of areas with at most one focused area.

    Focusing an area always unfocuses the previous one first.
    """

    def __init__(self) -> None:
        self.areas: Dict[str, Area] = {}
        self.current: Optional[Area] = None

    def add(self, name: str, area: Area) -> None:
        """Register an area and initialize it."""

        self.areas[name] = area
        area.init()
        logger.debug("added area %s", name)

    def get(self, name: str) -> Optional[Area]:
        return self.areas.get(name)

    def names(self) -> List[str]:
        return list(self.areas)

    def focus(self, name: str) -> None:
        """Focus the named area; unknown names are ignored."""

        area = self.areas.get(name)
        if area is None:
            return

        self.unfocus()
        self.current = area
        area.on_focus()
        logger.debug("focused area %s", name)

    def unfocus(self) -> None:
        """Unfocus the current area, if any."""

        if self.current is not None:
            self.current.on_unfocus()

        self.current = None

    def dispatch(self, event: Event) -> None:
        """Pass an event to the focused area."""

        if self.current is not None:
            self.current.on_event(event)

    def close_all(self) -> None:
        """
        Close every area.

        Stops at the first failure; areas closed before it stay closed.
        """

        for name, area in self.areas.items():
            area.on_close()
            logger.debug("closed area %s", name)
