"""
Windowed file buffer: keeps only the visible bytes of a file in memory.
"""

import logging
import os
from typing import BinaryIO, Optional

logger = logging.getLogger(__name__)


class FileWindow:
    """
    A window of ``capacity`` bytes into a file plus a cursor inside it.

    ``cursor_offset`` is relative to ``window_offset`` and may rest one
    past the last loaded byte.
    """

    def __init__(self, filename: str, capacity: int = 0) -> None:
        self.filename = filename
        self.file: Optional[BinaryIO] = None
        self.file_size = 0
        self.window_offset = 0
        self.cursor_offset = 0
        self.capacity = capacity
        self.data = bytearray(capacity)
        self.length = 0

    @property
    def buffer(self) -> memoryview:
        """The loaded bytes of the current window."""

        return memoryview(self.data)[:self.length]

    @property
    def absolute_offset(self) -> int:
        """File offset of the cursor."""

        return self.window_offset + self.cursor_offset

    def open(self) -> None:
        """Open the file for reading."""

        self.file = open(self.filename, 'rb')
        self.file_size = os.fstat(self.file.fileno()).st_size
        logger.debug("opened %s (%d bytes)", self.filename, self.file_size)

    def close(self) -> None:
        """Close the file and release the buffer."""

        if not self.file:
            return

        self.file.close()
        self.file = None
        self.data = bytearray()
        self.length = 0
        logger.debug("closed %s", self.filename)

    def set_capacity(self, capacity: int) -> None:
        """
        Set the number of bytes the window shows.

        The backing storage is only reallocated when it has to grow.
        """

        if capacity > len(self.data):
            self.data = bytearray(capacity)

        self.capacity = capacity

    def window_length(self, window_offset: Optional[int] = None) -> int:
        """Bytes available in a window starting at ``window_offset``."""

        if window_offset is None:
            window_offset = self.window_offset

        return max(0, min(self.capacity, self.file_size - window_offset))

    def load(self) -> None:
        """Fill the buffer from the file at the window offset."""

        if not self.file:
            raise ValueError("I/O operation on closed file window")

        wanted = self.window_length()
        self.file.seek(self.window_offset)
        read = self.file.readinto(memoryview(self.data)[:wanted]) or 0

        # a short read at the end of the file is not an error
        self.length = read
        logger.debug("loaded %d bytes at offset %d", read, self.window_offset)

    def move(self, delta: int) -> bool:
        """
        Move the cursor by ``delta`` bytes, paging the window as needed.

        Returns:
            bool: True if the window offset changed and must be reloaded
        """

        changed = False
        self.cursor_offset += delta

        while self.cursor_offset < 0:
            if self.window_offset == 0:
                self.cursor_offset = 0
                break

            previous = max(0, self.window_offset - self.capacity)
            self.cursor_offset += self.window_offset - previous
            self.window_offset = previous
            changed = True

        while self.cursor_offset >= self.window_length():
            if self.file_size - self.window_offset <= self.capacity:
                self.cursor_offset = self.window_length()
                break

            self.window_offset += self.capacity
            self.cursor_offset -= self.capacity
            changed = True

        if changed:
            logger.debug("page changed to offset %d", self.window_offset)

        return changed
