"""Line-at-a-time reading from a raw file descriptor."""

from __future__ import annotations

import os
from collections.abc import Iterator

DEFAULT_BUFFER_SIZE = 45


class LineReader:
    """Reads newline-terminated lines from a file descriptor in fixed chunks.

    Data read past the end of a line is kept for the next call.
    """

    def __init__(self, fd: int, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        if fd < 0:
            raise ValueError("file descriptor must not be negative")
        if buffer_size <= 0:
            raise ValueError("buffer size must be positive")
        self.fd = fd
        self.buffer_size = buffer_size
        self._pending = bytearray()

    def next_line(self) -> bytes | None:
        """Return the next line, newline included, or None at end of input.

        The last line is returned without a newline if the input does not
        end with one. A read error discards any buffered data and is raised.
        """
        line = self._pending
        self._pending = bytearray()
        while b"\n" not in line:
            chunk = os.read(self.fd, self.buffer_size)
            if not chunk:
                break
            line += chunk
        if not line:
            return None
        end = line.find(b"\n")
        if end == -1:
            return bytes(line)
        self._pending = line[end + 1:]
        return bytes(line[:end + 1])

    def __iter__(self) -> Iterator[bytes]:
        while (line := self.next_line()) is not None:
            yield line