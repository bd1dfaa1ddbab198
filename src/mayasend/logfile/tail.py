"""Reading the newest line of a log that Maya may still be appending to."""

import os
from typing import Protocol

from mayasend.display.base import Display


def read_last_line(path: str) -> str:
    """Return the final line of a file without reading the whole file.

    Scans backward from the byte before EOF to the previous newline and
    returns everything after it, so a trailing newline is kept:
    ``"a\\nb\\nc\\n"`` gives ``"c\\n"``. Missing or empty files give ``""``.
    """
    try:
        f = open(path, "rb")
    except FileNotFoundError:
        return ""

    with f:
        size = f.seek(0, os.SEEK_END)
        if size == 0:
            return ""

        pos = size - 2
        while pos >= 0:
            f.seek(pos)
            if f.read(1) == b"\n":
                break
            pos -= 1

        f.seek(pos + 1)
        return f.read().decode("utf-8", errors="replace")


class ContentSource(Protocol):
    """Protocol for fetching the last line of the log."""

    def last_line(self, path: str) -> str: ...


class FileContentSource:
    """Reads straight from disk."""

    def last_line(self, path: str) -> str:
        return read_last_line(path)


class DisplayContentSource:
    """Prefers the display's live view, falling back to disk."""

    def __init__(self, display: Display):
        self.display = display

    def last_line(self, path: str) -> str:
        line = self.display.buffer_last_line(path)
        if line is None:
            return read_last_line(path)
        return line
