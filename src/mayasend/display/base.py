"""Protocols for the user-facing side: log display, messages, script content."""

from typing import Protocol

from mayasend.types import LogLocation


class Display(Protocol):
    """Protocol for showing the remote log to the user."""

    def is_available(self) -> bool:
        """Check if this display can be used right now."""
        ...

    def show(self, path: str) -> None:
        """Start showing a log file."""
        ...

    def refresh(self, path: str) -> None:
        """Bring the view of a log file up to date."""
        ...

    def locate(self, path: str) -> LogLocation:
        """Find where a log file is shown."""
        ...

    def buffer_last_line(self, path: str) -> str | None:
        """Last line of the live view of a file, or None if there is no live view."""
        ...

    def open_reference(self, path: str, pattern: str) -> None:
        """Open a source file, positioned at the first match of pattern."""
        ...


class Notifier(Protocol):
    """Protocol for reporting to the user."""

    def message(self, text: str) -> None: ...

    def error(self, text: str) -> None: ...


class ContentReader(Protocol):
    """Protocol for reading the content to run."""

    def read_lines(self, line_range: tuple[int, int] | None = None) -> list[str]:
        """
        Read content as lines without terminators.

        Args:
            line_range: Inclusive 1-based (start, end), or None for everything

        Returns:
            The requested lines, in order
        """
        ...
