"""Protocol for whatever owns the remote log at cleanup time."""

from typing import Protocol


class LogCloser(Protocol):
    """Protocol for closing the active remote log before cleanup."""

    @property
    def active(self) -> bool:
        """Whether a remote log is currently open."""
        ...

    def stop(self) -> bool:
        """Close all remote outputs. Returns True on success."""
        ...
