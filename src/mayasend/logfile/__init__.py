"""Remote log lifecycle and log reading."""

from mayasend.logfile.session import LogSession
from mayasend.logfile.tail import (
    ContentSource,
    DisplayContentSource,
    FileContentSource,
    read_last_line,
)

__all__ = [
    "ContentSource",
    "DisplayContentSource",
    "FileContentSource",
    "LogSession",
    "read_last_line",
]
