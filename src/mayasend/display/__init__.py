"""Display, notification and content-reading collaborators."""

from mayasend.display.base import ContentReader, Display, Notifier
from mayasend.display.console import ConsoleDisplay, ConsoleNotifier
from mayasend.display.reader import FileContentReader, TextContentReader
from mayasend.display.tmux import TmuxDisplay

__all__ = [
    "ConsoleDisplay",
    "ConsoleNotifier",
    "ContentReader",
    "Display",
    "FileContentReader",
    "Notifier",
    "TextContentReader",
    "TmuxDisplay",
]
