"""Core type definitions for mayasend."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Literal

Language = Literal["mel", "python"]
SUPPORTED_LANGUAGES: tuple[str, ...] = ("mel", "python")


class ErrorKind(str, Enum):
    """Categories of failure reported to the user."""

    CONNECT = "connect"
    TRANSMIT = "transmit"
    CONFIG = "config"
    VALIDATION = "validation"
    STATE = "state"


@dataclass
class CommandError:
    """A failed operation, with a message fit for the user."""

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class SendResult:
    """Outcome of transmitting a command sequence."""

    sent: int
    total: int
    error: CommandError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.sent == self.total

    @property
    def partial(self) -> bool:
        return self.sent < self.total


@dataclass
class BuildResult:
    """Commands produced for one run, plus the script they reference."""

    commands: list[str] = field(default_factory=list)
    script_path: Path | None = None
    language: Language | None = None
    error: CommandError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class QueryResult:
    """Answer extracted from a tagged log line."""

    info: str = ""
    file_ref: str | None = None
    error: CommandError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class Payload:
    """What to run: the whole source, an inclusive line range, or a literal command."""

    kind: Literal["content", "range", "command"]
    start: int | None = None
    end: int | None = None
    command: str | None = None

    @classmethod
    def content(cls) -> "Payload":
        return cls(kind="content")

    @classmethod
    def lines(cls, start: int, end: int) -> "Payload":
        return cls(kind="range", start=start, end=end)

    @classmethod
    def literal(cls, command: str) -> "Payload":
        return cls(kind="command", command=command)


@dataclass(frozen=True)
class LogLocation:
    """Where the display shows the log.

    ``container`` is the display's outer unit (a tmux window, or 0 for the
    console) and ``item`` the inner one (a pane). ``item`` is -1 when the
    log is open but not in the current view.
    """

    container: int = -1
    item: int = -1

    @classmethod
    def not_found(cls) -> "LogLocation":
        return cls(-1, -1)

    @property
    def found(self) -> bool:
        return self.container >= 0

    @property
    def visible(self) -> bool:
        return self.found and self.item >= 0
