"""Shared fakes for the command port, the display and the user."""

from pathlib import Path
from typing import Callable

import pytest

from mayasend.client import MayaClient
from mayasend.config import LogConfig, MayasendConfig
from mayasend.session import Session
from mayasend.transport.base import ConnectionTarget
from mayasend.types import CommandError, ErrorKind, LogLocation, SendResult


class RecordingTransport:
    """Accepts commands in memory, optionally failing like a real port."""

    def __init__(self):
        self.calls: list[list[str]] = []
        self.targets: list[ConnectionTarget] = []
        self.refuse = False
        self.fail_at: int | None = None  # index of the first write that fails
        self.on_send: Callable[[list[str]], None] | None = None

    @property
    def commands(self) -> list[str]:
        return [command for call in self.calls for command in call]

    def send(self, target: ConnectionTarget, commands: list[str]) -> SendResult:
        self.targets.append(target)
        if self.refuse:
            return SendResult(0, len(commands), CommandError(ErrorKind.CONNECT, "refused"))

        accepted = list(commands)
        error = None
        if self.fail_at is not None and self.fail_at < len(commands):
            accepted = accepted[: self.fail_at]
            error = CommandError(ErrorKind.TRANSMIT, "broken pipe")

        self.calls.append(accepted)
        if self.on_send is not None:
            self.on_send(accepted)
        return SendResult(len(accepted), len(commands), error)


class RecordingNotifier:
    def __init__(self):
        self.messages: list[str] = []
        self.errors: list[str] = []

    def message(self, text: str) -> None:
        self.messages.append(text)

    def error(self, text: str) -> None:
        self.errors.append(text)


class FakeDisplay:
    """Display that remembers what it was asked to do."""

    def __init__(self):
        self.available = True
        self.shown: list[str] = []
        self.refreshed: list[str] = []
        self.buffers: dict[str, str] = {}
        self.references: list[tuple[str, str]] = []
        self.hidden: set[str] = set()

    def is_available(self) -> bool:
        return self.available

    def show(self, path: str) -> None:
        self.shown.append(path)

    def refresh(self, path: str) -> None:
        self.refreshed.append(path)

    def locate(self, path: str) -> LogLocation:
        if path not in self.shown:
            return LogLocation.not_found()
        if path in self.hidden:
            return LogLocation(1, -1)
        return LogLocation(1, 2)

    def buffer_last_line(self, path: str) -> str | None:
        return self.buffers.get(path)

    def open_reference(self, path: str, pattern: str) -> None:
        self.references.append((path, pattern))


@pytest.fixture
def config(tmp_path: Path) -> MayasendConfig:
    return MayasendConfig(log=LogConfig(temp_dir=str(tmp_path / "tmp"), refresh_wait=""))


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def display() -> FakeDisplay:
    return FakeDisplay()


@pytest.fixture
def session(config: MayasendConfig) -> Session:
    return Session.create(config.log.temp_path)


@pytest.fixture
def client(config, display, notifier, transport, session):
    client = MayaClient(config, display, notifier, transport=transport, session=session)
    yield client
    client.close()
