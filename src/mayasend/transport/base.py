"""Transport protocol for one-way command delivery."""

from dataclasses import dataclass
from typing import Protocol

from mayasend.config import PortConfig
from mayasend.types import SendResult


@dataclass(frozen=True)
class ConnectionTarget:
    """A TCP address or a Unix socket path, plus the I/O timeout."""

    host: str = "localhost"
    port: int = 7001
    socket_path: str = ""
    timeout: float | None = 5.0

    @classmethod
    def from_config(cls, config: PortConfig) -> "ConnectionTarget":
        return cls(
            host=config.host,
            port=config.port,
            socket_path=config.socket_path,
            timeout=config.timeout_seconds,
        )

    @property
    def is_unix(self) -> bool:
        return bool(self.socket_path)

    def describe(self) -> str:
        if self.is_unix:
            return f"unix:{self.socket_path}"
        return f"{self.host}:{self.port}"


class Transport(Protocol):
    """Protocol for delivering commands to the command port."""

    def send(self, target: ConnectionTarget, commands: list[str]) -> SendResult:
        """Send commands in order, stopping at the first failed write.

        ``sent`` counts successful writes only: if the k-th write (1-based)
        fails, ``sent`` is k - 1 and ``error`` is set.
        """
        ...
