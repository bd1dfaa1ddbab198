"""Transport module for the command port."""

from mayasend.transport.base import ConnectionTarget, Transport
from mayasend.transport.port import CommandPortTransport

__all__ = [
    "CommandPortTransport",
    "ConnectionTarget",
    "Transport",
]
