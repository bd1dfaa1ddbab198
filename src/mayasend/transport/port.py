"""Socket transport for the Maya command port."""

import errno
import logging
import socket

from mayasend.transport.base import ConnectionTarget
from mayasend.types import CommandError, ErrorKind, SendResult

logger = logging.getLogger(__name__)


class CommandPortTransport:
    """Opens one connection per send, writes newline-terminated commands, closes."""

    def _connect(self, target: ConnectionTarget) -> socket.socket:
        """Open a connected socket to the target."""
        if target.is_unix:
            sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            try:
                sock.settimeout(target.timeout)
                sock.connect(target.socket_path)
            except OSError:
                sock.close()
                raise
            return sock

        sock = socket.create_connection((target.host, target.port), timeout=target.timeout)
        sock.settimeout(target.timeout)
        return sock

    def send(self, target: ConnectionTarget, commands: list[str]) -> SendResult:
        """Send commands in order; stop at the first failed write."""
        total = len(commands)
        try:
            sock = self._connect(target)
        except OSError as e:
            logger.debug(f"Connect to {target.describe()} failed: {e}")
            return SendResult(
                sent=0,
                total=total,
                error=CommandError(
                    ErrorKind.CONNECT,
                    f"Could not connect to command port {target.describe()}: {e}",
                ),
            )

        sent = 0
        error = None
        with sock:
            for command in commands:
                try:
                    sock.sendall(f"{command}\n".encode("utf-8"))
                except OSError as e:
                    error = CommandError(
                        ErrorKind.TRANSMIT,
                        f"Sent {sent} of {total} commands to {target.describe()}: {e}",
                    )
                    break
                sent += 1
                logger.debug(f"-> {command}")

            try:
                sock.shutdown(socket.SHUT_WR)
            except OSError as e:
                # The peer may already be gone after a failed write.
                if error is None and e.errno not in {errno.ENOTCONN, errno.EINVAL}:
                    logger.debug(f"Half-close of {target.describe()} failed: {e}")

        return SendResult(sent=sent, total=total, error=error)
