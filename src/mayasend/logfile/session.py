"""Lifecycle of the remote log file Maya writes its output to."""

import logging

from mayasend import commands
from mayasend.config import MayasendConfig
from mayasend.display.base import Display
from mayasend.session import Session
from mayasend.transport.base import ConnectionTarget, Transport
from mayasend.types import CommandError, ErrorKind, LogLocation

logger = logging.getLogger(__name__)

LOG_SUFFIX = ".log"


class LogSession:
    """Opens, closes and finds the remote log of a session.

    The log is active while ``session.log_path`` is set. Only one log is
    active at a time; ``reset`` closes the previous one first.
    """

    def __init__(
        self,
        session: Session,
        config: MayasendConfig,
        transport: Transport,
        display: Display,
    ):
        self.session = session
        self.config = config
        self.transport = transport
        self.display = display
        self.last_error: CommandError | None = None

    @property
    def active(self) -> bool:
        return self.session.log_active

    @property
    def path(self) -> str:
        return self.session.log_path

    def _send(self, command: str) -> bool:
        target = ConnectionTarget.from_config(self.config.port)
        result = self.transport.send(target, [command])
        if not result.ok:
            self.last_error = result.error
            return False
        return True

    def reset(self) -> bool:
        """Start a fresh log, closing the current one first."""
        self.last_error = None
        if self.active and not self.stop():
            return False

        if not self.config.log.show:
            logger.debug("Log display disabled, running without a log")
            return True
        if not self.display.is_available():
            logger.debug("Display unavailable, running without a log")
            return True

        try:
            path = self.session.artifacts.allocate(LOG_SUFFIX)
        except OSError as e:
            self.last_error = CommandError(ErrorKind.CONFIG, f"Could not create log file: {e}")
            return False
        if not self._send(commands.redirect_output(path)):
            logger.warning(f"Command port did not accept redirect to {path}")
            return False

        self.session.log_path = str(path)
        logger.info(f"Logging Maya output to {path}")
        self.display.show(self.session.log_path)
        return True

    def stop(self) -> bool:
        """Close all remote outputs. The log stays active if Maya is unreachable."""
        self.last_error = None
        if not self.active:
            return True

        if not self._send(commands.CLOSE_ALL_OUTPUTS):
            self.last_error = CommandError(
                ErrorKind.STATE, f"Could not close remote log {self.path}; it is still active"
            )
            return False

        logger.info(f"Closed remote log {self.path}")
        self.session.artifacts.track(self.path)
        self.session.log_path = ""
        return True

    def locate(self) -> LogLocation:
        """Where the display shows the log, if anywhere."""
        if not self.active:
            return LogLocation.not_found()
        return self.display.locate(self.path)
