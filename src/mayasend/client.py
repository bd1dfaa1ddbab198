"""High-level client: run scripts and query symbols in a live Maya session."""

import logging
import time

from mayasend.builder import CommandBuilder
from mayasend.config import MayasendConfig
from mayasend.display.base import ContentReader, Display, Notifier
from mayasend.logfile.session import LogSession
from mayasend.query import TaggedQuery, definition_pattern
from mayasend.session import Session
from mayasend.transport.base import ConnectionTarget, Transport
from mayasend.transport.port import CommandPortTransport
from mayasend.types import CommandError, ErrorKind, Payload, QueryResult, SendResult

logger = logging.getLogger(__name__)


class MayaClient:
    """Owns a session and runs every operation against it.

    Use as a context manager, or call ``close()``, so the remote log is
    closed and temp files are removed.
    """

    def __init__(
        self,
        config: MayasendConfig,
        display: Display,
        notifier: Notifier,
        transport: Transport | None = None,
        session: Session | None = None,
    ):
        self.config = config
        self.display = display
        self.notifier = notifier
        self.transport = transport or CommandPortTransport()
        self.session = session or Session.create(config.log.temp_path)

        self.log = LogSession(self.session, config, self.transport, display)
        self.builder = CommandBuilder(self.session.artifacts, config.run)
        self.tagged_query = TaggedQuery(self.log, self._run, display, config.log)
        self._closed = False

    def __enter__(self) -> "MayaClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def target(self) -> ConnectionTarget:
        """Connection target, read from the current config on every call."""
        return ConnectionTarget.from_config(self.config.port)

    def _run(
        self,
        payload: Payload,
        language: str = "",
        reader: ContentReader | None = None,
    ) -> SendResult:
        if not self.log.active and not self.log.reset():
            return SendResult(
                sent=0,
                total=0,
                error=self.log.last_error
                or CommandError(ErrorKind.STATE, "Could not start the remote log"),
            )

        build = self.builder.build(payload, language, reader)
        if not build.ok:
            return SendResult(sent=0, total=0, error=build.error)

        result = self.transport.send(self.target, build.commands)
        if not result.ok:
            logger.warning(f"Sent {result.sent}/{result.total} commands for {build.script_path}")
            return result

        logger.info(f"Ran {build.language} script {build.script_path} on {self.target.describe()}")
        if self.log.active:
            wait = self.config.log.refresh_wait_seconds
            if wait > 0:
                time.sleep(wait)
            self.display.refresh(self.log.path)
        return result

    def run(
        self,
        payload: Payload,
        language: str = "",
        reader: ContentReader | None = None,
    ) -> SendResult:
        """Run a script, a range of it, or a literal command."""
        with self.session.lock:
            result = self._run(payload, language, reader)
        if result.error is not None:
            self.notifier.error(result.error.message)
        return result

    def query(self, keyword: str, open_reference: bool = True) -> QueryResult:
        """Ask Maya what a keyword is, and where it is defined."""
        with self.session.lock:
            result = self.tagged_query.query(keyword)

        if result.error is not None:
            self.notifier.error(result.error.message)
        if result.info:
            self.notifier.message(result.info)
        if result.file_ref and open_reference:
            self.display.open_reference(result.file_ref, definition_pattern(keyword))
        return result

    def reset_log(self) -> bool:
        """Start a fresh remote log."""
        with self.session.lock:
            ok = self.log.reset()
        if not ok and self.log.last_error is not None:
            self.notifier.error(self.log.last_error.message)
        return ok

    def close(self) -> None:
        """Close the remote log and delete temp files. Safe to call twice."""
        with self.session.lock:
            if self._closed:
                return
            self._closed = True
            self.session.artifacts.flush(self.log)
            if self.log.active and self.log.last_error is not None:
                self.notifier.error(self.log.last_error.message)
