"""Request/response over the one-way port: tag a print, then read it back from the log.

The request prints ``<keyword>:<whatIs result>`` into the remote log. The
keyword is the tag, so within one request the answer is the log line that
starts with it.
"""

import logging
import re
from typing import Callable

from mayasend import commands
from mayasend.config import LogConfig
from mayasend.display.base import Display
from mayasend.logfile.session import LogSession
from mayasend.logfile.tail import ContentSource, DisplayContentSource, FileContentSource
from mayasend.types import CommandError, ErrorKind, Payload, QueryResult, SendResult

logger = logging.getLogger(__name__)

KEYWORD_RE = re.compile(r"\$?[A-Za-z_]\w*", re.ASCII)

Runner = Callable[[Payload, str], SendResult]


def validate_keyword(keyword: str) -> CommandError | None:
    """Return an error for anything that isn't an optional ``$`` plus an identifier."""
    if not keyword or KEYWORD_RE.fullmatch(keyword) is None:
        return CommandError(ErrorKind.VALIDATION, f"Invalid keyword: {keyword!r}")
    return None


def parse_tagged_line(keyword: str, line: str) -> tuple[str, str | None]:
    """Extract (info, file reference) from a log line tagged with keyword.

    A line that doesn't carry the tag yields ("", None).
    """
    line = line.rstrip("\r\n")
    tag = re.escape(keyword)

    info_match = re.match(rf"^{tag}:(.*)", line)
    if info_match is None:
        return "", None

    ref_match = re.match(rf"^{tag}:{re.escape(commands.FILE_REFERENCE_MARKER)}: (.*)", line)
    file_ref = ref_match.group(1) if ref_match else None
    return info_match.group(1), file_ref


def definition_pattern(keyword: str) -> str:
    """Search pattern for a procedure definition in a MEL file."""
    return f"proc.*{keyword.lstrip('$')}"


class TaggedQuery:
    """Runs ``whatIs`` on a keyword and reads the answer back from the log."""

    def __init__(
        self,
        log: LogSession,
        run: Runner,
        display: Display,
        config: LogConfig,
    ):
        self.log = log
        self.run = run
        self.display = display
        self.config = config

    def _source(self, send: SendResult) -> ContentSource:
        if send.partial or self.config.force_refresh:
            return FileContentSource()
        return DisplayContentSource(self.display)

    def query(self, keyword: str) -> QueryResult:
        error = validate_keyword(keyword)
        if error is not None:
            return QueryResult(error=error)

        if not self.config.show or not self.display.is_available():
            return QueryResult(
                error=CommandError(
                    ErrorKind.STATE, "No log to read the answer from (log.show is off or no display)"
                )
            )

        # Always MEL: whatIs is a MEL command whatever the default language is
        send = self.run(Payload.literal(commands.query_script(keyword)), "mel")
        if send.sent == 0:
            return QueryResult(
                error=send.error or CommandError(ErrorKind.TRANSMIT, "Nothing was sent")
            )
        if not self.log.active:
            return QueryResult(error=CommandError(ErrorKind.STATE, "No active log to read from"))

        line = self._source(send).last_line(self.log.path)
        info, file_ref = parse_tagged_line(keyword, line)
        logger.debug(f"Query {keyword!r}: last log line {line!r}")
        return QueryResult(info=info, file_ref=file_ref, error=send.error)
