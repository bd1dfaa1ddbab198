"""Turns a payload into a temp script and the commands that run it."""

import logging
from pathlib import Path

from mayasend import commands
from mayasend.artifacts.tracker import TempArtifactTracker
from mayasend.config import RunConfig
from mayasend.display.base import ContentReader
from mayasend.types import (
    SUPPORTED_LANGUAGES,
    BuildResult,
    CommandError,
    ErrorKind,
    Payload,
)

logger = logging.getLogger(__name__)

SCRIPT_SUFFIXES = {"mel": ".mel", "python": ".py"}


def infer_language(path: Path) -> str:
    """Guess the language from a file suffix; "" when unknown."""
    for language, suffix in SCRIPT_SUFFIXES.items():
        if path.suffix.lower() == suffix:
            return language
    return ""


class CommandBuilder:
    """Builds the five-command sequence that runs one script."""

    def __init__(
        self,
        artifacts: TempArtifactTracker,
        config: RunConfig,
        reader: ContentReader | None = None,
    ):
        self.artifacts = artifacts
        self.config = config
        self.reader = reader

    def resolve_language(self, language: str) -> str | None:
        """Explicit language if supported, the default if empty, otherwise None."""
        if not language:
            return self.config.default_language
        if language in SUPPORTED_LANGUAGES:
            return language
        return None

    def _lines(self, payload: Payload, reader: ContentReader | None) -> list[str]:
        if payload.kind == "command":
            return [payload.command or ""]
        reader = reader or self.reader
        if reader is None:
            raise ValueError("No content reader to read the script from")
        if payload.kind == "range":
            return reader.read_lines((payload.start, payload.end))
        return reader.read_lines(None)

    def build(
        self,
        payload: Payload,
        language: str = "",
        reader: ContentReader | None = None,
    ) -> BuildResult:
        """Write the payload to a tracked temp script and build its commands."""
        resolved = self.resolve_language(language)
        if resolved is None:
            return BuildResult(
                error=CommandError(ErrorKind.CONFIG, f"Unsupported filetype: {language}")
            )

        if payload.kind == "range":
            start, end = payload.start, payload.end
            if start is None or end is None or start < 1 or end < start:
                return BuildResult(
                    error=CommandError(ErrorKind.VALIDATION, f"Invalid line range: {start}:{end}")
                )

        try:
            script = self.artifacts.allocate(SCRIPT_SUFFIXES[resolved])
        except OSError as e:
            return BuildResult(
                error=CommandError(ErrorKind.CONFIG, f"Could not create temp script: {e}")
            )

        try:
            lines = self._lines(payload, reader)
            with open(script, "w", encoding="utf-8", newline="\n") as f:
                for line in lines:
                    f.write(f"{line}\n")
        except (OSError, ValueError) as e:
            return BuildResult(
                script_path=script,
                language=resolved,
                error=CommandError(ErrorKind.CONFIG, f"Could not write script {script}: {e}"),
            )

        if resolved == "python":
            execute = commands.python_exec_file(script, self.config.python_exec)
        else:
            execute = commands.source_file(script)

        logger.debug(f"Built {resolved} script {script} ({len(lines)} lines)")
        return BuildResult(
            commands=[
                commands.ECHO_ON,
                execute,
                commands.ECHO_OFF,
                commands.delete_file(script),
                commands.END_OF_RUN,
            ],
            script_path=script,
            language=resolved,
        )
