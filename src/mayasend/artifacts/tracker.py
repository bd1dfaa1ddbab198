"""Temp files created during a session, deleted at shutdown."""

import contextlib
import logging
import os
import tempfile
from pathlib import Path

from mayasend.artifacts.base import LogCloser

logger = logging.getLogger(__name__)

PREFIX = "mayasend-"


class TempArtifactTracker:
    """Collects script and log paths so they can be removed in one pass."""

    def __init__(self, temp_dir: Path | None = None):
        self.temp_dir = temp_dir
        self._paths: list[Path] = []

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    def track(self, path: str | Path) -> None:
        """Remember a path for cleanup. Duplicates are fine."""
        self._paths.append(Path(path))

    def allocate(self, suffix: str) -> Path:
        """Create a uniquely named empty file and track it."""
        if self.temp_dir is not None:
            self.temp_dir.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(prefix=PREFIX, suffix=suffix, dir=self.temp_dir)
        os.close(fd)
        path = Path(name)
        self.track(path)
        return path

    def flush(self, log: LogCloser | None = None) -> None:
        """Close the active log if any, then delete every tracked file.

        Never raises; files that are already gone count as deleted.
        """
        if log is not None and log.active:
            log.stop()

        paths, self._paths = self._paths, []
        for path in paths:
            with contextlib.suppress(OSError):
                if path.exists():
                    path.unlink()
        if paths:
            logger.debug(f"Cleaned up {len(paths)} temp file(s)")
