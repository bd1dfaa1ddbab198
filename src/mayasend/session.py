"""Process-lifetime state shared by every operation."""

import threading
from dataclasses import dataclass, field
from pathlib import Path

from mayasend.artifacts.tracker import TempArtifactTracker


@dataclass
class Session:
    """The active remote log path and the temp files pending cleanup.

    ``log_path`` is non-empty exactly while a remote log is configured and
    not yet closed.
    """

    artifacts: TempArtifactTracker = field(default_factory=TempArtifactTracker)
    log_path: str = ""
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    @classmethod
    def create(cls, temp_dir: Path | None = None) -> "Session":
        return cls(artifacts=TempArtifactTracker(temp_dir))

    @property
    def log_active(self) -> bool:
        return bool(self.log_path)
