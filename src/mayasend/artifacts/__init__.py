"""Temporary artifact tracking module."""

from mayasend.artifacts.base import LogCloser
from mayasend.artifacts.tracker import TempArtifactTracker

__all__ = ["LogCloser", "TempArtifactTracker"]
