"""Configuration models for mayasend."""

import re
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, field_validator

TAIL_COMMANDS = ("tail", "less", "multitail")

_DURATION_RE = re.compile(r"^(\d+(?:\.\d+)?)(ms|s|m|h|d)$")


class PortConfig(BaseModel):
    """Where the command port listens."""

    host: str = "localhost"
    port: int = 7001
    socket_path: str = ""  # Overrides host/port when non-empty
    timeout: str = "5s"  # Empty string means no timeout

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: str) -> str:
        seconds = parse_timeout(v)
        if seconds is not None and seconds <= 0:
            raise ValueError(f'Invalid timeout: {v}. Use a positive duration, or "" for none.')
        return v

    @property
    def timeout_seconds(self) -> float | None:
        return parse_timeout(self.timeout)


class LogConfig(BaseModel):
    """Remote log file and how it is displayed."""

    show: bool = True
    split_vertical: bool = False
    tail_command: str = "tail"
    temp_dir: str = ""
    refresh_wait: str = "500ms"
    force_refresh: bool = False

    @field_validator("tail_command")
    @classmethod
    def validate_tail_command(cls, v: str) -> str:
        if v not in TAIL_COMMANDS:
            raise ValueError(
                f"Invalid tail_command: {v}. Use one of: {', '.join(TAIL_COMMANDS)}."
            )
        return v

    @field_validator("refresh_wait")
    @classmethod
    def validate_refresh_wait(cls, v: str) -> str:
        if v.strip():
            parse_duration(v)
        return v

    @property
    def refresh_wait_seconds(self) -> float:
        if not self.refresh_wait.strip():
            return 0.0
        return parse_duration(self.refresh_wait)

    @property
    def temp_path(self) -> Path | None:
        if not self.temp_dir:
            return None
        return Path(self.temp_dir).expanduser()


class RunConfig(BaseModel):
    """How scripts are executed remotely."""

    default_language: Literal["mel", "python"] = "mel"
    python_exec: Literal["exec", "execfile"] = "exec"


class MayasendConfig(BaseModel):
    """Main mayasend configuration."""

    port: PortConfig = PortConfig()
    log: LogConfig = LogConfig()
    run: RunConfig = RunConfig()


def parse_duration(duration_str: str) -> float:
    """Parse duration string to seconds. Supports: 250ms, 1.5s, 5m, 2h, 1d."""
    duration_str = duration_str.strip().lower()
    if not duration_str:
        raise ValueError("Empty duration string")

    multipliers = {"ms": 0.001, "s": 1, "m": 60, "h": 3600, "d": 86400}
    unit = "ms" if duration_str.endswith("ms") else duration_str[-1]

    if unit not in multipliers:
        raise ValueError(f"Invalid duration unit: {unit}. Use ms, s, m, h, or d.")

    match = _DURATION_RE.match(duration_str)
    if match is None:
        raise ValueError(f"Invalid duration value: {duration_str[: -len(unit)]}")

    return float(match.group(1)) * multipliers[unit]


def parse_timeout(timeout_str: str) -> float | None:
    """Parse a timeout; an empty string means block forever."""
    if not timeout_str.strip():
        return None
    return parse_duration(timeout_str)


def load_config(path: Path | None = None) -> MayasendConfig:
    """Load configuration from YAML file, falling back to defaults."""
    if path is None or not path.exists():
        return MayasendConfig()
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return MayasendConfig(**data)


def get_config_template() -> str:
    """Get the default configuration template."""
    return """# mayasend configuration

port:
  # Open the port inside Maya first, e.g.
  #   commandPort -name ":7001" -sourceType "mel";
  host: localhost
  port: 7001
  # socket_path: /tmp/maya.sock  # Unix socket; overrides host/port
  socket_path: ""
  timeout: 5s  # Empty string blocks until the port answers

log:
  show: true  # Redirect Maya output to a temp log and display it
  split_vertical: false  # tmux only: split side by side instead of stacked
  tail_command: tail  # tail, less or multitail
  temp_dir: ""  # Defaults to the system temp directory
  refresh_wait: 500ms  # Pause before re-reading the log after a run
  force_refresh: false  # Always read query answers from disk

run:
  default_language: mel  # mel or python, used when it can't be inferred
  python_exec: exec  # exec (Maya 2022+) or execfile (Python 2 builds)
"""
