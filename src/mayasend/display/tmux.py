"""tmux display: the log lives in a split pane running a tail command."""

import logging
import os
import shlex
import shutil
import subprocess

from mayasend.types import LogLocation

logger = logging.getLogger(__name__)

TAIL_INVOCATIONS = {
    "tail": "tail -n +1 -f",
    "less": "less +F",
    "multitail": "multitail",
}


class TmuxDisplay:
    """Shows the log in a tmux pane next to the current one."""

    def __init__(self, tail_command: str = "tail", split_vertical: bool = False):
        if tail_command not in TAIL_INVOCATIONS:
            raise ValueError(f"Unsupported tail command: {tail_command}")
        self.tail_command = tail_command
        self.split_vertical = split_vertical
        self._panes: dict[str, str] = {}

    def _run(self, args: list[str]) -> tuple[int, str, str]:
        """Run a tmux command."""
        result = subprocess.run(["tmux", *args], capture_output=True, text=True)
        return result.returncode, result.stdout, result.stderr

    def is_available(self) -> bool:
        return bool(os.environ.get("TMUX")) and shutil.which("tmux") is not None

    def show(self, path: str) -> None:
        """Split the current window and tail the log there."""
        command = f"{TAIL_INVOCATIONS[self.tail_command]} {shlex.quote(path)}"
        split = "-h" if self.split_vertical else "-v"
        exit_code, output, stderr = self._run(
            ["split-window", "-d", split, "-P", "-F", "#{pane_id}", command]
        )
        if exit_code != 0:
            logger.warning(f"Failed to open log pane: {stderr.strip()}")
            return
        self._panes[path] = output.strip()

    def refresh(self, path: str) -> None:
        """Tail panes follow the file already; reopen one that was closed."""
        if not self.locate(path).found:
            self.show(path)

    def locate(self, path: str) -> LogLocation:
        pane_id = self._panes.get(path)
        if not pane_id:
            return LogLocation.not_found()

        exit_code, output, _ = self._run(
            [
                "list-panes",
                "-a",
                "-F",
                "#{pane_id} #{window_index} #{pane_index} #{window_active}",
            ]
        )
        if exit_code != 0:
            return LogLocation.not_found()

        for line in output.splitlines():
            fields = line.split()
            if len(fields) != 4 or fields[0] != pane_id:
                continue
            window_index, pane_index, window_active = fields[1:]
            if window_active == "1":
                return LogLocation(int(window_index), int(pane_index))
            return LogLocation(int(window_index), -1)

        # Pane was closed by the user
        del self._panes[path]
        return LogLocation.not_found()

    def buffer_last_line(self, path: str) -> str | None:
        """Last non-blank line visible in the log pane.

        Only plain tail leaves the newest log line on the last row; less and
        multitail draw a status line there, so those give None.
        """
        if self.tail_command != "tail" or not self.locate(path).found:
            return None
        exit_code, output, _ = self._run(["capture-pane", "-p", "-J", "-t", self._panes[path]])
        if exit_code != 0:
            return None
        lines = output.rstrip("\n").splitlines()
        while lines and not lines[-1].strip():
            lines.pop()
        return lines[-1] if lines else ""

    def open_reference(self, path: str, pattern: str) -> None:
        """Open the file in $EDITOR in a new tmux window."""
        editor = os.environ.get("EDITOR", "vi")
        command = f"{editor} {shlex.quote('+/' + pattern)} {shlex.quote(path)}"
        exit_code, _, stderr = self._run(["new-window", command])
        if exit_code != 0:
            logger.warning(f"Failed to open {path}: {stderr.strip()}")
