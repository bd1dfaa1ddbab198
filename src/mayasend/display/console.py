"""Terminal display using rich."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from mayasend.types import LogLocation


class ConsoleDisplay:
    """Prints log output inline, picking up where the last refresh stopped."""

    def __init__(self, console: Console):
        self.console = console
        self._offsets: dict[str, int] = {}

    def is_available(self) -> bool:
        return True

    def show(self, path: str) -> None:
        self._offsets[path] = _size(path)
        self.console.print(f"[dim]Logging to {path}[/dim]")

    def refresh(self, path: str) -> None:
        offset = self._offsets.get(path, 0)
        try:
            with open(path, "rb") as f:
                f.seek(offset)
                data = f.read()
        except FileNotFoundError:
            return
        self._offsets[path] = offset + len(data)
        text = data.decode("utf-8", errors="replace").rstrip("\n")
        if text:
            self.console.print(text, markup=False, highlight=False)

    def locate(self, path: str) -> LogLocation:
        if path and path in self._offsets:
            return LogLocation(0, 0)
        return LogLocation.not_found()

    def buffer_last_line(self, path: str) -> str | None:
        return None

    def open_reference(self, path: str, pattern: str) -> None:
        self.console.print(f"[bold]Defined in:[/bold] {path}")


class ConsoleNotifier:
    """Messages and errors on the terminal."""

    def __init__(self, console: Console):
        self.console = console

    def message(self, text: str) -> None:
        if "\n" in text:
            self.console.print(Panel(Text(text), expand=False))
        else:
            self.console.print(text, markup=False, highlight=False)

    def error(self, text: str) -> None:
        self.console.print(f"[red]Error:[/red] {escape(text)}", highlight=False)


def _size(path: str) -> int:
    try:
        return Path(path).stat().st_size
    except OSError:
        return 0
