"""Script content read from a file on disk."""

from pathlib import Path


class FileContentReader:
    """Reads the script to run from a file."""

    def __init__(self, path: Path):
        self.path = path

    def read_lines(self, line_range: tuple[int, int] | None = None) -> list[str]:
        lines = self.path.read_text(encoding="utf-8").splitlines()
        if line_range is None:
            return lines
        start, end = line_range
        return lines[start - 1 : end]


class TextContentReader:
    """Reads the script to run from an in-memory string."""

    def __init__(self, text: str):
        self.text = text

    def read_lines(self, line_range: tuple[int, int] | None = None) -> list[str]:
        lines = self.text.splitlines()
        if line_range is None:
            return lines
        start, end = line_range
        return lines[start - 1 : end]
