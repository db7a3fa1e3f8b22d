"""Line buffer for TOON output."""

from typing import List

from .types import Depth


class LineWriter:
    """Collects output lines, indenting each by its depth."""

    def __init__(self, indent_size: int) -> None:
        self._lines: List[str] = []
        self._indentation = " " * indent_size

    def push(self, depth: Depth, content: str) -> None:
        """Append a line at the given depth."""
        self._lines.append(self._indentation * depth + content)

    def to_string(self) -> str:
        """Return all lines joined with newlines."""
        return "\n".join(self._lines)
