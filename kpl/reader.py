"""Character reader that tracks line and column."""

from __future__ import annotations

import os


class SourceReader:
    """Reads source text one character at a time.

    ``current_char`` holds the character last read, or ``None`` at the end.
    The first character is read on construction.
    """

    def __init__(self, text: str) -> None:
        self._chars = iter(text)
        self.line_no = 1
        self.col_no = 0
        self.current_char: str | None = None
        self.read_char()

    def read_char(self) -> str | None:
        """Advance to the next character and return it."""
        self.current_char = next(self._chars, None)
        self.col_no += 1
        if self.current_char == "\n":
            self.line_no += 1
            self.col_no = 0
        return self.current_char


def open_source(path: str | os.PathLike) -> SourceReader:
    """Read a source file and return a reader over it; raises OSError on failure."""
    with open(path, encoding="latin-1", newline="") as stream:
        return SourceReader(stream.read())