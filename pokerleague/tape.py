"""A writer that replaces a file's whole contents on every write."""

from __future__ import annotations

from typing import IO, AnyStr


class Tape:
    """Wraps a seekable file so that each write starts from an empty file."""

    def __init__(self, file: IO[AnyStr]) -> None:
        self.file = file

    def write(self, data: AnyStr) -> int:
        """Replace the file's contents with ``data`` and return its length."""
        self.file.truncate(0)
        self.file.seek(0)
        written = self.file.write(data)
        self.file.flush()
        return written