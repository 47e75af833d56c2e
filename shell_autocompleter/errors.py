# errors.py - exceptions raised by the snapshot persistence layer

from __future__ import annotations

from typing import Optional


class SnapshotError(Exception):
    """Base class for everything that can go wrong reading or writing a model snapshot."""


class FormatError(SnapshotError, ValueError):
    """
    Raised when a snapshot file is structurally invalid:
    wrong/missing counter, missing line, non-numeric field, bad embedding width.
    `line` is the 1-based line number where parsing stopped, if known.
    """

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class NotFoundError(SnapshotError, FileNotFoundError):
    """Raised when the snapshot file to load does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"snapshot not found: {path}")
