"""
shell_autocompleter - next-word suggestions for shell command lines,
learned from the commands a user has already typed.
"""

from .core.model import CommandModel
from .errors import FormatError, NotFoundError, SnapshotError

__all__ = ["CommandModel", "FormatError", "NotFoundError", "SnapshotError"]

__version__ = "0.1.0"
