from __future__ import annotations
from typing import Optional


class NPuzzleError(Exception):
    """Base class for every error raised by the npuzzle package."""


class InputIOError(NPuzzleError):
    """A puzzle file could not be read."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot read file ({reason})")
        self.path = path
        self.reason = reason


class MalformedPuzzleError(NPuzzleError):
    """Wrong size line, wrong row/column counts, out-of-range or duplicate values."""
    def __init__(self, message: str, line: Optional[int] = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class MissingBlankError(NPuzzleError):
    """No cell holds the blank (0)."""


class SearchInvariantError(NPuzzleError, RuntimeError):
    """Broken bookkeeping inside the search engine. Always a bug."""
