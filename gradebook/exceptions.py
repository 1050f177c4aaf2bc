"""
Project-wide exception hierarchy.

Storage-engine errors are wrapped in StorageFailure with the original error
chained as ``__cause__``; nothing here is retried or suppressed.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

__all__ = [
    "GradebookError",
    "MalformedRecord",
    "StorageFailure",
]


class GradebookError(Exception):
    """Root exception for all gradebook errors."""


class MalformedRecord(GradebookError):
    """Raised when a stored row does not have the shape of a grade record."""

    def __init__(self, message: str, row: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.row = dict(row) if row is not None else None


class StorageFailure(GradebookError):
    """Raised on SQLite / filesystem I/O errors (open, read, write, disk full)."""
