"""
Gradebook - local student grade records backed by SQLite.

The package is built around a minimal single-table record store:

- `UnsavedGrade` / `SavedGrade` value types with row conversion
- `DatabaseManager`, a lazily opened, memoized aiosqlite connection
- `GradeStore`, the four-operation data-access surface
  (`list_all`, `insert`, `update`, `delete_by_id`)

A typer CLI (`gradebook.main`) sits on top as the presentation layer.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Public API exports
from gradebook.config import Settings, get_settings
from gradebook.domain.models import Grade, SavedGrade, UnsavedGrade, grade_from_row
from gradebook.exceptions import GradebookError, MalformedRecord, StorageFailure
from gradebook.infrastructure.db_factory import DatabaseManager, create_database_manager
from gradebook.store import GradeStore, open_store
from gradebook.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    # Configuration
    "Settings",
    "get_settings",
    # Records
    "Grade",
    "SavedGrade",
    "UnsavedGrade",
    "grade_from_row",
    # Errors
    "GradebookError",
    "MalformedRecord",
    "StorageFailure",
    # Storage
    "DatabaseManager",
    "create_database_manager",
    "GradeStore",
    "open_store",
    # Logging
    "configure_logging",
    "get_logger",
]
