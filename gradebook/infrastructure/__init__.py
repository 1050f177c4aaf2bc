"""
Infrastructure package for Gradebook.

Centralizes database connectivity concerns (path resolution, lazy open,
schema creation). Keep this layer focused on I/O and resource management,
decoupled from the store's record logic.
"""

from gradebook.infrastructure.db_factory import (
    SCHEMA_VERSION,
    TABLE_NAME,
    DatabaseManager,
    create_database_manager,
    storage_errors,
    write_transaction,
)

__all__ = [
    "SCHEMA_VERSION",
    "TABLE_NAME",
    "DatabaseManager",
    "create_database_manager",
    "storage_errors",
    "write_transaction",
]
