"""
GradeStore: the single access point to the persisted `grades` table.

Usage::

    manager = create_database_manager()
    store = GradeStore(manager)

    new_id = await store.insert(UnsavedGrade(sid="123456789", grade="A"))
    grades = await store.list_all()          # newest first
    await store.update(grades[0].replace(grade="A+"))
    await store.delete_by_id(new_id)

Callers pull a fresh `list_all()` after every mutation; the store never pushes
changes. `update` and `delete_by_id` return the number of rows affected, and 0
simply means the id was not there.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from gradebook.config import Settings
from gradebook.domain.models import Grade, SavedGrade
from gradebook.infrastructure.db_factory import (
    TABLE_NAME,
    DatabaseManager,
    create_database_manager,
    storage_errors,
    write_transaction,
)
from gradebook.utils.logging import get_logger

log = get_logger(__name__)


class GradeStore:
    """
    CRUD interface over one SQLite table.

    Every statement touches a single row (or scans the table). Each write is
    committed on its own, or rolled back when it fails, so no multi-statement
    transactions are used and no failed write lingers on the connection.
    """

    def __init__(self, manager: DatabaseManager) -> None:
        self._manager = manager

    async def list_all(self) -> List[SavedGrade]:
        """
        Return every stored grade, ordered by descending id.

        Raises
        ------
        MalformedRecord
            If a stored row does not decode into a SavedGrade.
        StorageFailure
            On any SQLite error.
        """
        conn = await self._manager.connection()
        with storage_errors("listing grades"):
            async with conn.execute(
                f"SELECT id, sid, grade FROM {TABLE_NAME} ORDER BY id DESC"
            ) as cursor:
                rows = await cursor.fetchall()
        grades = [SavedGrade.from_row(row) for row in rows]
        log.debug("Listed grades", extra={"rows": len(grades)})
        return grades

    async def insert(self, record: Grade) -> int:
        """
        Append a new row and return its assigned id.

        Any id carried by *record* is ignored and *record* itself is left
        untouched; use the returned id to address the new row.
        """
        row = record.to_row()
        row.pop("id", None)
        columns = ", ".join(row)
        placeholders = ", ".join("?" for _ in row)

        conn = await self._manager.connection()
        async with write_transaction(conn, "inserting grade"):
            async with conn.execute(
                f"INSERT INTO {TABLE_NAME} ({columns}) VALUES ({placeholders})",
                tuple(row.values()),
            ) as cursor:
                new_id = cursor.lastrowid
        log.debug("Inserted grade", extra={"id": new_id})
        return new_id  # type: ignore[return-value]

    async def update(self, record: SavedGrade) -> int:
        """
        Overwrite the row with ``record.id``.

        Returns
        -------
        int
            Rows affected: 1, or 0 when no row has that id.
        """
        if not isinstance(record, SavedGrade):
            raise TypeError(
                f"update() needs a SavedGrade, got {type(record).__name__}; "
                "insert() unsaved grades instead"
            )
        row = record.to_row()
        record_id = row.pop("id")
        assignments = ", ".join(f"{column} = ?" for column in row)

        conn = await self._manager.connection()
        async with write_transaction(conn, f"updating grade {record_id}"):
            async with conn.execute(
                f"UPDATE {TABLE_NAME} SET {assignments} WHERE id = ?",
                (*row.values(), record_id),
            ) as cursor:
                affected = cursor.rowcount
        log.debug("Updated grade", extra={"id": record_id, "affected": affected})
        return affected

    async def delete_by_id(self, record_id: int) -> int:
        """Delete the row with *record_id*; returns rows affected (0 if absent)."""
        conn = await self._manager.connection()
        async with write_transaction(conn, f"deleting grade {record_id}"):
            async with conn.execute(
                f"DELETE FROM {TABLE_NAME} WHERE id = ?", (record_id,)
            ) as cursor:
                affected = cursor.rowcount
        log.debug("Deleted grade", extra={"id": record_id, "affected": affected})
        return affected


@asynccontextmanager
async def open_store(
    settings: Optional[Settings] = None,
    manager: Optional[DatabaseManager] = None,
) -> AsyncIterator[GradeStore]:
    """
    Composition root helper: own a DatabaseManager for the duration of a run.

    The database is opened before the store is handed out, so the first read
    never pays for schema creation, and the connection is closed on exit.
    """
    manager = manager or create_database_manager(settings)
    try:
        await manager.connection()
        yield GradeStore(manager)
    finally:
        await manager.close()


__all__ = ["GradeStore", "open_store"]
