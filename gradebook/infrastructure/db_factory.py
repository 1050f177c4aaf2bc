"""
Database handle management for Gradebook.

`DatabaseManager` owns the single aiosqlite connection of a process. The
connection is opened lazily on first use, the schema is created when the file
is new, and the open connection is memoized until the owner closes it.

The manager is created explicitly by the composition root (CLI command, seed
script, test fixture) through `create_database_manager` and injected into
`GradeStore`; there is no hidden module-level instance.
"""

from __future__ import annotations

import asyncio
import sqlite3
from contextlib import asynccontextmanager, contextmanager
from pathlib import Path
from typing import AsyncIterator, Generator, Optional, Tuple, Union

import aiosqlite

from gradebook.config import Settings, get_settings
from gradebook.exceptions import StorageFailure
from gradebook.utils.logging import get_logger

log = get_logger(__name__)

SCHEMA_VERSION = 1
TABLE_NAME = "grades"

# Run together in one transaction; the version is only bumped if the table exists.
_SCHEMA_SQL: Tuple[str, ...] = (
    f"""
    CREATE TABLE IF NOT EXISTS {TABLE_NAME}(
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        sid TEXT NOT NULL,
        grade TEXT NOT NULL
    )
    """,
    f"PRAGMA user_version = {SCHEMA_VERSION}",
)


@contextmanager
def storage_errors(action: str) -> Generator[None, None, None]:
    """
    Re-raise SQLite and filesystem errors raised inside the block as StorageFailure.

    The original exception is chained so callers can still inspect it.
    """
    try:
        yield
    except (sqlite3.Error, OSError) as exc:
        raise StorageFailure(f"{action} failed: {exc}") from exc


@asynccontextmanager
async def write_transaction(
    conn: aiosqlite.Connection, action: str
) -> AsyncIterator[aiosqlite.Connection]:
    """
    Commit the statements run inside the block, or roll them back.

    On any SQLite/filesystem error (including a failed COMMIT) the pending
    transaction is rolled back before StorageFailure is raised, so nothing
    half-written stays visible on the shared connection or is committed by a
    later write.
    """
    try:
        yield conn
        await conn.commit()
    except (sqlite3.Error, OSError) as exc:
        try:
            await conn.rollback()
        except sqlite3.Error as rollback_exc:
            log.error(
                "Rollback failed",
                extra={"action": action, "error": str(rollback_exc)},
            )
        raise StorageFailure(f"{action} failed: {exc}") from exc


class DatabaseManager:
    """
    Lazily opened, memoized SQLite connection.

    States: not yet opened -> opening (first `connection()` call) -> ready.
    Concurrent first callers wait on the same open; a second connection is
    never created while one is live.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)
        self._conn: Optional[aiosqlite.Connection] = None
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    async def connection(self) -> aiosqlite.Connection:
        """
        Return the ready connection, opening the database on first use.

        Raises
        ------
        StorageFailure
            If the directory or file cannot be opened, or the schema is unusable.
        """
        if self._conn is not None:
            return self._conn
        async with self._lock:
            if self._conn is None:
                self._conn = await self._open()
        return self._conn

    async def _open(self) -> aiosqlite.Connection:
        with storage_errors(f"creating database directory {self._path.parent}"):
            self._path.parent.mkdir(parents=True, exist_ok=True)

        with storage_errors(f"opening {self._path}"):
            conn = await aiosqlite.connect(self._path)
        try:
            conn.row_factory = aiosqlite.Row
            await self._ensure_schema(conn)
        except BaseException:
            await conn.close()
            raise

        log.info("Opened grades database", extra={"path": str(self._path)})
        return conn

    async def _ensure_schema(self, conn: aiosqlite.Connection) -> None:
        """Create the grades table exactly once, when the file is new."""
        with storage_errors(f"reading schema version of {self._path}"):
            async with conn.execute("PRAGMA user_version") as cursor:
                row = await cursor.fetchone()
        version = row[0] if row is not None else 0

        if version == 0:
            async with write_transaction(conn, f"initializing schema in {self._path}"):
                for statement in ("BEGIN IMMEDIATE", *_SCHEMA_SQL):
                    async with conn.execute(statement):
                        pass
            log.info(
                "Created grades schema",
                extra={"path": str(self._path), "schema_version": SCHEMA_VERSION},
            )
            return

        if version != SCHEMA_VERSION:
            raise StorageFailure(
                f"{self._path} has schema version {version}; "
                f"only version {SCHEMA_VERSION} is supported"
            )

    async def close(self) -> None:
        """
        Close the connection if it is open.

        Only the owner of the manager calls this, at the end of its run.
        """
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        with storage_errors(f"closing {self._path}"):
            await conn.close()


def create_database_manager(settings: Optional[Settings] = None) -> DatabaseManager:
    """
    Build the manager for the configured database file.

    Parameters
    ----------
    settings : Settings, optional
        Settings to resolve the path from; defaults to `get_settings()`.

    Returns
    -------
    DatabaseManager
        A manager that has not opened the database yet.
    """
    settings = settings or get_settings()
    return DatabaseManager(settings.database_path)


__all__ = [
    "DatabaseManager",
    "SCHEMA_VERSION",
    "TABLE_NAME",
    "create_database_manager",
    "storage_errors",
    "write_transaction",
]
