"""
Pytest configuration for Gradebook.

Provides fixtures for:
- Settings pointing at a temporary database directory
- A DatabaseManager / GradeStore pair that is closed after each test
- Isolation of the cached settings used by the CLI
"""

from __future__ import annotations

from pathlib import Path
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio

from gradebook.config import Settings, get_settings
from gradebook.infrastructure.db_factory import DatabaseManager
from gradebook.store import GradeStore


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings fixture with the database placed under the test's tmp_path.
    """
    return Settings(db_dir=tmp_path / "data", db_name="grades.db", log_level="DEBUG")


@pytest.fixture
def db_path(test_settings: Settings) -> Path:
    return test_settings.database_path


@pytest_asyncio.fixture
async def manager(db_path: Path) -> AsyncGenerator[DatabaseManager, None]:
    """
    Provide an unopened DatabaseManager; closed after the test.
    """
    mgr = DatabaseManager(db_path)
    try:
        yield mgr
    finally:
        await mgr.close()


@pytest_asyncio.fixture
async def store(manager: DatabaseManager) -> GradeStore:
    return GradeStore(manager)


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """
    Point the cached CLI settings at a temporary directory.

    Returns the database directory.
    """
    db_dir = tmp_path / "cli-data"
    monkeypatch.setenv("GRADEBOOK_DB_DIR", str(db_dir))
    monkeypatch.setenv("GRADEBOOK_DB_NAME", "grades.db")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    yield db_dir
    get_settings.cache_clear()
