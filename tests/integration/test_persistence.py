"""
Integration tests that span several store sessions on the same SQLite file.

Each session owns its own DatabaseManager, the way separate runs of the CLI do,
so these check what actually lands on disk rather than in one open connection.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from gradebook.config import Settings
from gradebook.domain.models import SavedGrade, UnsavedGrade
from gradebook.store import open_store

SID_A = "123456789"
SID_B = "987654321"


@pytest.mark.asyncio
async def test_scenario_survives_reopen_between_steps(test_settings: Settings) -> None:
    async with open_store(test_settings) as store:
        assert await store.insert(UnsavedGrade(sid=SID_A, grade="A")) == 1

    async with open_store(test_settings) as store:
        assert await store.insert(UnsavedGrade(sid=SID_B, grade="B")) == 2

    async with open_store(test_settings) as store:
        assert await store.update(SavedGrade(id=1, sid=SID_A, grade="A+")) == 1

    async with open_store(test_settings) as store:
        assert await store.delete_by_id(2) == 1

    async with open_store(test_settings) as store:
        assert await store.list_all() == [SavedGrade(id=1, sid=SID_A, grade="A+")]


@pytest.mark.asyncio
async def test_edit_flow_uses_listed_record(test_settings: Settings) -> None:
    async with open_store(test_settings) as store:
        for index in range(3):
            await store.insert(UnsavedGrade(sid=f"00000000{index}", grade="C"))

    async with open_store(test_settings) as store:
        selected = (await store.list_all())[1]
        assert await store.update(selected.replace(grade="B")) == 1
        refreshed = await store.list_all()

    assert [g.id for g in refreshed] == [3, 2, 1]
    assert [g.grade for g in refreshed] == ["C", "B", "C"]


@pytest.mark.asyncio
async def test_update_after_concurrent_delete_reports_zero(test_settings: Settings) -> None:
    async with open_store(test_settings) as store:
        await store.insert(UnsavedGrade(sid=SID_A, grade="A"))
        selected = (await store.list_all())[0]

    async with open_store(test_settings) as other:
        assert await other.delete_by_id(selected.id) == 1

    async with open_store(test_settings) as store:
        assert await store.update(selected.replace(grade="B")) == 0
        assert await store.list_all() == []


@pytest.mark.asyncio
async def test_database_lives_at_configured_path(test_settings: Settings, db_path: Path) -> None:
    assert not db_path.exists()
    async with open_store(test_settings):
        pass
    assert db_path.exists()
    assert db_path.parent == test_settings.db_dir
