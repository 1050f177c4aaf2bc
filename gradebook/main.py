from __future__ import annotations

import asyncio
import sys
from typing import Any, Coroutine, List, NoReturn, Optional, Tuple, TypeVar

import typer

from gradebook.config import get_settings
from gradebook.domain.models import SavedGrade, UnsavedGrade
from gradebook.exceptions import GradebookError
from gradebook.reporter import render_grades
from gradebook.store import open_store
from gradebook.utils.logging import configure_logging
from gradebook.validation import clean_grade, clean_sid

T = TypeVar("T")

app = typer.Typer(help="Gradebook: record student grades in a local SQLite file.")


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run one store session; storage and decoding errors become exit code 1."""
    try:
        return asyncio.run(coro)
    except GradebookError as exc:
        _fail(f"Error: {exc}")


def _sid_callback(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    try:
        return clean_sid(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _grade_callback(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    try:
        return clean_grade(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.callback()
def setup() -> None:
    """
    Configure logging from settings before any command runs.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    path = settings.database_path
    state = "exists" if path.exists() else "not created yet"
    typer.echo(f"DB={path} ({state}) | log_level={settings.log_level} json={settings.log_json}")


@app.command("list")
def list_grades() -> None:
    """
    List all grades, newest first.
    """

    async def _list() -> List[SavedGrade]:
        async with open_store() as store:
            return await store.list_all()

    render_grades(_run(_list()))


@app.command()
def add(
    sid: str = typer.Option(
        ..., "--sid", prompt="SID", callback=_sid_callback, help="Nine-digit student ID."
    ),
    grade: str = typer.Option(
        ..., "--grade", "-g", prompt="Grade", callback=_grade_callback, help="Grade text."
    ),
) -> None:
    """
    Record a new grade.
    """

    async def _add() -> Tuple[int, List[SavedGrade]]:
        async with open_store() as store:
            new_id = await store.insert(UnsavedGrade(sid=sid, grade=grade))
            return new_id, await store.list_all()

    new_id, grades = _run(_add())
    typer.echo(f"Grade saved with id {new_id}.")
    render_grades(grades, highlight_id=new_id)


@app.command()
def edit(
    record_id: int = typer.Argument(..., metavar="ID", help="Id of the grade to edit."),
    sid: Optional[str] = typer.Option(
        None, "--sid", callback=_sid_callback, help="New student ID (kept if omitted)."
    ),
    grade: Optional[str] = typer.Option(
        None, "--grade", "-g", callback=_grade_callback, help="New grade (kept if omitted)."
    ),
) -> None:
    """
    Change the SID and/or grade of an existing record.
    """

    async def _edit() -> List[SavedGrade]:
        async with open_store() as store:
            current = next((g for g in await store.list_all() if g.id == record_id), None)
            if current is None:
                _fail(f"No grade with id {record_id}.")
            changes = {}
            if sid is not None:
                changes["sid"] = sid
            if grade is not None:
                changes["grade"] = grade
            if await store.update(current.replace(**changes)) == 0:
                _fail(f"Grade {record_id} was removed before it could be updated.")
            return await store.list_all()

    grades = _run(_edit())
    typer.echo(f"Grade {record_id} updated.")
    render_grades(grades, highlight_id=record_id)


@app.command()
def delete(
    record_id: int = typer.Argument(..., metavar="ID", help="Id of the grade to delete."),
) -> None:
    """
    Delete a grade by id.
    """

    async def _delete() -> List[SavedGrade]:
        async with open_store() as store:
            if await store.delete_by_id(record_id) == 0:
                _fail(f"No grade with id {record_id}.")
            return await store.list_all()

    grades = _run(_delete())
    typer.echo(f"Grade {record_id} deleted.")
    render_grades(grades)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
