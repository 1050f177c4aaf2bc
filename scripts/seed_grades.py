"""
Demo data script for Gradebook.

Generates deterministic pseudo-random grades and inserts them through the
store, one row at a time, exactly as the CLI would.
"""

from __future__ import annotations

import asyncio
import random
import sys
import time
from pathlib import Path
from typing import List, Optional

import typer

from gradebook.config import Settings, get_settings
from gradebook.domain.models import UnsavedGrade
from gradebook.store import open_store
from gradebook.utils.logging import configure_logging

app = typer.Typer(help="Seed a Gradebook database with synthetic grades.")

LETTER_GRADES = ["A+", "A", "A-", "B+", "B", "B-", "C+", "C", "C-", "D", "F"]


def _generate_grades(count: int, seed: int) -> List[UnsavedGrade]:
    rng = random.Random(seed)
    return [
        UnsavedGrade(
            sid=f"{rng.randint(100_000_000, 999_999_999)}",
            grade=rng.choice(LETTER_GRADES),
        )
        for _ in range(count)
    ]


async def _insert_grades(settings: Settings, grades: List[UnsavedGrade]) -> List[int]:
    async with open_store(settings) as store:
        return [await store.insert(grade) for grade in grades]


@app.command()
def main(
    count: int = typer.Option(
        20,
        "--count",
        "-n",
        min=1,
        help="Number of grades to insert.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    db_dir: Optional[Path] = typer.Option(
        None,
        "--db-dir",
        help="Directory of the database file (defaults to the configured one).",
    ),
) -> None:
    """
    Generate synthetic grades and insert them into the database.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    if db_dir is not None:
        settings = settings.model_copy(update={"db_dir": db_dir})

    grades = _generate_grades(count, seed)
    typer.echo(f"Inserting {count} grades -> {settings.database_path} (seed={seed})")
    start = time.perf_counter()
    ids = asyncio.run(_insert_grades(settings, grades))
    duration = time.perf_counter() - start
    typer.echo(f"Inserted ids {ids[0]}..{ids[-1]} in {duration:.2f}s")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
