from __future__ import annotations

from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from gradebook.domain.models import SavedGrade


def build_grades_table(
    grades: Sequence[SavedGrade],
    title: str = "Grades",
    highlight_id: Optional[int] = None,
) -> Table:
    """
    Build a rich table of grades in the order given (the store lists newest first).

    `highlight_id` marks the row that was just added or edited.
    """
    table = Table(title=title, box=box.SIMPLE_HEAVY, show_lines=False)
    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("SID", style="bold", no_wrap=True)
    table.add_column("Grade")

    for grade in grades:
        style = "on blue" if grade.id == highlight_id else None
        table.add_row(str(grade.id), grade.sid, grade.grade, style=style)
    return table


def render_grades(
    grades: Sequence[SavedGrade],
    console: Optional[Console] = None,
    highlight_id: Optional[int] = None,
) -> None:
    """
    Print the grade list, or a placeholder line when there is nothing stored.
    """
    console = console or Console()
    if not grades:
        console.print("No grades recorded yet.", style="dim")
        return
    console.print(build_grades_table(grades, highlight_id=highlight_id))


__all__ = ["build_grades_table", "render_grades"]
