"""
Domain models for Gradebook.

A grade record is either *unsaved* (built in memory, no identity yet) or
*saved* (read back from the `grades` table, identity assigned by SQLite).
Keeping the two as separate types means `GradeStore.update` can only be handed
a record that actually has an id.

Field-level rules (9-digit SID, non-empty grade) are enforced by the caller,
see `gradebook.validation`; these models only check shape and types.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gradebook.exceptions import MalformedRecord

_MODEL_CONFIG = ConfigDict(frozen=True, strict=True, extra="ignore")


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"]) or "<row>"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


class UnsavedGrade(BaseModel):
    """
    A grade that has never been persisted.
    """

    sid: str = Field(..., description="Student ID (nine ASCII digits, checked by the caller).")
    grade: str = Field(..., description="Free-form grade text.")

    model_config = _MODEL_CONFIG

    def to_row(self) -> Dict[str, Any]:
        """Column mapping for INSERT; carries no identity key."""
        return {"sid": self.sid, "grade": self.grade}

    def with_id(self, record_id: int) -> "SavedGrade":
        return SavedGrade(id=record_id, sid=self.sid, grade=self.grade)


class SavedGrade(BaseModel):
    """
    Representation of a single row in the `grades` table.
    """

    id: int = Field(..., description="Primary key (INTEGER AUTOINCREMENT).")
    sid: str = Field(..., description="Student ID.")
    grade: str = Field(..., description="Free-form grade text.")

    model_config = _MODEL_CONFIG

    def to_row(self) -> Dict[str, Any]:
        return {"id": self.id, "sid": self.sid, "grade": self.grade}

    def unsaved(self) -> UnsavedGrade:
        return UnsavedGrade(sid=self.sid, grade=self.grade)

    def replace(self, **changes: Any) -> "SavedGrade":
        """Copy with new field values; the identity cannot be changed."""
        if "id" in changes:
            raise TypeError("the id of a saved grade cannot be replaced")
        return SavedGrade(**{**self.to_row(), **changes})

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SavedGrade":
        """
        Build a SavedGrade from a row read back from storage.

        Raises
        ------
        MalformedRecord
            If `id`, `sid` or `grade` is missing or has the wrong type.
        """
        try:
            data = dict(row)
        except (TypeError, ValueError) as exc:
            raise MalformedRecord(f"grade row is not a mapping: {row!r}") from exc
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise MalformedRecord(f"malformed grade row: {_describe(exc)}", row=data) from exc


Grade = Union[UnsavedGrade, SavedGrade]


def grade_from_row(row: Mapping[str, Any]) -> Grade:
    """
    Rebuild either variant from a serialized mapping.

    A mapping without an `id` key yields an UnsavedGrade, so that
    ``grade_from_row(g.to_row()) == g`` holds for both variants.
    """
    if "id" in row:
        return SavedGrade.from_row(row)
    try:
        return UnsavedGrade.model_validate(dict(row))
    except ValidationError as exc:
        raise MalformedRecord(f"malformed grade row: {_describe(exc)}", row=row) from exc


__all__ = ["Grade", "SavedGrade", "UnsavedGrade", "grade_from_row"]
