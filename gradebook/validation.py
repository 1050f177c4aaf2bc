"""
Input validation for values typed in by a user.

The store accepts whatever it is given; these checks belong to the front end
and run before a grade is handed to the store. Each validator strips its input
and returns the cleaned value, or raises ValueError with the message to show.
"""

from __future__ import annotations

import re
from typing import Optional

SID_LENGTH = 9
_SID_PATTERN = re.compile(r"^[0-9]{9}$")


def clean_sid(value: Optional[str]) -> str:
    sid = (value or "").strip()
    if not sid:
        raise ValueError("Enter SID")
    if len(sid) != SID_LENGTH:
        raise ValueError(f"SID must be {SID_LENGTH} digits")
    if not _SID_PATTERN.match(sid):
        raise ValueError("SID must be numeric")
    return sid


def clean_grade(value: Optional[str]) -> str:
    grade = (value or "").strip()
    if not grade:
        raise ValueError("Enter grade")
    return grade


__all__ = ["SID_LENGTH", "clean_grade", "clean_sid"]
