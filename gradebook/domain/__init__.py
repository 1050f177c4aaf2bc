"""
Domain package for Gradebook.

Exports the grade record variants shared by the store, the CLI and the seed
script. Keep this package focused on data definitions and row conversion.
"""

from gradebook.domain.models import Grade, SavedGrade, UnsavedGrade, grade_from_row

__all__ = [
    "Grade",
    "SavedGrade",
    "UnsavedGrade",
    "grade_from_row",
]
