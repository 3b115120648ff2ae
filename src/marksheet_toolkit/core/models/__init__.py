"""
Core Models Package

Immutable, validated data models shared by every subpackage.

Stored records (`Student`, `Mark`) are frozen dataclasses; everything in
`results` is derived by the grading engine at report time and never
written back to a store.
"""

from .students import Student, uses_groups
from .marks import Mark, FAIL_GRADE
from .results import (
    GradeResult,
    ExamResult,
    CombinedSubject,
    FinalResult,
    TabulationRow,
    TabulationResult,
)

__all__ = [
    "Student",
    "uses_groups",
    "Mark",
    "FAIL_GRADE",
    "GradeResult",
    "ExamResult",
    "CombinedSubject",
    "FinalResult",
    "TabulationRow",
    "TabulationResult",
]
