"""
Module: grading.grades

Purpose:
    The fixed grading table shared by every view: percentage bands to
    letter grade and grade point, and grade point back to letter.

Key Functions:
    - percentage(): Marks as a percentage of the subject maximum
    - grade(): Letter + grade point for a score
    - grade_for_percentage(): Band lookup by percentage
    - letter_for_grade_point(): Letter for an averaged grade point

Dependencies:
    - core.models.results: GradeResult

Used By:
    - grading.entry, grading.gpa, grading.ranking
    - reports.renderer: Grading scale legend
"""

from __future__ import annotations

from dataclasses import dataclass

from marksheet_toolkit.core.models.results import GradeResult


@dataclass(frozen=True)
class GradeBand:
    """One row of the grading table (inclusive lower bound)."""

    min_percentage: float
    letter: str
    grade_point: float


# Evaluated top-down, first match wins.
GRADE_TABLE: tuple[GradeBand, ...] = (
    GradeBand(80, "A+", 5.0),
    GradeBand(70, "A", 4.0),
    GradeBand(60, "A-", 3.5),
    GradeBand(50, "B", 3.0),
    GradeBand(40, "C", 2.0),
    GradeBand(33, "D", 1.0),
)

FAIL = GradeResult("F", 0.0)


def percentage(marks_obtained: float, max_marks: float) -> float:
    """Percentage of the maximum; 0 when the maximum is not positive."""
    if max_marks <= 0:
        return 0.0
    return marks_obtained / max_marks * 100


def grade_for_percentage(pct: float) -> GradeResult:
    """Grade for a percentage, compared without rounding."""
    for band in GRADE_TABLE:
        if pct >= band.min_percentage:
            return GradeResult(band.letter, band.grade_point)
    return FAIL


def grade(marks_obtained: float, max_marks: float) -> GradeResult:
    """
    Letter grade and grade point for a subject score.

    Args:
        marks_obtained: Total scored
        max_marks: Subject maximum (50 or 100 from the marking scheme)

    Returns:
        GradeResult from the grading table

    Example:
        >>> grade(30, 50)
        GradeResult(letter='A-', grade_point=3.5)
    """
    return grade_for_percentage(percentage(marks_obtained, max_marks))


def letter_for_grade_point(grade_point: float) -> str:
    """
    Letter for an averaged grade point.

    Uses the grade-point column of the same table: the best band whose
    grade point does not exceed the value.

    Example:
        >>> letter_for_grade_point(4.5)
        'A'
    """
    for band in GRADE_TABLE:
        if grade_point >= band.grade_point:
            return band.letter
    return FAIL.letter


def grading_scale_lines() -> list[str]:
    """Human readable legend, one band per line, for printed reports."""
    lines = []
    upper = 100
    for band in GRADE_TABLE:
        lines.append(
            f"{band.letter} ({band.min_percentage:g}-{upper:g}%) - {band.grade_point:.2f}"
        )
        upper = band.min_percentage - 1
    lines.append(f"{FAIL.letter} (0-{upper:g}%) - {FAIL.grade_point:.2f}")
    return lines
