"""
Module: grading.entry

Purpose:
    Turn component scores typed in by a teacher into a Mark with a
    consistent total, letter grade and grade point.

Key Functions:
    - checked_total(): Validate scores against the marking scheme
    - score_mark(): Validate components and build the Mark

Key Classes:
    - MarkEntryError: Component outside the marking scheme

Dependencies:
    - grading.scheme: Component maximums
    - grading.grades: Grade derivation

Used By:
    - cli: enter-mark command
    - interchange.workbook: Score checks and grade re-derivation
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Optional

from marksheet_toolkit.core.models import Mark, Student

from .grades import grade
from .scheme import marking_scheme_for

logger = logging.getLogger(__name__)


class MarkEntryError(ValueError):
    """Component score outside the subject's marking scheme."""
    pass


def checked_total(
    subject: str,
    class_level: int,
    *,
    theory: Optional[float] = None,
    mcq: Optional[float] = None,
    practical: Optional[float] = None,
    total: Optional[float] = None,
) -> float:
    """
    Validate a mark's scores against the subject's marking scheme.

    Each entered component must lie within 0 and its maximum. A given
    total must equal the sum of the entered components (when there are
    any) and must not exceed the subject maximum; without one the total
    is the component sum.

    Returns:
        The mark's total

    Raises:
        MarkEntryError: If any score falls outside the scheme
    """
    scheme = marking_scheme_for(subject, class_level)
    components = {"theory": theory, "mcq": mcq, "practical": practical}

    for name, value in components.items():
        if value is None:
            continue
        limit = scheme.component_max(name)
        if value < 0:
            raise MarkEntryError(f"{subject}: {name} cannot be negative ({value})")
        if value > limit:
            raise MarkEntryError(
                f"{subject}: {name} {value} exceeds maximum {limit}"
            )

    entered = [v for v in components.values() if v is not None]
    component_sum = sum(entered)
    if total is None:
        return component_sum

    if entered and not math.isclose(total, component_sum):
        raise MarkEntryError(
            f"{subject}: total {total:g} does not match components ({component_sum:g})"
        )
    if total < 0:
        raise MarkEntryError(f"{subject}: total cannot be negative ({total:g})")
    if total > scheme.total:
        raise MarkEntryError(f"{subject}: total {total:g} exceeds maximum {scheme.total}")
    return total


def score_mark(
    student: Student,
    subject: str,
    exam: str,
    *,
    theory: Optional[float] = None,
    mcq: Optional[float] = None,
    practical: Optional[float] = None,
    mark_id: Optional[int] = None,
) -> Mark:
    """
    Build a Mark from component scores.

    Each entered component must lie within 0 and the scheme's maximum
    for that component; the total is their sum and the grade is taken
    against the subject maximum, not a fixed 100.

    Args:
        student: Owning student (must be persisted)
        subject: Subject name
        exam: Exam label
        theory: Written component
        mcq: Multiple-choice component
        practical: Practical component
        mark_id: Existing mark id when editing

    Returns:
        Mark with derived total/grade/grade_point

    Raises:
        MarkEntryError: If a component is negative or over its maximum,
            or the student has no id
    """
    if student.id is None:
        raise MarkEntryError(f"Student {student.name!r} has not been saved")

    scheme = marking_scheme_for(subject, student.class_level)
    total = checked_total(
        subject, student.class_level, theory=theory, mcq=mcq, practical=practical,
    )
    result = grade(total, scheme.total)
    logger.debug(
        f"Scored {subject} for roll {student.roll}: {total}/{scheme.total} -> {result.letter}"
    )

    return Mark(
        id=mark_id,
        student_id=student.id,
        subject=subject,
        exam=exam,
        class_level=student.class_level,
        section=student.section,
        group=student.group,
        theory=theory,
        mcq=mcq,
        practical=practical,
        total=total,
        grade=result.letter,
        grade_point=result.grade_point,
    )


def regrade(mark: Mark) -> Mark:
    """
    Re-derive grade and grade point from a stored total.

    Used when marks arrive from outside (spreadsheet import) so the
    stored grade always agrees with the grading table.
    """
    scheme = marking_scheme_for(mark.subject, mark.class_level)
    result = grade(mark.total, scheme.total)
    if result.letter != mark.grade or result.grade_point != mark.grade_point:
        logger.warning(
            f"Grade for student {mark.student_id} {mark.subject} ({mark.exam}) "
            f"recorded as {mark.grade}/{mark.grade_point}, "
            f"re-derived as {result.letter}/{result.grade_point}"
        )
    return replace(mark, grade=result.letter, grade_point=result.grade_point)
