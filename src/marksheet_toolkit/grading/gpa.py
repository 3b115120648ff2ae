"""
Module: grading.gpa

Purpose:
    GPA aggregation for a single exam and the combined final result
    across the Half-Yearly and Yearly exams.

Key Functions:
    - exam_gpa(): Mean grade point, 0 for an empty list
    - complete_marks(): Zero-fill every catalog subject without a mark
    - build_exam_result(): ExamResult for one student and exam
    - combine_exams(): FinalResult merging two exams

Rules:
    - Subjects without an entered mark count as total 0, grade F,
      grade point 0 and are included in the average.
    - Combined subject grade point is the mean of the two grade points;
      its letter comes from that grade point, while totals are summed.
    - Fail-override: any F in either exam forces the final letter to F
      and the reported GPA to 0.00.

Dependencies:
    - grading.catalog, grading.scheme, grading.grades
    - core.models

Used By:
    - grading.ranking: Section results
    - controller: Marksheet and final result pipelines
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from marksheet_toolkit.core.models import (
    CombinedSubject,
    ExamResult,
    FAIL_GRADE,
    FinalResult,
    Mark,
    Student,
)

from .catalog import subjects_for
from .grades import letter_for_grade_point
from .scheme import total_possible

logger = logging.getLogger(__name__)

HALF_YEARLY = "Half-Yearly"
YEARLY = "Yearly"
FINAL_EXAMS: tuple[str, str] = (HALF_YEARLY, YEARLY)


def exam_gpa(grade_points: Iterable[float]) -> float:
    """
    Arithmetic mean of grade points.

    Example:
        >>> exam_gpa([5.0, 4.0, 3.0])
        4.0
        >>> exam_gpa([])
        0.0
    """
    points = list(grade_points)
    if not points:
        return 0.0
    return sum(points) / len(points)


def overall_letter(marks: Sequence[Mark], gpa: float) -> str:
    """Overall letter: F on any failed subject, else from the GPA."""
    if any(m.grade == FAIL_GRADE for m in marks):
        return FAIL_GRADE
    return letter_for_grade_point(gpa)


def complete_marks(
    student: Student,
    exam: str,
    marks: Iterable[Mark],
    subjects: Optional[Sequence[str]] = None,
) -> tuple[Mark, ...]:
    """
    Complete subject list for one student and exam.

    Args:
        student: The student
        exam: Exam label; marks for other exams or students are ignored
        marks: Entered marks (any order, may be incomplete)
        subjects: Column order; defaults to the catalog for the student

    Returns:
        One Mark per subject in order, zero-filled where missing
    """
    if subjects is None:
        subjects = subjects_for(student.class_level, student.group)

    by_subject: dict[str, Mark] = {}
    for mark in marks:
        if mark.student_id == student.id and mark.exam == exam:
            by_subject.setdefault(mark.subject, mark)

    completed = []
    for subject in subjects:
        mark = by_subject.get(subject)
        if mark is None:
            mark = Mark.missing(
                student.id or 0,
                subject,
                exam,
                student.class_level,
                section=student.section,
                group=student.group,
            )
        completed.append(mark)
    return tuple(completed)


def build_exam_result(
    student: Student,
    exam: str,
    marks: Iterable[Mark],
) -> ExamResult:
    """
    Per-exam result with zero-filled subjects and GPA.

    Args:
        student: The student
        exam: Exam label
        marks: The student's entered marks

    Returns:
        Unranked ExamResult
    """
    subjects = subjects_for(student.class_level, student.group)
    completed = complete_marks(student, exam, marks, subjects)
    gpa = exam_gpa(m.grade_point for m in completed)

    return ExamResult(
        student=student,
        exam=exam,
        marks=completed,
        gpa=gpa,
        total_possible=total_possible(subjects, student.class_level),
        letter=overall_letter(completed, gpa),
    )


def combine_exams(
    student: Student,
    first_marks: Iterable[Mark],
    second_marks: Iterable[Mark],
    *,
    exams: tuple[str, str] = FINAL_EXAMS,
) -> FinalResult:
    """
    Combined two-exam transcript.

    Args:
        student: The student
        first_marks: Marks of the first exam (Half-Yearly)
        second_marks: Marks of the second exam (Yearly)
        exams: Labels of the two exams

    Returns:
        Unranked FinalResult

    Example:
        >>> final = combine_exams(student, half_yearly, yearly)
        >>> final.letter, f"{final.reported_gpa:.2f}"
        ('F', '0.00')  # when any subject failed in either exam
    """
    first = build_exam_result(student, exams[0], first_marks)
    second = build_exam_result(student, exams[1], second_marks)

    subjects = []
    for a, b in zip(first.marks, second.marks):
        combined_gp = (a.grade_point + b.grade_point) / 2
        subjects.append(CombinedSubject(
            subject=a.subject,
            first=a,
            second=b,
            combined_grade_point=combined_gp,
            letter=letter_for_grade_point(combined_gp),
        ))

    final_gpa = (first.gpa + second.gpa) / 2
    failed = first.has_failed_subject or second.has_failed_subject
    letter = FAIL_GRADE if failed else letter_for_grade_point(final_gpa)

    if failed:
        logger.debug(f"Fail-override applied for roll {student.roll} (computed GPA {final_gpa:.2f})")

    return FinalResult(
        student=student,
        first=first,
        second=second,
        subjects=tuple(subjects),
        final_gpa=final_gpa,
        total_possible=first.total_possible + second.total_possible,
        letter=letter,
    )
