"""
Module: grading.ranking

Purpose:
    Cohort positions and the tabulation grid.

Key Functions:
    - rank(): 1-based positions by total, zero totals excluded
    - rank_exam_results(): Attach positions to section marksheets
    - rank_final_results(): Attach merit positions to final transcripts
    - tabulate(): Build the TabulationResult for one exam

Ordering:
    Total descending, then GPA descending, then roll ascending, then id.
    Students whose total is exactly 0 (nothing entered) get no position
    and do not count towards the cohort size.

Dependencies:
    - grading.gpa: Zero-filling and exam GPA
    - core.models

Used By:
    - controller: Section, final and tabulation pipelines
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from marksheet_toolkit.core.models import (
    ExamResult,
    FinalResult,
    Mark,
    Student,
    TabulationResult,
    TabulationRow,
    uses_groups,
)

from .catalog import subjects_for
from .gpa import complete_marks, exam_gpa, overall_letter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankEntry:
    """
    A student's standing used for ordering.

    Attributes:
        student_id: Key of the returned position mapping
        total: Marks total (primary key, descending)
        gpa: Tie-break, descending
        roll: Tie-break, ascending
    """

    student_id: int
    total: float
    gpa: float = 0.0
    roll: int = 0

    @property
    def sort_key(self) -> tuple[float, float, int, int]:
        return (-self.total, -self.gpa, self.roll, self.student_id)


def rank(entries: Iterable[RankEntry]) -> dict[int, int]:
    """
    Positions within a cohort.

    Args:
        entries: One entry per student

    Returns:
        Mapping student_id -> 1-based position; students with a total
        of exactly 0 are absent from the mapping

    Example:
        >>> rank([RankEntry(1, 450), RankEntry(2, 0), RankEntry(3, 610)])
        {3: 1, 1: 2}
    """
    pool = sorted((e for e in entries if e.total != 0), key=lambda e: e.sort_key)
    return {entry.student_id: position for position, entry in enumerate(pool, start=1)}


def rank_exam_results(results: Sequence[ExamResult]) -> list[ExamResult]:
    """
    Attach cohort positions to per-exam results.

    Returns:
        Results in input order, each carrying rank (None when unranked)
        and cohort_size (count of ranked students)
    """
    positions = rank(
        RankEntry(r.student.id or 0, r.total, r.gpa, r.student.roll)
        for r in results
    )
    return [
        r.with_rank(positions.get(r.student.id or 0), len(positions))
        for r in results
    ]


def rank_final_results(results: Sequence[FinalResult]) -> list[FinalResult]:
    """
    Attach merit positions to combined transcripts.

    Ranked by grand total across both exams, then final GPA.
    """
    positions = rank(
        RankEntry(r.student.id or 0, r.grand_total, r.final_gpa, r.student.roll)
        for r in results
    )
    return [
        r.with_rank(positions.get(r.student.id or 0), len(positions))
        for r in results
    ]


def tabulate(
    students: Sequence[Student],
    exam: str,
    marks: Iterable[Mark],
    *,
    class_level: Optional[int] = None,
    cohort: Optional[str] = None,
) -> TabulationResult:
    """
    Build the tabulation grid for a cohort and exam.

    The overall letter averages grade points over entered subjects only,
    but any F in the zero-filled row (a missing subject included) makes
    the overall letter F. Positions use the same ordering as
    rank_exam_results(), so a student holds one position per exam.

    Args:
        students: Cohort roster
        exam: Exam label
        marks: Marks of the cohort (other exams are ignored)
        class_level: Class of the cohort; taken from the first student
            when omitted
        cohort: Section/group label; taken from the first student when
            omitted

    Returns:
        TabulationResult with rows sorted by roll
    """
    students = sorted(students, key=lambda s: s.roll)
    if class_level is None:
        class_level = students[0].class_level if students else 0
    if cohort is None:
        cohort = students[0].cohort if students else ""

    group = cohort if uses_groups(class_level) else None
    subjects = subjects_for(class_level, group)

    marks = list(marks)
    entered_by_student: dict[int, list[Mark]] = {}
    for mark in marks:
        if mark.exam == exam and mark.subject in subjects:
            entered_by_student.setdefault(mark.student_id, []).append(mark)

    rows = []
    entries = []
    for student in students:
        entered = entered_by_student.get(student.id or 0, [])
        row_marks = complete_marks(student, exam, entered, subjects)
        total = sum(m.total for m in row_marks)
        # Mean over entered subjects only; missing ones are caught by the override.
        present = {m.subject for m in entered}
        mean_gp = exam_gpa(m.grade_point for m in row_marks if m.subject in present)
        letter = overall_letter(row_marks, mean_gp)

        rows.append(TabulationRow(student=student, marks=row_marks, total=total, letter=letter))
        # Ties break on the same GPA the marksheets rank by.
        gpa = exam_gpa(m.grade_point for m in row_marks)
        entries.append(RankEntry(student.id or 0, total, gpa, student.roll))

    positions = rank(entries)
    rows = [
        TabulationRow(
            student=row.student,
            marks=row.marks,
            total=row.total,
            letter=row.letter,
            position=positions.get(row.student.id or 0),
        )
        for row in rows
    ]

    logger.info(
        f"Tabulated {len(rows)} students x {len(subjects)} subjects "
        f"for class {class_level} {cohort} ({exam})"
    )

    return TabulationResult(
        class_level=class_level,
        cohort=cohort,
        exam=exam,
        subjects=tuple(subjects),
        rows=tuple(rows),
    )
