"""
Module: results

Purpose:
    Derived, never-persisted result types produced by the grading
    engine: per-exam results, combined two-exam transcripts and the
    cohort tabulation grid.

Key Classes:
    - GradeResult: Letter grade + grade point
    - ExamResult: One student's complete result for one exam
    - CombinedSubject: One subject merged across two exams
    - FinalResult: Combined Half-Yearly + Yearly transcript
    - TabulationRow / TabulationResult: Cohort grid

Dependencies:
    - dataclasses (std)
    - .students.Student
    - .marks.Mark

Used By:
    - grading.gpa, grading.ranking: Builders
    - reports.renderer: Rendering
    - controller: Pipelines

Design Note:
    Totals, GPAs and pass/fail flags are calculated properties wherever
    they can be derived from the contained marks, so a result can never
    disagree with its own rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from .marks import Mark
from .students import Student


@dataclass(frozen=True)
class GradeResult:
    """
    Letter grade and grade point for a single score.

    Example:
        >>> GradeResult("A-", 3.5).letter
        'A-'
    """

    letter: str
    grade_point: float


@dataclass(frozen=True)
class ExamResult:
    """
    Complete result of one student in one exam (immutable).

    Attributes:
        student: The student
        exam: Exam label
        marks: Complete, zero-filled subject marks in catalog order
        gpa: Mean grade point across every subject in `marks`
        total_possible: Sum of the subjects' maximum marks
        letter: Overall letter (F when any subject failed)
        rank: Position in the cohort, None when unranked
        cohort_size: Number of ranked students in the cohort
    """

    student: Student
    exam: str
    marks: tuple[Mark, ...]
    gpa: float
    total_possible: float
    letter: str
    rank: Optional[int] = None
    cohort_size: Optional[int] = None

    @property
    def total(self) -> float:
        return sum(m.total for m in self.marks)

    @property
    def total_grade_points(self) -> float:
        return sum(m.grade_point for m in self.marks)

    @property
    def has_failed_subject(self) -> bool:
        return any(m.is_failed for m in self.marks)

    @property
    def subject_count(self) -> int:
        return len(self.marks)

    @property
    def passed(self) -> bool:
        return not self.has_failed_subject

    def with_rank(self, rank: Optional[int], cohort_size: int) -> ExamResult:
        """Return a copy carrying a cohort position."""
        return replace(self, rank=rank, cohort_size=cohort_size)


@dataclass(frozen=True)
class CombinedSubject:
    """
    One subject merged across the two exams of the final result.

    The combined total is the sum of the two totals; the combined grade
    point is the mean of the two grade points and the letter is derived
    from that grade point, not from the summed marks.
    """

    subject: str
    first: Mark
    second: Mark
    combined_grade_point: float
    letter: str

    @property
    def combined_total(self) -> float:
        return self.first.total + self.second.total


@dataclass(frozen=True)
class FinalResult:
    """
    Combined two-exam transcript for one student (immutable).

    Attributes:
        student: The student
        first: Result of the first exam (Half-Yearly)
        second: Result of the second exam (Yearly)
        subjects: Per-subject merge in catalog order
        final_gpa: Mean of the two exam GPAs (before fail-override)
        total_possible: Maximum marks across both exams
        rank: Merit position, None when unranked
        cohort_size: Number of ranked students
    """

    student: Student
    first: ExamResult
    second: ExamResult
    subjects: tuple[CombinedSubject, ...]
    final_gpa: float
    total_possible: float
    letter: str
    rank: Optional[int] = None
    cohort_size: Optional[int] = None

    @property
    def grand_total(self) -> float:
        return self.first.total + self.second.total

    @property
    def has_failed_subject(self) -> bool:
        return self.first.has_failed_subject or self.second.has_failed_subject

    @property
    def reported_gpa(self) -> float:
        """GPA as printed: 0.00 whenever any subject failed in either exam."""
        return 0.0 if self.has_failed_subject else self.final_gpa

    @property
    def passed(self) -> bool:
        return not self.has_failed_subject and self.final_gpa >= 1.0

    def with_rank(self, rank: Optional[int], cohort_size: int) -> FinalResult:
        return replace(self, rank=rank, cohort_size=cohort_size)


@dataclass(frozen=True)
class TabulationRow:
    """One student line of the tabulation grid."""

    student: Student
    marks: tuple[Mark, ...]
    total: float
    letter: str
    position: Optional[int] = None


@dataclass(frozen=True)
class TabulationResult:
    """
    Cohort tabulation grid for one exam.

    Attributes:
        class_level: Class number
        cohort: Section or group label
        exam: Exam label
        subjects: Column order
        rows: One row per student, sorted by roll
    """

    class_level: int
    cohort: str
    exam: str
    subjects: tuple[str, ...]
    rows: tuple[TabulationRow, ...] = field(default_factory=tuple)

    @property
    def student_count(self) -> int:
        return len(self.rows)

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.rows if r.letter != "F")

    @property
    def failed_count(self) -> int:
        return self.student_count - self.passed_count

    @property
    def pass_rate(self) -> float:
        """Percentage of students without an overall F."""
        if not self.rows:
            return 0.0
        return self.passed_count / self.student_count * 100
