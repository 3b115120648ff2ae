"""
Module: marks

Purpose:
    Provides the Mark dataclass - one student's result in one subject
    of one exam. Holds the optional component scores together with the
    derived total, letter grade and grade point.

Key Functions:
    - Mark.missing(...): Zero-filled placeholder for an unentered subject
    - Mark.is_entered: Whether any marks were actually recorded

Dependencies:
    - dataclasses (std)

Used By:
    - grading.entry: Builds marks from component scores
    - grading.gpa: Exam and combined results
    - grading.ranking: Tabulation
    - storage, interchange.workbook
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


FAIL_GRADE = "F"


@dataclass(frozen=True)
class Mark:
    """
    A subject mark for one exam (immutable).

    Attributes:
        id: Store-assigned identifier (None until persisted)
        student_id: Owning student
        subject: Subject name as listed in the catalog
        exam: Exam label, e.g. "Half-Yearly"
        class_level: Class the mark was recorded in
        section: Section context (classes 6-8)
        group: Group context (classes 9-10)
        theory: Written component, if entered
        mcq: Multiple-choice component, if entered
        practical: Practical component, if entered
        total: Sum of components
        grade: Letter grade derived from total
        grade_point: Grade point derived from total

    Invariants:
        - total, grade_point and every entered component are non-negative
    """

    id: Optional[int]
    student_id: int
    subject: str
    exam: str
    class_level: int
    section: Optional[str] = None
    group: Optional[str] = None
    theory: Optional[float] = None
    mcq: Optional[float] = None
    practical: Optional[float] = None
    total: float = 0
    grade: str = FAIL_GRADE
    grade_point: float = 0.0

    def __post_init__(self) -> None:
        """Validate mark on construction."""
        if self.total < 0:
            raise ValueError(f"Total cannot be negative: {self.total}")
        if self.grade_point < 0:
            raise ValueError(f"Grade point cannot be negative: {self.grade_point}")
        for name in ("theory", "mcq", "practical"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} cannot be negative: {value}")

    @classmethod
    def missing(
        cls,
        student_id: int,
        subject: str,
        exam: str,
        class_level: int,
        *,
        section: Optional[str] = None,
        group: Optional[str] = None,
    ) -> Mark:
        """
        Placeholder for a subject with no entered mark.

        Counts as total 0, grade F, grade point 0 wherever a complete
        subject list is required.
        """
        return cls(
            id=None,
            student_id=student_id,
            subject=subject,
            exam=exam,
            class_level=class_level,
            section=section,
            group=group,
            theory=0,
            mcq=0,
            practical=0,
            total=0,
            grade=FAIL_GRADE,
            grade_point=0.0,
        )

    @property
    def is_failed(self) -> bool:
        return self.grade == FAIL_GRADE

    @property
    def is_entered(self) -> bool:
        """True when the mark carries a non-zero total."""
        return self.total > 0

    @property
    def key(self) -> tuple[int, str, str]:
        """Upsert key: (student_id, subject, exam)."""
        return (self.student_id, self.subject, self.exam)

    def __repr__(self) -> str:
        return (
            f"Mark(student={self.student_id}, {self.subject!r}, {self.exam!r}, "
            f"total={self.total}, grade={self.grade!r})"
        )
