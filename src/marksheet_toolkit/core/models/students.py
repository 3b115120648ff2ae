"""
Module: students

Purpose:
    Provides the Student dataclass - one row of the school roster.
    A student belongs to a cohort identified by class plus either a
    section (classes 6-8) or a group (classes 9-10).

Key Classes:
    - Student: Immutable roster record

Dependencies:
    - dataclasses (std)

Used By:
    - grading.gpa: Exam and final result building
    - grading.ranking: Tabulation rows and positions
    - storage: Record stores
    - interchange.workbook: Spreadsheet import/export
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


MIN_CLASS = 6
MAX_CLASS = 10
FIRST_GROUP_CLASS = 9


def uses_groups(class_level: int) -> bool:
    """True when the class is organised by group (9-10) rather than section."""
    return FIRST_GROUP_CLASS <= class_level <= MAX_CLASS


@dataclass(frozen=True)
class Student:
    """
    Roster record for one student (immutable).

    Attributes:
        id: Store-assigned identifier (None until persisted)
        name: Full name
        roll: Roll number, unique within (class, cohort)
        class_level: Class number 6-10
        section: Section letter for classes 6-8
        group: Group name for classes 9-10

    Invariants:
        - name is non-empty
        - roll > 0
        - 6 <= class_level <= 10
        - classes 6-8 carry a section and no group; classes 9-10 carry
          a group and no section

    Example:
        >>> s = Student(id=1, name="Rahim", roll=3, class_level=7, section="A")
        >>> s.cohort
        'A'
    """

    id: Optional[int]
    name: str
    roll: int
    class_level: int
    section: Optional[str] = None
    group: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate student on construction."""
        if not self.name or not self.name.strip():
            raise ValueError("Student name cannot be empty")
        if self.roll <= 0:
            raise ValueError(f"Roll must be positive: {self.roll}")
        if not (MIN_CLASS <= self.class_level <= MAX_CLASS):
            raise ValueError(
                f"Class must be between {MIN_CLASS} and {MAX_CLASS}: {self.class_level}"
            )
        if uses_groups(self.class_level):
            if not self.group:
                raise ValueError(f"Class {self.class_level} student requires a group")
            if self.section:
                raise ValueError(f"Class {self.class_level} student cannot have a section")
        else:
            if not self.section:
                raise ValueError(f"Class {self.class_level} student requires a section")
            if self.group:
                raise ValueError(f"Class {self.class_level} student cannot have a group")

    @property
    def uses_groups(self) -> bool:
        """True for classes 9-10."""
        return uses_groups(self.class_level)

    @property
    def cohort(self) -> str:
        """Section or group label, whichever applies to the class."""
        if self.uses_groups:
            return self.group or ""
        return self.section or ""

    @property
    def cohort_kind(self) -> str:
        """'group' or 'section'."""
        return "group" if self.uses_groups else "section"

    def in_cohort(self, class_level: int, cohort: str) -> bool:
        """Check membership of the (class, section-or-group) cohort."""
        return self.class_level == class_level and self.cohort == cohort

    def __repr__(self) -> str:
        return (
            f"Student(id={self.id}, roll={self.roll}, "
            f"class={self.class_level}, cohort={self.cohort!r})"
        )
