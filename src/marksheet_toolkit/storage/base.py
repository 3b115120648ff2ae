"""
Module: storage.base

Purpose:
    The record store interface the rest of the toolkit is written
    against. The grading engine never sees a store; controllers read a
    snapshot from one and hand plain models to the engine.

Key Classes:
    - RecordStore: Abstract query-by-criteria / upsert interface
    - StudentFilter: Roster filter (name, class, section, group, roll)
    - StoreError, DuplicateRollError: Storage failures

Dependencies:
    - abc (std)
    - core.models: Student, Mark

Used By:
    - storage.memory, storage.json_store: Backends
    - interchange.workbook, controller, cli
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, TypeVar

from marksheet_toolkit.core.models import Mark, Student

T = TypeVar("T")


class StoreError(Exception):
    """Error reading or writing the record store."""
    pass


class DuplicateRollError(StoreError):
    """Roll number already taken in the student's class and section/group."""

    def __init__(self, student: Student):
        super().__init__(
            f"A student with roll {student.roll} already exists in class "
            f"{student.class_level} {student.cohort_kind} {student.cohort}"
        )
        self.student = student


def matches(record: Any, criteria: dict[str, Any]) -> bool:
    """
    True when every non-None criterion equals the record attribute.

    The pseudo-attribute ``cohort`` compares against the section or
    group, whichever applies to the record's class.
    """
    for key, expected in criteria.items():
        if expected is None:
            continue
        if getattr(record, key) != expected:
            return False
    return True


@dataclass(frozen=True)
class StudentFilter:
    """
    Roster filter.

    Attributes:
        name: Case-insensitive substring of the name
        class_level: Exact class
        section: Exact section
        group: Exact group
        roll: Substring of the roll number's digits

    Example:
        >>> StudentFilter(name="ra", class_level=7).apply(students)
    """

    name: Optional[str] = None
    class_level: Optional[int] = None
    section: Optional[str] = None
    group: Optional[str] = None
    roll: Optional[str] = None

    def accepts(self, student: Student) -> bool:
        if self.name and self.name.lower() not in student.name.lower():
            return False
        if self.class_level is not None and student.class_level != self.class_level:
            return False
        if self.section and student.section != self.section:
            return False
        if self.group and student.group != self.group:
            return False
        if self.roll and self.roll not in str(student.roll):
            return False
        return True

    def apply(self, students: Iterable[Student]) -> list[Student]:
        """Matching students sorted by roll."""
        return sorted((s for s in students if self.accepts(s)), key=lambda s: s.roll)


class RecordStore(ABC):
    """
    Roster and marks storage.

    Every read returns a point-in-time snapshot of immutable models;
    callers never hold live references into the store.
    """

    # ─────────────────────────────────────────────────────────────────────────
    # Students
    # ─────────────────────────────────────────────────────────────────────────

    @abstractmethod
    def list_students(
        self,
        *,
        class_level: Optional[int] = None,
        cohort: Optional[str] = None,
        roll: Optional[int] = None,
    ) -> list[Student]:
        """Students matching the criteria, sorted by roll."""

    @abstractmethod
    def get_student(self, student_id: int) -> Optional[Student]:
        """Student by id, or None."""

    @abstractmethod
    def add_student(self, student: Student) -> Student:
        """
        Insert a new student.

        Raises:
            DuplicateRollError: If the roll is taken in the cohort
        """

    @abstractmethod
    def update_student(self, student: Student) -> Student:
        """
        Replace an existing student (matched by id).

        Raises:
            StoreError: If the id is unknown
            DuplicateRollError: If the new roll collides in the cohort
        """

    @abstractmethod
    def upsert_student(self, student: Student) -> Student:
        """Update the student with the same (roll, class, cohort) or insert."""

    @abstractmethod
    def delete_student(self, student_id: int) -> None:
        """Delete a student and all of their marks."""

    def find_student(self, class_level: int, cohort: str, roll: int) -> Optional[Student]:
        """Student by (class, section-or-group, roll), or None."""
        found = self.list_students(class_level=class_level, cohort=cohort, roll=roll)
        return found[0] if found else None

    def filter_students(self, student_filter: StudentFilter) -> list[Student]:
        return student_filter.apply(self.list_students())

    # ─────────────────────────────────────────────────────────────────────────
    # Marks
    # ─────────────────────────────────────────────────────────────────────────

    @abstractmethod
    def list_marks(
        self,
        *,
        student_id: Optional[int] = None,
        exam: Optional[str] = None,
        subject: Optional[str] = None,
        class_level: Optional[int] = None,
    ) -> list[Mark]:
        """Marks matching the criteria."""

    @abstractmethod
    def upsert_mark(self, mark: Mark) -> Mark:
        """
        Update the mark with the same (student_id, subject, exam) or insert.

        Raises:
            StoreError: If the student does not exist
        """

    @abstractmethod
    def delete_mark(self, mark_id: int) -> None:
        """Delete a single mark."""

    def marks_for_students(self, students: Iterable[Student], exam: Optional[str] = None) -> list[Mark]:
        """All marks of the given students, optionally for one exam."""
        ids = {s.id for s in students}
        return [m for m in self.list_marks(exam=exam) if m.student_id in ids]

    # ─────────────────────────────────────────────────────────────────────────
    # Batches
    # ─────────────────────────────────────────────────────────────────────────

    def apply(self, operation: Callable[[RecordStore], T]) -> T:
        """Run several changes against this store. Backends may batch them."""
        return operation(self)
