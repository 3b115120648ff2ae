"""
Module: storage.memory

Purpose:
    Dict-backed RecordStore. Used directly for tests and one-shot runs,
    and as the working copy inside JsonFileStore transactions.

Key Classes:
    - InMemoryStore

Dependencies:
    - storage.base: RecordStore, errors
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional

from marksheet_toolkit.core.models import Mark, Student

from .base import DuplicateRollError, RecordStore, StoreError, matches

logger = logging.getLogger(__name__)


class InMemoryStore(RecordStore):
    """
    RecordStore holding students and marks in dictionaries keyed by id.

    Ids are assigned sequentially from 1; an explicit id on insert is
    kept when it is free (spreadsheet round-trips rely on this).
    """

    def __init__(
        self,
        students: Iterable[Student] = (),
        marks: Iterable[Mark] = (),
    ) -> None:
        self._students: dict[int, Student] = {}
        self._marks: dict[int, Mark] = {}
        for student in students:
            self._insert_student(student)
        for mark in marks:
            self._insert_mark(mark)

    # ─────────────────────────────────────────────────────────────────────────
    # Students
    # ─────────────────────────────────────────────────────────────────────────

    def list_students(
        self,
        *,
        class_level: Optional[int] = None,
        cohort: Optional[str] = None,
        roll: Optional[int] = None,
    ) -> list[Student]:
        criteria = {"class_level": class_level, "cohort": cohort, "roll": roll}
        found = [s for s in self._students.values() if matches(s, criteria)]
        return sorted(found, key=lambda s: (s.class_level, s.cohort, s.roll))

    def get_student(self, student_id: int) -> Optional[Student]:
        return self._students.get(student_id)

    def add_student(self, student: Student) -> Student:
        if self._roll_holder(student) is not None:
            raise DuplicateRollError(student)
        return self._insert_student(student)

    def update_student(self, student: Student) -> Student:
        if student.id is None or student.id not in self._students:
            raise StoreError(f"Unknown student id: {student.id}")
        holder = self._roll_holder(student)
        if holder is not None and holder.id != student.id:
            raise DuplicateRollError(student)
        self._students[student.id] = student
        return student

    def upsert_student(self, student: Student) -> Student:
        existing = self._roll_holder(student)
        if existing is not None:
            updated = replace(student, id=existing.id)
            self._students[existing.id] = updated
            logger.debug(f"Updated student {updated!r}")
            return updated
        return self._insert_student(student)

    def delete_student(self, student_id: int) -> None:
        if self._students.pop(student_id, None) is None:
            raise StoreError(f"Unknown student id: {student_id}")
        orphaned = [mid for mid, m in self._marks.items() if m.student_id == student_id]
        for mark_id in orphaned:
            del self._marks[mark_id]
        logger.info(f"Deleted student {student_id} and {len(orphaned)} marks")

    # ─────────────────────────────────────────────────────────────────────────
    # Marks
    # ─────────────────────────────────────────────────────────────────────────

    def list_marks(
        self,
        *,
        student_id: Optional[int] = None,
        exam: Optional[str] = None,
        subject: Optional[str] = None,
        class_level: Optional[int] = None,
    ) -> list[Mark]:
        criteria = {
            "student_id": student_id,
            "exam": exam,
            "subject": subject,
            "class_level": class_level,
        }
        return [m for m in self._marks.values() if matches(m, criteria)]

    def upsert_mark(self, mark: Mark) -> Mark:
        if mark.student_id not in self._students:
            raise StoreError(f"Mark refers to unknown student id: {mark.student_id}")
        for existing in self._marks.values():
            if existing.key == mark.key:
                updated = replace(mark, id=existing.id)
                self._marks[existing.id] = updated
                return updated
        return self._insert_mark(mark)

    def delete_mark(self, mark_id: int) -> None:
        if self._marks.pop(mark_id, None) is None:
            raise StoreError(f"Unknown mark id: {mark_id}")

    # ─────────────────────────────────────────────────────────────────────────
    # Snapshot access
    # ─────────────────────────────────────────────────────────────────────────

    def all_students(self) -> list[Student]:
        return sorted(self._students.values(), key=lambda s: s.id or 0)

    def all_marks(self) -> list[Mark]:
        return sorted(self._marks.values(), key=lambda m: m.id or 0)

    # ─────────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _roll_holder(self, student: Student) -> Optional[Student]:
        for existing in self._students.values():
            if existing.roll == student.roll and existing.in_cohort(student.class_level, student.cohort):
                return existing
        return None

    def _insert_student(self, student: Student) -> Student:
        student_id = student.id
        if student_id is None or student_id in self._students:
            student_id = max(self._students, default=0) + 1
        stored = replace(student, id=student_id)
        self._students[student_id] = stored
        return stored

    def _insert_mark(self, mark: Mark) -> Mark:
        mark_id = mark.id
        if mark_id is None or mark_id in self._marks:
            mark_id = max(self._marks, default=0) + 1
        stored = replace(mark, id=mark_id)
        self._marks[mark_id] = stored
        return stored
