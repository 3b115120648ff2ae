"""
Module: storage.json_store

Purpose:
    RecordStore persisted as one JSON document on disk. Every read
    loads a fresh snapshot under a shared lock; every write is a locked
    read-modify-write so concurrent CLI invocations cannot interleave.

Document format:
    {
      "schema_version": 1,
      "students": [{id, name, roll, class_level, section, group}, ...],
      "marks": [{id, student_id, subject, exam, class_level, section,
                 group, theory, mcq, practical, total, grade,
                 grade_point}, ...]
    }

Key Classes:
    - JsonFileStore

Dependencies:
    - storage.file_locking: portalocker-backed JSON access
    - core.schemas.validator: jsonschema validation on load
    - core.utils.serialization: Model <-> dict
    - storage.memory: Working copy for each operation
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from marksheet_toolkit.core.models import Mark, Student
from marksheet_toolkit.core.schemas.validator import (
    STORE_SCHEMA_VERSION,
    ValidationError,
    validate_store_document,
)
from marksheet_toolkit.core.utils.serialization import (
    deserialize_mark,
    deserialize_student,
    serialize_mark,
    serialize_student,
)

from .base import RecordStore, StoreError
from .file_locking import locked_read_json, locked_read_modify_write_json
from .memory import InMemoryStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def empty_document() -> dict[str, Any]:
    return {"schema_version": STORE_SCHEMA_VERSION, "students": [], "marks": []}


def _load(document: dict[str, Any], path: Path) -> InMemoryStore:
    try:
        validate_store_document(document)
    except ValidationError as e:
        raise StoreError(f"Invalid store file {path} at {e.path or '/'}: {e}") from e
    students = [deserialize_student(d, validate=False) for d in document["students"]]
    marks = [deserialize_mark(d, validate=False) for d in document["marks"]]
    return InMemoryStore(students, marks)


def _dump(store: InMemoryStore) -> dict[str, Any]:
    return {
        "schema_version": STORE_SCHEMA_VERSION,
        "students": [serialize_student(s) for s in store.all_students()],
        "marks": [serialize_mark(m) for m in store.all_marks()],
    }


class JsonFileStore(RecordStore):
    """
    RecordStore backed by a JSON file.

    Example:
        >>> store = JsonFileStore(Path("school.json"))
        >>> store.add_student(Student(None, "Rahim", 1, 6, section="A"))
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    # ─────────────────────────────────────────────────────────────────────────
    # Snapshot / transaction plumbing
    # ─────────────────────────────────────────────────────────────────────────

    def snapshot(self) -> InMemoryStore:
        """Point-in-time copy of the whole store."""
        try:
            document = locked_read_json(self.path, default=empty_document)
        except json.JSONDecodeError as e:
            raise StoreError(f"Store file is corrupted: {self.path}: {e}") from e
        return _load(document, self.path)

    def _write(self, operation: Callable[[InMemoryStore], T]) -> T:
        result: list[T] = []

        def modifier(document: dict[str, Any]) -> dict[str, Any]:
            working = _load(document, self.path)
            result.append(operation(working))
            return _dump(working)

        try:
            locked_read_modify_write_json(self.path, modifier, default=empty_document)
        except json.JSONDecodeError as e:
            raise StoreError(f"Store file is corrupted: {self.path}: {e}") from e
        return result[0]

    # ─────────────────────────────────────────────────────────────────────────
    # RecordStore
    # ─────────────────────────────────────────────────────────────────────────

    def list_students(
        self,
        *,
        class_level: Optional[int] = None,
        cohort: Optional[str] = None,
        roll: Optional[int] = None,
    ) -> list[Student]:
        return self.snapshot().list_students(class_level=class_level, cohort=cohort, roll=roll)

    def get_student(self, student_id: int) -> Optional[Student]:
        return self.snapshot().get_student(student_id)

    def add_student(self, student: Student) -> Student:
        stored = self._write(lambda s: s.add_student(student))
        logger.info(f"Added student {stored!r}")
        return stored

    def update_student(self, student: Student) -> Student:
        return self._write(lambda s: s.update_student(student))

    def upsert_student(self, student: Student) -> Student:
        return self._write(lambda s: s.upsert_student(student))

    def delete_student(self, student_id: int) -> None:
        self._write(lambda s: s.delete_student(student_id))

    def list_marks(
        self,
        *,
        student_id: Optional[int] = None,
        exam: Optional[str] = None,
        subject: Optional[str] = None,
        class_level: Optional[int] = None,
    ) -> list[Mark]:
        return self.snapshot().list_marks(
            student_id=student_id, exam=exam, subject=subject, class_level=class_level
        )

    def upsert_mark(self, mark: Mark) -> Mark:
        return self._write(lambda s: s.upsert_mark(mark))

    def delete_mark(self, mark_id: int) -> None:
        self._write(lambda s: s.delete_mark(mark_id))

    def apply(self, operation: Callable[[InMemoryStore], T]) -> T:
        """
        Run several changes as one locked write.

        Used by bulk import so a whole workbook costs one file rewrite.
        If the operation raises, nothing is written.
        """
        return self._write(operation)
