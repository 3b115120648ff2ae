"""
Serialization Utilities

to/from dict helpers for the stored models.

- `serialize_*` produce plain dicts suitable for JSON
- `deserialize_*` validate first, then build the frozen model
- Derived results (GPA, rank, combined values) are never serialized
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from ..models.marks import Mark
from ..models.students import Student
from ..schemas.validator import ValidationError, validate_mark, validate_student


# ─────────────────────────────────────────────────────────────────────────────
# Students
# ─────────────────────────────────────────────────────────────────────────────

def serialize_student(student: Student) -> dict[str, Any]:
    """Serialize a Student to a dictionary."""
    return asdict(student)


def deserialize_student(data: dict[str, Any], *, validate: bool = True) -> Student:
    """
    Deserialize a Student from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to run basic validation first

    Returns:
        Student instance

    Raises:
        ValidationError: If validation fails or the model rejects the data
    """
    if validate:
        validate_student(data)

    try:
        return Student(
            id=data.get("id"),
            name=str(data["name"]).strip(),
            roll=data["roll"],
            class_level=data["class_level"],
            section=data.get("section") or None,
            group=data.get("group") or None,
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


# ─────────────────────────────────────────────────────────────────────────────
# Marks
# ─────────────────────────────────────────────────────────────────────────────

def serialize_mark(mark: Mark) -> dict[str, Any]:
    """Serialize a Mark to a dictionary."""
    return asdict(mark)


def deserialize_mark(data: dict[str, Any], *, validate: bool = True) -> Mark:
    """
    Deserialize a Mark from a dictionary.

    Raises:
        ValidationError: If validation fails or the model rejects the data
    """
    if validate:
        validate_mark(data)

    try:
        return Mark(
            id=data.get("id"),
            student_id=data["student_id"],
            subject=str(data["subject"]).strip(),
            exam=str(data["exam"]).strip(),
            class_level=data.get("class_level", 0),
            section=data.get("section") or None,
            group=data.get("group") or None,
            theory=data.get("theory"),
            mcq=data.get("mcq"),
            practical=data.get("practical"),
            total=data.get("total", 0),
            grade=data.get("grade", "F"),
            grade_point=data.get("grade_point", 0.0),
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e
