"""
Schema Validation Utilities

Validates student/mark payloads and whole store documents before they
are turned into models.

- `validate_student()` / `validate_mark()`: required fields and basic
  ranges, fast, used per record
- `validate_store_document()`: full JSON Schema check of a persisted
  store file with `jsonschema`
"""

from __future__ import annotations

from typing import Any

import jsonschema


STORE_SCHEMA_VERSION = 1

_STUDENT_REQUIRED = ["name", "roll", "class_level"]
_MARK_REQUIRED = ["student_id", "subject", "exam"]

_OPTIONAL_STRING = {"type": ["string", "null"]}
_OPTIONAL_NUMBER = {"type": ["number", "null"], "minimum": 0}

STUDENT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["id", *_STUDENT_REQUIRED],
    "properties": {
        "id": {"type": "integer", "minimum": 1},
        "name": {"type": "string", "minLength": 1},
        "roll": {"type": "integer", "minimum": 1},
        "class_level": {"type": "integer", "minimum": 6, "maximum": 10},
        "section": _OPTIONAL_STRING,
        "group": _OPTIONAL_STRING,
    },
}

MARK_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["id", *_MARK_REQUIRED, "class_level", "total", "grade", "grade_point"],
    "properties": {
        "id": {"type": "integer", "minimum": 1},
        "student_id": {"type": "integer", "minimum": 1},
        "subject": {"type": "string", "minLength": 1},
        "exam": {"type": "string", "minLength": 1},
        "class_level": {"type": "integer"},
        "section": _OPTIONAL_STRING,
        "group": _OPTIONAL_STRING,
        "theory": _OPTIONAL_NUMBER,
        "mcq": _OPTIONAL_NUMBER,
        "practical": _OPTIONAL_NUMBER,
        "total": {"type": "number", "minimum": 0},
        "grade": {"type": "string"},
        "grade_point": {"type": "number", "minimum": 0, "maximum": 5},
    },
}

STORE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["schema_version", "students", "marks"],
    "properties": {
        "schema_version": {"const": STORE_SCHEMA_VERSION},
        "students": {"type": "array", "items": STUDENT_SCHEMA},
        "marks": {"type": "array", "items": MARK_SCHEMA},
    },
}


class ValidationError(Exception):
    """Raised when data fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _check_required(data: dict[str, Any], required: list[str]) -> None:
    missing = [f for f in required if data.get(f) in (None, "")]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )


def validate_student(data: dict[str, Any]) -> None:
    """
    Basic checks for a student payload.

    Raises:
        ValidationError: If name/roll/class are missing or not usable
    """
    _check_required(data, _STUDENT_REQUIRED)

    for key in ("roll", "class_level"):
        if not isinstance(data[key], int) or isinstance(data[key], bool):
            raise ValidationError(f"{key} must be an integer: {data[key]!r}", path=key)


def validate_mark(data: dict[str, Any]) -> None:
    """
    Basic checks for a mark payload.

    Raises:
        ValidationError: If student_id/subject/exam are missing or a
            score is negative
    """
    _check_required(data, _MARK_REQUIRED)

    if not isinstance(data["student_id"], int) or isinstance(data["student_id"], bool):
        raise ValidationError(
            f"student_id must be an integer: {data['student_id']!r}", path="student_id"
        )
    for key in ("theory", "mcq", "practical", "total"):
        value = data.get(key)
        if value is not None and value < 0:
            raise ValidationError(f"{key} cannot be negative: {value}", path=key)


def validate_store_document(data: dict[str, Any]) -> None:
    """
    Full JSON Schema validation of a persisted store document.

    Raises:
        ValidationError: With the failing path and every schema error
    """
    validator = jsonschema.Draft7Validator(STORE_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errors:
        first = errors[0]
        raise ValidationError(
            f"Store document failed validation: {first.message}",
            path="/".join(str(p) for p in first.path),
            errors=[e.message for e in errors],
        )
