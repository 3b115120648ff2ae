"""Validation for student/mark payloads and store documents."""

from .validator import (
    STORE_SCHEMA_VERSION,
    ValidationError,
    validate_student,
    validate_mark,
    validate_store_document,
)

__all__ = [
    "STORE_SCHEMA_VERSION",
    "ValidationError",
    "validate_student",
    "validate_mark",
    "validate_store_document",
]
