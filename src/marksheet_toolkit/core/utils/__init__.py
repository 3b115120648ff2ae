"""Serialization helpers for the stored models."""

from .serialization import (
    serialize_student,
    deserialize_student,
    serialize_mark,
    deserialize_mark,
)

__all__ = [
    "serialize_student",
    "deserialize_student",
    "serialize_mark",
    "deserialize_mark",
]
