"""
Unit Tests for Schema Validation

Tests for the validator module.
"""

import pytest

from marksheet_toolkit.core.schemas.validator import (
    STORE_SCHEMA_VERSION,
    ValidationError,
    validate_mark,
    validate_store_document,
    validate_student,
)


class TestValidateStudent:
    """Tests for validate_student function."""

    def test_validate_when_complete_then_passes(self):
        validate_student({"name": "Rahim", "roll": 1, "class_level": 7, "section": "A"})

    @pytest.mark.parametrize("missing", ["name", "roll", "class_level"])
    def test_validate_when_required_missing_then_raises(self, missing):
        data = {"name": "Rahim", "roll": 1, "class_level": 7}
        data[missing] = None
        with pytest.raises(ValidationError, match="Missing required fields"):
            validate_student(data)

    def test_validate_when_roll_not_integer_then_raises_with_path(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_student({"name": "Rahim", "roll": "one", "class_level": 7})
        assert exc_info.value.path == "roll"


class TestValidateMark:
    """Tests for validate_mark function."""

    def test_validate_when_complete_then_passes(self):
        validate_mark({"student_id": 1, "subject": "Mathematics", "exam": "Yearly", "total": 50})

    def test_validate_when_subject_blank_then_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_mark({"student_id": 1, "subject": "", "exam": "Yearly"})
        assert "Missing field: subject" in exc_info.value.errors

    def test_validate_when_negative_component_then_raises(self):
        with pytest.raises(ValidationError, match="theory cannot be negative"):
            validate_mark({"student_id": 1, "subject": "Mathematics", "exam": "Yearly", "theory": -5})


class TestValidateStoreDocument:
    """Tests for full-document JSON Schema validation."""

    @pytest.fixture
    def valid_document(self) -> dict:
        return {
            "schema_version": STORE_SCHEMA_VERSION,
            "students": [
                {"id": 1, "name": "Rahim", "roll": 1, "class_level": 7, "section": "A", "group": None},
            ],
            "marks": [
                {
                    "id": 1, "student_id": 1, "subject": "Mathematics", "exam": "Yearly",
                    "class_level": 7, "section": "A", "group": None,
                    "theory": 60, "mcq": 20, "practical": None,
                    "total": 80, "grade": "A+", "grade_point": 5.0,
                },
            ],
        }

    def test_validate_when_valid_then_passes(self, valid_document):
        validate_store_document(valid_document)

    def test_validate_when_empty_store_then_passes(self):
        validate_store_document({"schema_version": STORE_SCHEMA_VERSION, "students": [], "marks": []})

    def test_validate_when_wrong_version_then_raises(self, valid_document):
        valid_document["schema_version"] = 99
        with pytest.raises(ValidationError):
            validate_store_document(valid_document)

    def test_validate_when_class_out_of_range_then_reports_path(self, valid_document):
        valid_document["students"][0]["class_level"] = 12
        with pytest.raises(ValidationError) as exc_info:
            validate_store_document(valid_document)
        assert exc_info.value.path == "students/0/class_level"

    def test_validate_when_several_errors_then_collects_all(self, valid_document):
        valid_document["students"][0]["roll"] = 0
        valid_document["marks"][0]["grade_point"] = 7
        with pytest.raises(ValidationError) as exc_info:
            validate_store_document(valid_document)
        assert len(exc_info.value.errors) == 2
