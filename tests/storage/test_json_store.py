"""
Unit Tests for JsonFileStore

Uses real files under tmp_path; portalocker is exercised for real.
"""

import json

import pytest

from marksheet_toolkit.core.models import Student
from marksheet_toolkit.storage import DuplicateRollError, JsonFileStore, StoreError


@pytest.fixture
def store(tmp_path):
    return JsonFileStore(tmp_path / "school.json")


def _new(roll=1, section="A"):
    return Student(id=None, name=f"Student {roll}", roll=roll, class_level=7, section=section)


class TestJsonFileStore:

    # ─────────────────────────────────────────────────────────────────────────
    # Persistence Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_list_when_file_missing_then_empty(self, store):
        assert store.list_students() == []
        assert not store.path.exists()

    def test_add_when_called_then_file_written_with_schema_version(self, store):
        store.add_student(_new())
        document = json.loads(store.path.read_text(encoding="utf-8"))
        assert document["schema_version"] == 1
        assert document["students"][0]["name"] == "Student 1"
        assert document["marks"] == []

    def test_reopen_when_records_written_then_round_trips(self, store, make_mark):
        student = store.add_student(_new())
        store.upsert_mark(make_mark(student, "Mathematics", "Yearly", 66))

        reopened = JsonFileStore(store.path)
        assert reopened.get_student(student.id) == student
        marks = reopened.list_marks(student_id=student.id)
        assert len(marks) == 1
        assert marks[0].total == 66
        assert marks[0].grade == "A-"

    def test_delete_student_when_marks_exist_then_cascades_on_disk(self, store, make_mark):
        student = store.add_student(_new())
        store.upsert_mark(make_mark(student, "Mathematics", "Yearly", 66))

        store.delete_student(student.id)

        document = json.loads(store.path.read_text(encoding="utf-8"))
        assert document["students"] == []
        assert document["marks"] == []

    # ─────────────────────────────────────────────────────────────────────────
    # Error Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_add_when_duplicate_roll_then_raises_and_file_unchanged(self, store):
        store.add_student(_new(roll=2))
        before = store.path.read_text(encoding="utf-8")

        with pytest.raises(DuplicateRollError):
            store.add_student(_new(roll=2))

        assert store.path.read_text(encoding="utf-8") == before

    def test_read_when_file_corrupted_then_store_error(self, store):
        store.path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreError, match="corrupted"):
            store.list_students()

    def test_read_when_schema_invalid_then_store_error(self, store):
        store.path.write_text(json.dumps({"schema_version": 1, "students": [{"id": 1}], "marks": []}))
        with pytest.raises(StoreError, match="Invalid store file"):
            store.list_students()

    # ─────────────────────────────────────────────────────────────────────────
    # Batch Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_apply_when_several_changes_then_single_write(self, store):
        def load(target):
            for roll in range(1, 6):
                target.add_student(_new(roll=roll))
            return len(target.list_students())

        assert store.apply(load) == 5
        assert len(JsonFileStore(store.path).list_students()) == 5

    def test_apply_when_operation_raises_then_nothing_written(self, store):
        store.add_student(_new(roll=1))

        def load(target):
            target.add_student(_new(roll=2))
            target.add_student(_new(roll=1))

        with pytest.raises(DuplicateRollError):
            store.apply(load)
        assert [s.roll for s in store.list_students()] == [1]
