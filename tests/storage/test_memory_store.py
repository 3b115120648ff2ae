"""
Unit Tests for InMemoryStore and StudentFilter
"""

import pytest

from marksheet_toolkit.core.models import Student
from marksheet_toolkit.storage import DuplicateRollError, InMemoryStore, StoreError, StudentFilter


def _new(name="Rahim", roll=1, class_level=7, section="A", group=None):
    return Student(id=None, name=name, roll=roll, class_level=class_level, section=section, group=group)


class TestStudents:

    # ─────────────────────────────────────────────────────────────────────────
    # Insert / Duplicate Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_add_when_new_then_assigns_sequential_ids(self, memory_store):
        a = memory_store.add_student(_new(roll=1))
        b = memory_store.add_student(_new(roll=2))
        assert (a.id, b.id) == (1, 2)

    def test_add_when_roll_taken_in_cohort_then_raises(self, memory_store):
        memory_store.add_student(_new(roll=4))
        with pytest.raises(DuplicateRollError, match="roll 4 already exists in class 7 section A"):
            memory_store.add_student(_new(name="Other", roll=4))

    def test_add_when_same_roll_other_section_then_allowed(self, memory_store):
        memory_store.add_student(_new(roll=4, section="A"))
        memory_store.add_student(_new(roll=4, section="B"))
        assert len(memory_store.list_students()) == 2

    def test_add_when_same_roll_other_group_then_allowed(self, memory_store):
        memory_store.add_student(_new(roll=1, class_level=9, section=None, group="Science"))
        memory_store.add_student(_new(roll=1, class_level=9, section=None, group="Humanities"))
        assert len(memory_store.list_students(class_level=9)) == 2

    # ─────────────────────────────────────────────────────────────────────────
    # Update / Upsert Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_update_when_unknown_id_then_raises(self, memory_store):
        with pytest.raises(StoreError, match="Unknown student id"):
            memory_store.update_student(Student(id=42, name="X", roll=1, class_level=7, section="A"))

    def test_update_when_roll_collides_then_raises(self, memory_store):
        memory_store.add_student(_new(roll=1))
        b = memory_store.add_student(_new(roll=2))
        with pytest.raises(DuplicateRollError):
            memory_store.update_student(Student(id=b.id, name="B", roll=1, class_level=7, section="A"))

    def test_upsert_when_roll_exists_then_updates_in_place(self, memory_store):
        original = memory_store.add_student(_new(name="Old Name", roll=3))
        updated = memory_store.upsert_student(_new(name="New Name", roll=3))
        assert updated.id == original.id
        assert memory_store.get_student(original.id).name == "New Name"
        assert len(memory_store.list_students()) == 1

    def test_upsert_when_new_roll_then_inserts(self, memory_store):
        memory_store.upsert_student(_new(roll=3))
        memory_store.upsert_student(_new(roll=4))
        assert len(memory_store.list_students()) == 2

    # ─────────────────────────────────────────────────────────────────────────
    # Query Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_list_when_cohort_given_then_sorted_by_roll(self, memory_store):
        for roll in (5, 2, 9):
            memory_store.add_student(_new(roll=roll))
        memory_store.add_student(_new(roll=1, section="B"))
        rolls = [s.roll for s in memory_store.list_students(class_level=7, cohort="A")]
        assert rolls == [2, 5, 9]

    def test_find_when_present_then_returns_student(self, memory_store):
        memory_store.add_student(_new(roll=5))
        assert memory_store.find_student(7, "A", 5).roll == 5
        assert memory_store.find_student(7, "B", 5) is None


class TestMarks:

    def test_upsert_when_student_unknown_then_raises(self, memory_store, junior_student, make_mark):
        with pytest.raises(StoreError, match="unknown student"):
            memory_store.upsert_mark(make_mark(junior_student, "Mathematics", "Yearly", 50))

    def test_upsert_when_same_key_then_replaces(self, memory_store, make_mark):
        student = memory_store.add_student(_new())
        first = memory_store.upsert_mark(make_mark(student, "Mathematics", "Yearly", 50))
        second = memory_store.upsert_mark(make_mark(student, "Mathematics", "Yearly", 75))

        assert second.id == first.id
        marks = memory_store.list_marks(student_id=student.id)
        assert [m.total for m in marks] == [75]

    def test_upsert_when_other_exam_then_separate_mark(self, memory_store, make_mark):
        student = memory_store.add_student(_new())
        memory_store.upsert_mark(make_mark(student, "Mathematics", "Yearly", 50))
        memory_store.upsert_mark(make_mark(student, "Mathematics", "Half-Yearly", 60))
        assert len(memory_store.list_marks(subject="Mathematics")) == 2

    def test_delete_student_when_marks_exist_then_cascades(self, memory_store, make_mark):
        keep = memory_store.add_student(_new(roll=1))
        drop = memory_store.add_student(_new(roll=2))
        memory_store.upsert_mark(make_mark(keep, "Mathematics", "Yearly", 50))
        memory_store.upsert_mark(make_mark(drop, "Mathematics", "Yearly", 50))

        memory_store.delete_student(drop.id)

        assert memory_store.get_student(drop.id) is None
        assert [m.student_id for m in memory_store.list_marks()] == [keep.id]

    def test_delete_mark_when_unknown_then_raises(self, memory_store):
        with pytest.raises(StoreError):
            memory_store.delete_mark(99)

    def test_marks_for_students_when_exam_given_then_filtered(self, memory_store, make_mark):
        a = memory_store.add_student(_new(roll=1))
        b = memory_store.add_student(_new(roll=2))
        memory_store.upsert_mark(make_mark(a, "Mathematics", "Yearly", 50))
        memory_store.upsert_mark(make_mark(a, "Agriculture", "Half-Yearly", 50))
        memory_store.upsert_mark(make_mark(b, "Mathematics", "Yearly", 50))

        marks = memory_store.marks_for_students([a], exam="Yearly")
        assert [(m.student_id, m.subject) for m in marks] == [(a.id, "Mathematics")]


class TestStudentFilter:

    @pytest.fixture
    def roster(self):
        return [
            Student(1, "Rahim Uddin", 12, 7, section="A"),
            Student(2, "Karim", 3, 7, section="B"),
            Student(3, "Abdur Rahman", 1, 9, group="Science"),
        ]

    def test_filter_when_name_substring_then_case_insensitive(self, roster):
        names = [s.name for s in StudentFilter(name="RAH").apply(roster)]
        assert names == ["Abdur Rahman", "Rahim Uddin"]

    def test_filter_when_roll_substring_then_matches_digits(self, roster):
        assert [s.id for s in StudentFilter(roll="1").apply(roster)] == [3, 1]

    def test_filter_when_class_and_section_then_exact(self, roster):
        assert [s.id for s in StudentFilter(class_level=7, section="B").apply(roster)] == [2]

    def test_filter_when_group_then_exact(self, roster):
        assert [s.id for s in StudentFilter(group="Science").apply(roster)] == [3]

    def test_filter_when_store_then_uses_list(self, roster):
        store = InMemoryStore(roster)
        assert len(store.filter_students(StudentFilter())) == 3
