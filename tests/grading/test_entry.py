"""
Unit Tests for Mark Entry
"""

import logging
from dataclasses import replace

import pytest

from marksheet_toolkit.core.models import Student
from marksheet_toolkit.grading.catalog import ICT
from marksheet_toolkit.grading.entry import MarkEntryError, checked_total, regrade, score_mark


class TestScoreMark:

    def test_score_when_components_valid_then_total_and_grade(self, junior_student):
        mark = score_mark(junior_student, "Mathematics", "Yearly", theory=55, mcq=25)
        assert mark.total == 80
        assert mark.grade == "A+"
        assert mark.grade_point == 5.0
        assert mark.section == "A"
        assert mark.class_level == 7

    def test_score_when_half_paper_then_graded_against_fifty(self, junior_student):
        mark = score_mark(junior_student, ICT, "Half-Yearly", theory=5, mcq=10, practical=15)
        assert mark.total == 30
        assert mark.grade == "A-"

    def test_score_when_component_over_maximum_then_raises(self, junior_student):
        with pytest.raises(MarkEntryError, match="exceeds maximum 30"):
            score_mark(junior_student, "Mathematics", "Yearly", theory=60, mcq=31)

    def test_score_when_practical_on_written_subject_then_raises(self, junior_student):
        with pytest.raises(MarkEntryError, match="practical"):
            score_mark(junior_student, "Mathematics", "Yearly", practical=5)

    def test_score_when_negative_then_raises(self, junior_student):
        with pytest.raises(MarkEntryError, match="cannot be negative"):
            score_mark(junior_student, "Mathematics", "Yearly", theory=-1)

    def test_score_when_student_unsaved_then_raises(self):
        unsaved = Student(id=None, name="New", roll=9, class_level=7, section="A")
        with pytest.raises(MarkEntryError, match="has not been saved"):
            score_mark(unsaved, "Mathematics", "Yearly", theory=10)

    def test_score_when_no_components_then_zero_fail(self, science_student):
        mark = score_mark(science_student, "Physics", "Yearly")
        assert mark.total == 0
        assert mark.grade == "F"
        assert mark.group == "Science"

    def test_mark_entry_error_when_raised_then_is_value_error(self):
        assert issubclass(MarkEntryError, ValueError)


class TestCheckedTotal:

    def test_checked_total_when_no_total_then_component_sum(self):
        assert checked_total(ICT, 6, theory=8, mcq=12, practical=20) == 40

    def test_checked_total_when_total_matches_components_then_returned(self):
        assert checked_total("Mathematics", 7, theory=55.5, mcq=24.5, total=80) == 80

    def test_checked_total_when_total_only_then_checked_against_subject_maximum(self):
        assert checked_total(ICT, 9, total=50) == 50
        with pytest.raises(MarkEntryError, match="exceeds maximum 50"):
            checked_total(ICT, 9, total=80)

    def test_checked_total_when_total_disagrees_then_raises(self):
        with pytest.raises(MarkEntryError, match="does not match components"):
            checked_total("Mathematics", 7, theory=10, mcq=5, total=90)

    def test_checked_total_when_total_negative_then_raises(self):
        with pytest.raises(MarkEntryError, match="cannot be negative"):
            checked_total("Mathematics", 7, total=-1)


class TestRegrade:

    def test_regrade_when_grade_stale_then_rederived_and_warns(self, junior_student, make_mark, caplog):
        stale = make_mark(junior_student, "Mathematics", "Yearly", 85)
        stale = replace(stale, grade="B", grade_point=3.0)

        with caplog.at_level(logging.WARNING):
            fixed = regrade(stale)

        assert (fixed.grade, fixed.grade_point) == ("A+", 5.0)
        assert "re-derived as A+" in caplog.text

    def test_regrade_when_consistent_then_no_warning(self, junior_student, make_mark, caplog):
        mark = make_mark(junior_student, "Mathematics", "Yearly", 45)
        with caplog.at_level(logging.WARNING):
            assert regrade(mark) == mark
        assert caplog.text == ""
