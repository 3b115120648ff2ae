"""
Unit Tests for Ranking and Tabulation
"""

from marksheet_toolkit.core.models import Student
from marksheet_toolkit.grading.gpa import YEARLY, build_exam_result, combine_exams
from marksheet_toolkit.grading.ranking import (
    RankEntry,
    rank,
    rank_exam_results,
    rank_final_results,
    tabulate,
)


def _student(sid: int, roll: int) -> Student:
    return Student(id=sid, name=f"Student {roll}", roll=roll, class_level=7, section="A")


class TestRank:

    def test_rank_when_totals_differ_then_descending(self):
        positions = rank([RankEntry(1, 450), RankEntry(2, 610), RankEntry(3, 520)])
        assert positions == {2: 1, 3: 2, 1: 3}

    def test_rank_when_zero_total_then_excluded(self):
        positions = rank([RankEntry(1, 450), RankEntry(2, 0), RankEntry(3, 610)])
        assert positions == {3: 1, 1: 2}

    def test_rank_when_totals_tie_then_higher_gpa_first(self):
        positions = rank([RankEntry(1, 500, 3.5), RankEntry(2, 500, 4.0)])
        assert positions == {2: 1, 1: 2}

    def test_rank_when_total_and_gpa_tie_then_lower_roll_first(self):
        positions = rank([RankEntry(7, 500, 4.0, roll=9), RankEntry(8, 500, 4.0, roll=2)])
        assert positions == {8: 1, 7: 2}

    def test_rank_when_positions_then_contiguous_from_one(self):
        positions = rank(RankEntry(i, 100 + i) for i in range(1, 21))
        assert sorted(positions.values()) == list(range(1, 21))

    def test_rank_when_empty_then_empty(self):
        assert rank([]) == {}


class TestRankResults:

    def test_rank_exam_results_when_cohort_then_rank_and_size(self, make_mark):
        a, b, c = _student(1, 1), _student(2, 2), _student(3, 3)
        marks = [
            make_mark(a, "Mathematics", YEARLY, 60),
            make_mark(b, "Mathematics", YEARLY, 90),
        ]
        results = rank_exam_results([build_exam_result(s, YEARLY, marks) for s in (a, b, c)])

        assert [r.rank for r in results] == [2, 1, None]
        assert all(r.cohort_size == 2 for r in results)

    def test_rank_final_results_when_grand_totals_then_merit_order(self, make_mark):
        a, b = _student(1, 1), _student(2, 2)
        first = [make_mark(a, "Mathematics", "Half-Yearly", 50), make_mark(b, "Mathematics", "Half-Yearly", 40)]
        second = [make_mark(a, "Mathematics", YEARLY, 40), make_mark(b, "Mathematics", YEARLY, 70)]

        finals = rank_final_results([combine_exams(s, first, second) for s in (a, b)])

        assert finals[0].rank == 2  # 90 total
        assert finals[1].rank == 1  # 110 total


class TestTabulate:

    def test_tabulate_when_students_unsorted_then_rows_by_roll(self, make_mark):
        students = [_student(1, 5), _student(2, 1), _student(3, 3)]
        tab = tabulate(students, YEARLY, [])
        assert [r.student.roll for r in tab.rows] == [1, 3, 5]
        assert tab.class_level == 7
        assert tab.cohort == "A"
        assert len(tab.subjects) == 12

    def test_tabulate_when_subject_missing_then_overall_fail(self, make_mark):
        s = _student(1, 1)
        marks = [make_mark(s, "Mathematics", YEARLY, 95)]
        row = tabulate([s], YEARLY, marks).rows[0]

        assert row.total == 95
        assert row.letter == "F"
        assert row.position == 1

    def test_tabulate_when_no_marks_then_unranked(self):
        row = tabulate([_student(1, 1)], YEARLY, []).rows[0]
        assert row.total == 0
        assert row.position is None

    def test_tabulate_when_other_exam_marks_then_ignored(self, make_mark):
        s = _student(1, 1)
        row = tabulate([s], YEARLY, [make_mark(s, "Mathematics", "Half-Yearly", 95)]).rows[0]
        assert row.total == 0

    def test_tabulate_when_cohort_given_then_group_subjects(self):
        s = Student(id=1, name="Karim", roll=1, class_level=10, group="Business Studies")
        tab = tabulate([s], YEARLY, [], class_level=10, cohort="Business Studies")
        assert tab.subjects[-1] == "Business Entrepreneurship"

    def test_tabulate_when_totals_tie_then_positions_match_section_ranks(self, make_mark):
        a, b = _student(1, 1), _student(2, 2)
        marks = [
            make_mark(a, "Mathematics", YEARLY, 60),
            make_mark(a, "English 1st Paper", YEARLY, 40),
            make_mark(b, "Mathematics", YEARLY, 100),
        ]

        section = rank_exam_results([build_exam_result(s, YEARLY, marks) for s in (a, b)])
        tab = tabulate([a, b], YEARLY, marks)

        assert {r.student.id: r.rank for r in section} == {1: 1, 2: 2}
        assert {r.student.id: r.position for r in tab.rows} == {1: 1, 2: 2}
