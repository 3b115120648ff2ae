"""
Module: grading

Purpose:
    The grading engine: pure functions turning stored marks into grades,
    GPAs, combined final results and cohort positions. Never touches a
    store.

Key Functions:
    - subjects_for() / marking_scheme_for(): Subject catalog and schemes
    - grade() / letter_for_grade_point(): The grading table
    - checked_total(): Score checks against the marking scheme
    - score_mark(): Component scores -> Mark
    - exam_gpa() / build_exam_result() / combine_exams(): GPA aggregation
    - rank() / tabulate(): Positions and tabulation grid

Used By:
    - controller: Report pipelines
    - interchange.workbook: Grade re-derivation on import
    - cli
"""

from .catalog import (
    GROUPS,
    SECTIONS,
    subjects_for,
    groups_for,
    sections_for,
    short_subject_name,
)
from .scheme import MarkingScheme, marking_scheme_for, total_possible
from .grades import GRADE_TABLE, grade, letter_for_grade_point, percentage
from .entry import MarkEntryError, checked_total, score_mark, regrade
from .gpa import (
    HALF_YEARLY,
    YEARLY,
    FINAL_EXAMS,
    exam_gpa,
    complete_marks,
    build_exam_result,
    combine_exams,
)
from .ranking import RankEntry, rank, rank_exam_results, rank_final_results, tabulate

__all__ = [
    # Catalog
    "GROUPS",
    "SECTIONS",
    "subjects_for",
    "groups_for",
    "sections_for",
    "short_subject_name",
    # Schemes
    "MarkingScheme",
    "marking_scheme_for",
    "total_possible",
    # Grades
    "GRADE_TABLE",
    "grade",
    "letter_for_grade_point",
    "percentage",
    # Entry
    "MarkEntryError",
    "checked_total",
    "score_mark",
    "regrade",
    # GPA
    "HALF_YEARLY",
    "YEARLY",
    "FINAL_EXAMS",
    "exam_gpa",
    "complete_marks",
    "build_exam_result",
    "combine_exams",
    # Ranking
    "RankEntry",
    "rank",
    "rank_exam_results",
    "rank_final_results",
    "tabulate",
]
