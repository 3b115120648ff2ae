"""
Unit Tests for Marking Schemes
"""

import pytest

from marksheet_toolkit.grading.catalog import ICT, subjects_for
from marksheet_toolkit.grading.scheme import (
    DEFAULT_SCHEME,
    MarkingScheme,
    marking_scheme_for,
    total_possible,
)


class TestMarkingScheme:

    def test_init_when_components_do_not_sum_then_raises(self):
        with pytest.raises(ValueError):
            MarkingScheme(written=70, mcq=20, practical=0, total=100)

    def test_component_max_when_theory_then_written(self):
        assert DEFAULT_SCHEME.component_max("theory") == 70
        assert DEFAULT_SCHEME.component_max("mcq") == 30
        assert DEFAULT_SCHEME.component_max("practical") == 0


class TestMarkingSchemeFor:

    @pytest.mark.parametrize("class_level", [6, 7, 8, 9, 10])
    def test_scheme_when_ict_then_fifty_marks_every_class(self, class_level):
        scheme = marking_scheme_for(ICT, class_level)
        assert (scheme.written, scheme.mcq, scheme.practical, scheme.total) == (10, 15, 25, 50)

    def test_scheme_when_junior_half_papers_then_fifty_marks(self):
        assert marking_scheme_for("Bangla 2nd Paper", 7).total == 50
        assert marking_scheme_for("English 2nd Paper", 8).mcq == 0

    def test_scheme_when_secondary_english_then_written_only(self):
        scheme = marking_scheme_for("English 1st Paper", 10)
        assert (scheme.written, scheme.mcq, scheme.total) == (100, 0, 100)

    def test_scheme_when_secondary_science_then_practical_component(self):
        scheme = marking_scheme_for("Physics", 9)
        assert (scheme.written, scheme.mcq, scheme.practical) == (50, 25, 25)

    def test_scheme_when_unknown_subject_then_default(self):
        assert marking_scheme_for("Astronomy", 7) == DEFAULT_SCHEME
        assert marking_scheme_for("Astronomy", 9) == DEFAULT_SCHEME

    def test_scheme_when_same_subject_different_band_then_differs(self):
        assert marking_scheme_for("Bangla 2nd Paper", 7).total == 50
        assert marking_scheme_for("Bangla 2nd Paper", 9).total == 100


class TestTotalPossible:

    def test_total_when_junior_subjects_then_sums_schemes(self):
        # 9 x 100 + ICT 50 + two 50-mark second papers
        assert total_possible(subjects_for(7), 7) == 1050

    def test_total_when_empty_then_zero(self):
        assert total_possible([], 9) == 0
