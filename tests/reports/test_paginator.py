"""
Unit Tests for Table Pagination
"""

import pytest

from marksheet_toolkit.reports.paginator import paginate_rows


class TestPaginateRows:
    """Tests for paginate_rows function."""

    def test_paginate_when_twenty_seven_rows_then_three_pages(self):
        layout = paginate_rows(list(range(27)), 13)

        assert layout.page_count == 3
        assert [p.row_count for p in layout.pages] == [13, 13, 1]
        assert layout.row_count == 27

    def test_paginate_when_pages_then_first_row_numbers_continue(self):
        layout = paginate_rows(list(range(27)), 13)
        assert [p.first_row_number for p in layout.pages] == [1, 14, 27]
        assert [p.number for p in layout.pages] == [1, 2, 3]

    def test_paginate_when_pages_then_only_last_flagged(self):
        layout = paginate_rows(list(range(30)), 13)
        assert [p.is_last for p in layout.pages] == [False, False, True]

    def test_paginate_when_exact_multiple_then_no_empty_page(self):
        layout = paginate_rows(list(range(26)), 13)
        assert layout.page_count == 2
        assert layout.pages[-1].row_count == 13

    def test_paginate_when_fewer_than_page_then_single_last_page(self):
        layout = paginate_rows(["a", "b"], 13)
        assert layout.page_count == 1
        assert layout.pages[0].rows == ("a", "b")
        assert layout.pages[0].is_last

    def test_paginate_when_empty_then_one_empty_page_with_warning(self):
        layout = paginate_rows([], 13)
        assert layout.page_count == 1
        assert layout.pages[0].rows == ()
        assert layout.warnings

    def test_paginate_when_rows_per_page_invalid_then_raises(self):
        with pytest.raises(ValueError):
            paginate_rows([1], 0)

    def test_paginate_when_rows_then_order_preserved(self):
        rows = list(range(40))
        layout = paginate_rows(rows, 13)
        flattened = [r for page in layout.pages for r in page.rows]
        assert flattened == rows
