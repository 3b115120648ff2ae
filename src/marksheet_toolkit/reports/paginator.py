"""
Module: reports.paginator

Purpose:
    Split table rows into fixed-size pages.

Key Functions:
    - paginate_rows(): Rows -> TableLayout

Used By:
    - reports.renderer: Tabulation sheet
"""

from __future__ import annotations

import logging
from typing import Sequence, TypeVar

from .models import TableLayout, TablePage

logger = logging.getLogger(__name__)

Row = TypeVar("Row")


def paginate_rows(rows: Sequence[Row], rows_per_page: int) -> TableLayout[Row]:
    """
    Arrange rows onto pages of at most ``rows_per_page``.

    An empty table still gets one (empty, last) page so the header and
    summary are printed.

    Args:
        rows: Rows in print order
        rows_per_page: Page capacity

    Returns:
        TableLayout

    Raises:
        ValueError: If rows_per_page is not positive
    """
    if rows_per_page <= 0:
        raise ValueError(f"rows_per_page must be positive: {rows_per_page}")

    if not rows:
        return TableLayout(
            pages=(TablePage(index=0, rows=(), first_row_number=1, is_last=True),),
            warnings=["No rows to paginate"],
        )

    starts = range(0, len(rows), rows_per_page)
    last = len(starts) - 1
    pages = tuple(
        TablePage(
            index=i,
            rows=tuple(rows[start:start + rows_per_page]),
            first_row_number=start + 1,
            is_last=(i == last),
        )
        for i, start in enumerate(starts)
    )
    logger.debug(f"Paginated {len(rows)} rows onto {len(pages)} pages")
    return TableLayout(pages=pages)
