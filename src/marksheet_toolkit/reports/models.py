"""
Module: reports.models

Purpose:
    Page layout models for tabular reports.

Key Classes:
    - TablePage: Rows placed on one page
    - TableLayout: All pages of a table

Used By:
    - reports.paginator: Creates them
    - reports.renderer: Draws them
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

Row = TypeVar("Row")


@dataclass(frozen=True)
class TablePage(Generic[Row]):
    """
    Rows laid out on a single page.

    Attributes:
        index: Page number (0-indexed)
        rows: Rows on this page
        first_row_number: 1-based serial number of the first row
        is_last: Whether this is the final page (summary goes here)
    """
    index: int
    rows: tuple[Row, ...]
    first_row_number: int
    is_last: bool = False

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def number(self) -> int:
        """1-based page number for "PAGE i OF n"."""
        return self.index + 1


@dataclass(frozen=True)
class TableLayout(Generic[Row]):
    """
    Paginated table.

    Example:
        >>> layout = paginate_rows(rows, 13)
        >>> layout.page_count
        3
    """
    pages: tuple[TablePage[Row], ...]
    warnings: list[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def row_count(self) -> int:
        return sum(p.row_count for p in self.pages)
