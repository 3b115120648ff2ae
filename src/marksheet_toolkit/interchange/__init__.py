"""Spreadsheet import/export of the roster and marks."""

from .workbook import (
    ImportSummary,
    WorkbookError,
    export_workbook,
    import_workbook,
)

__all__ = [
    "ImportSummary",
    "WorkbookError",
    "export_workbook",
    "import_workbook",
]
