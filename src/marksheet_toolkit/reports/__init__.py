"""
Module: reports

Purpose:
    Printable PDF reports: per-student marksheets, combined final
    transcripts and the cohort tabulation sheet.
"""

from .config import ReportConfig, load_report_config
from .models import TableLayout, TablePage
from .paginator import paginate_rows
from .renderer import render_final_results, render_marksheets, render_tabulation

__all__ = [
    "ReportConfig",
    "load_report_config",
    "TableLayout",
    "TablePage",
    "paginate_rows",
    "render_marksheets",
    "render_final_results",
    "render_tabulation",
]
