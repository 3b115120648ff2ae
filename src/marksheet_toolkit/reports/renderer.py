"""
Module: reports.renderer

Purpose:
    Render results to PDF using ReportLab.
    - Marksheets: portrait A4, one page per student
    - Final results: portrait A4, one page per student, both exams side
      by side with the combined grade
    - Tabulation: landscape A4, fixed rows per page, summary and
      signature lines on the last page only

Key Functions:
    - render_marksheets(): ExamResults -> PDF
    - render_final_results(): FinalResults -> PDF
    - render_tabulation(): TabulationResult -> PDF

Dependencies:
    - reportlab: PDF generation
    - PIL: Logo loading
    - reports.paginator: Tabulation pages

Used By:
    - controller: Report pipelines
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from PIL import Image
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from marksheet_toolkit.core.models import (
    ExamResult,
    FinalResult,
    Mark,
    TabulationResult,
    TabulationRow,
    uses_groups,
)
from marksheet_toolkit.grading.catalog import short_subject_name
from marksheet_toolkit.grading.grades import grading_scale_lines
from marksheet_toolkit.grading.scheme import marking_scheme_for

from .config import ReportConfig
from .models import TablePage
from .paginator import paginate_rows

logger = logging.getLogger(__name__)

# Constants
PORTRAIT = A4
LANDSCAPE = landscape(A4)
MARGIN = 40
TAB_MARGIN = 28
ROW_HEIGHT = 18
TAB_ROW_HEIGHT = 17
FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FOOTER_FONT_SIZE = 7
LOGO_SIZE = 48


def _get_footer_text() -> str:
    """Get footer text with current version number."""
    from marksheet_toolkit import __version__
    return f"Generated with Marksheet Toolkit v{__version__}"


# ─────────────────────────────────────────────────────────────────────────────
# Drawing primitives
# ─────────────────────────────────────────────────────────────────────────────

def _fmt(value: Optional[float]) -> str:
    """Marks without trailing zeros; blank component as '-'."""
    if value is None:
        return "-"
    return f"{value:g}"


def _draw_logo(c: canvas.Canvas, logo_path: Path, x: float, y: float) -> None:
    if not logo_path.exists():
        logger.warning(f"Logo not found: {logo_path}")
        return
    with Image.open(logo_path) as img:
        img.load()
        reader = ImageReader(img.convert("RGB"))
    c.drawImage(reader, x, y, width=LOGO_SIZE, height=LOGO_SIZE, preserveAspectRatio=True)


def _draw_school_header(
    c: canvas.Canvas,
    config: ReportConfig,
    title: str,
    subtitle: str,
    page_width: float,
    top: float,
) -> float:
    """
    Draw school name, address and a boxed title.

    Returns:
        Y coordinate just below the header
    """
    center = page_width / 2

    if config.logo_path is not None:
        _draw_logo(c, config.logo_path, MARGIN, top - LOGO_SIZE + 6)

    c.setFont(FONT_BOLD, 18)
    c.drawCentredString(center, top - 6, config.school_name)
    c.setFont(FONT, 11)
    c.drawCentredString(center, top - 22, config.address)

    box_width = max(c.stringWidth(title, FONT_BOLD, 13), c.stringWidth(subtitle, FONT, 10)) + 30
    box_top = top - 32
    c.setLineWidth(1)
    c.rect(center - box_width / 2, box_top - 34, box_width, 34)
    c.setFont(FONT_BOLD, 13)
    c.drawCentredString(center, box_top - 15, title)
    c.setFont(FONT, 10)
    c.drawCentredString(center, box_top - 28, subtitle)

    c.setLineWidth(1.5)
    c.line(MARGIN, box_top - 42, page_width - MARGIN, box_top - 42)
    return box_top - 52


def _draw_table(
    c: canvas.Canvas,
    x: float,
    y: float,
    widths: Sequence[float],
    header: Sequence[str],
    rows: Sequence[Sequence[str]],
    *,
    row_height: float = ROW_HEIGHT,
    font_size: float = 9,
    align_left: Sequence[int] = (),
    bold_last_row: bool = False,
) -> float:
    """
    Draw a ruled table whose top-left corner is (x, y).

    Args:
        align_left: Column indices drawn left-aligned (others centred)

    Returns:
        Y coordinate of the table's bottom edge
    """
    all_rows = [list(header), *[list(r) for r in rows]]
    total_width = sum(widths)

    for r, cells in enumerate(all_rows):
        top = y - r * row_height
        is_header = r == 0
        if is_header:
            c.setFillColorRGB(0.9, 0.9, 0.9)
            c.rect(x, top - row_height, total_width, row_height, stroke=0, fill=1)
            c.setFillColorRGB(0, 0, 0)

        bold = is_header or (bold_last_row and r == len(all_rows) - 1)
        c.setFont(FONT_BOLD if bold else FONT, font_size)

        left = x
        for col, (text, width) in enumerate(zip(cells, widths)):
            baseline = top - row_height + (row_height - font_size) / 2 + 2
            if col in align_left:
                c.drawString(left + 3, baseline, text)
            else:
                c.drawCentredString(left + width / 2, baseline, text)
            left += width

    # Grid
    bottom = y - len(all_rows) * row_height
    c.setLineWidth(0.5)
    for r in range(len(all_rows) + 1):
        c.line(x, y - r * row_height, x + total_width, y - r * row_height)
    left = x
    for width in [0, *widths]:
        left += width
        c.line(left, y, left, bottom)
    return bottom


def _draw_lines(
    c: canvas.Canvas,
    x: float,
    y: float,
    title: str,
    lines: Sequence[str],
    *,
    font_size: float = 9,
) -> float:
    """Heading plus a stack of text lines. Returns the Y below them."""
    c.setFont(FONT_BOLD, font_size + 1)
    c.drawString(x, y, title)
    c.setFont(FONT, font_size)
    for i, line in enumerate(lines, start=1):
        c.drawString(x, y - i * (font_size + 3), line)
    return y - (len(lines) + 1) * (font_size + 3)


def _draw_signatures(
    c: canvas.Canvas,
    labels: Sequence[str],
    page_width: float,
    margin: float,
    y: float,
) -> None:
    slot = (page_width - 2 * margin) / len(labels)
    c.setLineWidth(0.5)
    for i, label in enumerate(labels):
        center = margin + slot * i + slot / 2
        c.line(center - slot * 0.35, y, center + slot * 0.35, y)
        c.setFont(FONT_BOLD, 9)
        c.drawCentredString(center, y - 12, label)
        c.setFont(FONT, 8)
        c.drawCentredString(center, y - 23, "Signature & Date")


def _draw_footer(c: canvas.Canvas, page_width: float) -> None:
    """Centred grey footer, 15pt from the bottom of the page."""
    footer_text = _get_footer_text()

    c.saveState()
    c.setFont(FONT, FOOTER_FONT_SIZE)
    c.setFillColorRGB(0.4, 0.4, 0.4)
    c.drawCentredString(page_width / 2, 15, footer_text)
    c.restoreState()


def _student_block(c: canvas.Canvas, y: float, pairs: Sequence[tuple[str, str]], page_width: float) -> float:
    """Two-column label/value block. Returns the Y below it."""
    half = (page_width - 2 * MARGIN) / 2
    for i, (label, value) in enumerate(pairs):
        x = MARGIN + (i % 2) * half
        row_y = y - (i // 2) * 15
        c.setFont(FONT_BOLD, 10)
        c.drawString(x, row_y, f"{label}:")
        c.setFont(FONT, 10)
        c.drawString(x + 95, row_y, value)
    return y - ((len(pairs) + 1) // 2) * 15 - 8


def _cohort_label(class_level: int, cohort: str) -> str:
    kind = "Group" if uses_groups(class_level) else "Section"
    return f"{kind}: {cohort}"


# ─────────────────────────────────────────────────────────────────────────────
# Marksheets
# ─────────────────────────────────────────────────────────────────────────────

def _marksheet_rows(marks: Sequence[Mark], class_level: int) -> list[list[str]]:
    rows = []
    for mark in marks:
        scheme = marking_scheme_for(mark.subject, class_level)
        rows.append([
            mark.subject,
            str(scheme.total),
            _fmt(mark.theory),
            _fmt(mark.mcq),
            _fmt(mark.practical),
            _fmt(mark.total),
            mark.grade,
            f"{mark.grade_point:.2f}",
        ])
    return rows


def _render_marksheet_page(c: canvas.Canvas, result: ExamResult, config: ReportConfig) -> None:
    page_width, page_height = PORTRAIT
    student = result.student

    y = _draw_school_header(
        c, config, "ACADEMIC TRANSCRIPT", f"{result.exam} Examination", page_width, page_height - MARGIN
    )

    position = f"{result.rank} of {result.cohort_size}" if result.rank else "-"
    y = _student_block(c, y, [
        ("Name", student.name),
        ("Roll", str(student.roll)),
        ("Class", str(student.class_level)),
        (student.cohort_kind.title(), student.cohort),
        ("Examination", result.exam),
        ("Position", position),
    ], page_width)

    widths = [185, 45, 48, 40, 50, 45, 42, 60]
    header = ["Subject", "Full", "Written", "MCQ", "Practical", "Total", "Grade", "Point"]
    rows = _marksheet_rows(result.marks, student.class_level)
    rows.append([
        "Total",
        f"{result.total_possible:g}",
        "", "", "",
        _fmt(result.total),
        result.letter,
        f"{result.gpa:.2f}",
    ])
    y = _draw_table(c, MARGIN, y, widths, header, rows, align_left=(0,), bold_last_row=True)

    y -= 24
    c.setFont(FONT_BOLD, 11)
    c.drawString(MARGIN, y, f"GPA: {result.gpa:.2f}")
    c.drawString(MARGIN + 130, y, f"Grade: {result.letter}")
    c.drawString(MARGIN + 260, y, f"Result: {'PASSED' if result.passed else 'FAILED'}")

    _draw_lines(c, MARGIN, y - 28, "GRADING SCALE", grading_scale_lines(), font_size=8)
    _draw_signatures(
        c, ["Class Teacher", "Headmaster"], page_width, MARGIN, 90,
    )
    if config.show_footer:
        _draw_footer(c, page_width)


def render_marksheets(
    results: Sequence[ExamResult],
    output_path: Path,
    config: Optional[ReportConfig] = None,
) -> int:
    """
    Render one portrait marksheet page per exam result.

    Args:
        results: Exam results, in print order
        output_path: Path to write PDF
        config: Report configuration (defaults if None)

    Returns:
        Number of pages written

    Example:
        >>> render_marksheets([result], Path("out/marksheet_Rahim_Yearly.pdf"))
        1
    """
    config = config or ReportConfig()
    if not results:
        logger.warning("No results, creating empty PDF")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    c = canvas.Canvas(str(output_path), pagesize=PORTRAIT)
    for result in results:
        _render_marksheet_page(c, result, config)
        c.showPage()
    c.save()

    logger.info(f"Rendered {len(results)} marksheet pages to {output_path}")
    return len(results)


# ─────────────────────────────────────────────────────────────────────────────
# Final results
# ─────────────────────────────────────────────────────────────────────────────

def _render_final_page(c: canvas.Canvas, result: FinalResult, config: ReportConfig) -> None:
    page_width, page_height = PORTRAIT
    student = result.student
    first_exam, second_exam = result.first.exam, result.second.exam

    y = _draw_school_header(
        c, config, "FINAL ACADEMIC TRANSCRIPT", f"{first_exam} & {second_exam} Examinations",
        page_width, page_height - MARGIN,
    )

    merit = f"{result.rank} of {result.cohort_size}" if result.rank else "-"
    y = _student_block(c, y, [
        ("Name", student.name),
        ("Roll", str(student.roll)),
        ("Class", str(student.class_level)),
        (student.cohort_kind.title(), student.cohort),
        ("Merit Position", merit),
        ("Result", "PASS" if result.passed else "FAIL"),
    ], page_width)

    widths = [150, 48, 42, 48, 42, 62, 60, 63]
    header = ["Subject", "HY Total", "HY GP", "Y Total", "Y GP", "Combined", "Comb. GP", "Grade"]
    rows = [
        [
            s.subject,
            _fmt(s.first.total),
            f"{s.first.grade_point:.2f}",
            _fmt(s.second.total),
            f"{s.second.grade_point:.2f}",
            _fmt(s.combined_total),
            f"{s.combined_grade_point:.2f}",
            s.letter,
        ]
        for s in result.subjects
    ]
    rows.append([
        "Total",
        _fmt(result.first.total),
        f"{result.first.gpa:.2f}",
        _fmt(result.second.total),
        f"{result.second.gpa:.2f}",
        _fmt(result.grand_total),
        f"{result.reported_gpa:.2f}",
        result.letter,
    ])
    y = _draw_table(c, MARGIN, y, widths, header, rows, align_left=(0,), bold_last_row=True)

    y -= 20
    summary = [
        f"Grand Total: {_fmt(result.grand_total)} / {result.total_possible:g}",
        f"{first_exam} GPA: {result.first.gpa:.2f}    {second_exam} GPA: {result.second.gpa:.2f}",
        f"Final GPA: {result.reported_gpa:.2f}    Final Grade: {result.letter}",
        f"Merit Position: {merit}",
    ]
    if result.has_failed_subject:
        summary.append("*Any subject fail = Final grade F")
    y = _draw_lines(c, MARGIN, y, "SUMMARY", summary)
    _draw_lines(c, MARGIN + 270, y + (len(summary) + 1) * 12, "GRADING SCALE", grading_scale_lines(), font_size=8)

    _draw_signatures(
        c, ["Class Teacher", "Headmaster"], page_width, MARGIN, 90,
    )
    if config.show_footer:
        _draw_footer(c, page_width)


def render_final_results(
    results: Sequence[FinalResult],
    output_path: Path,
    config: Optional[ReportConfig] = None,
) -> int:
    """
    Render one portrait final-result page per student.

    Returns:
        Number of pages written
    """
    config = config or ReportConfig()
    if not results:
        logger.warning("No final results, creating empty PDF")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    c = canvas.Canvas(str(output_path), pagesize=PORTRAIT)
    for result in results:
        _render_final_page(c, result, config)
        c.showPage()
    c.save()

    logger.info(f"Rendered {len(results)} final result pages to {output_path}")
    return len(results)


# ─────────────────────────────────────────────────────────────────────────────
# Tabulation
# ─────────────────────────────────────────────────────────────────────────────

def _tabulation_cells(row: TabulationRow, serial: int) -> list[str]:
    cells = [str(serial), str(row.student.roll), row.student.name]
    for mark in row.marks:
        cells.append(f"{mark.total:g} {mark.grade}" if mark.is_entered else "-")
    cells.extend([
        _fmt(row.total),
        row.letter,
        str(row.position) if row.position else "-",
    ])
    return cells


def _render_tabulation_page(
    c: canvas.Canvas,
    tabulation: TabulationResult,
    page: TablePage[TabulationRow],
    page_count: int,
    config: ReportConfig,
) -> None:
    page_width, page_height = LANDSCAPE

    subtitle = f"{tabulation.exam} Examination"
    if page_count > 1:
        subtitle += f" - PAGE {page.number} OF {page_count}"
    y = _draw_school_header(
        c,
        config,
        f"TABULATION SHEET - CLASS {tabulation.class_level} "
        f"({_cohort_label(tabulation.class_level, tabulation.cohort)})",
        subtitle,
        page_width,
        page_height - TAB_MARGIN,
    )

    fixed = [24, 32, 118]
    tail = [40, 36, 44]
    available = page_width - 2 * TAB_MARGIN - sum(fixed) - sum(tail)
    subject_width = available / max(1, len(tabulation.subjects))
    widths = [*fixed, *([subject_width] * len(tabulation.subjects)), *tail]
    header = [
        "SL", "Roll", "Student Name",
        *[short_subject_name(s) for s in tabulation.subjects],
        "Total", "Grade", "Position",
    ]
    rows = [
        _tabulation_cells(row, page.first_row_number + i)
        for i, row in enumerate(page.rows)
    ]
    y = _draw_table(
        c, TAB_MARGIN, y, widths, header, rows,
        row_height=TAB_ROW_HEIGHT, font_size=7, align_left=(2,),
    )

    if page.is_last:
        _draw_tabulation_summary(c, tabulation, y - 18, page_width)
        _draw_signatures(
            c,
            ["Class Teacher", "Headmaster", "Examination Controller"],
            page_width,
            TAB_MARGIN,
            60,
        )
    if config.show_footer:
        _draw_footer(c, page_width)


def _draw_tabulation_summary(
    c: canvas.Canvas,
    tabulation: TabulationResult,
    y: float,
    page_width: float,
) -> None:
    column = (page_width - 2 * TAB_MARGIN) / 3
    _draw_lines(c, TAB_MARGIN, y, "STATISTICS", [
        f"Total Students: {tabulation.student_count}",
        f"Total Subjects: {len(tabulation.subjects)}",
        f"Examination: {tabulation.exam}",
    ], font_size=8)
    _draw_lines(
        c, TAB_MARGIN + column, y, "GRADING SCALE",
        [*_compact_scale(), "*Any subject fail = Final grade F"],
        font_size=7,
    )
    _draw_lines(c, TAB_MARGIN + 2 * column, y, "PERFORMANCE", [
        f"Passed: {tabulation.passed_count}",
        f"Failed: {tabulation.failed_count}",
        f"Pass Rate: {tabulation.pass_rate:.1f}%",
    ], font_size=8)


def _compact_scale() -> list[str]:
    """Grading scale folded into two-band lines to fit the summary box."""
    lines = grading_scale_lines()
    return ["    ".join(lines[i:i + 2]) for i in range(0, len(lines), 2)]


def render_tabulation(
    tabulation: TabulationResult,
    output_path: Path,
    config: Optional[ReportConfig] = None,
) -> int:
    """
    Render a cohort tabulation sheet on landscape A4.

    Rows are split into pages of ``config.rows_per_page``; the summary
    block and signature lines appear on the last page only.

    Returns:
        Number of pages written

    Example:
        >>> render_tabulation(tab, Path("out/tabulation.pdf"))  # 27 students
        3
    """
    config = config or ReportConfig()
    layout = paginate_rows(tabulation.rows, config.rows_per_page)
    for warning in layout.warnings:
        logger.warning(f"Tabulation class {tabulation.class_level} {tabulation.cohort}: {warning}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    c = canvas.Canvas(str(output_path), pagesize=LANDSCAPE)
    for page in layout.pages:
        _render_tabulation_page(c, tabulation, page, layout.page_count, config)
        c.showPage()
    c.save()

    logger.info(f"Rendered {layout.page_count} tabulation pages to {output_path}")
    return layout.page_count
