"""
Module: interchange.workbook

Purpose:
    Bulk exchange of the roster and marks through an Excel workbook with
    two sheets, "Students" and "Marks". Import is forgiving: rows with
    missing or unreadable identifiers, or with scores the marking scheme
    does not allow, are skipped with a warning and the rest of the batch
    carries on. Nothing is rolled back.

Key Functions:
    - export_workbook(): Store -> .xlsx
    - import_workbook(): .xlsx -> Store (upserts)

Key Classes:
    - ImportSummary: Counts and warnings from an import
    - WorkbookError: Workbook unreadable or missing a sheet

Dependencies:
    - openpyxl: Workbook reading/writing and header styling
    - grading.entry: Score checks and grade re-derivation for imported marks

Used By:
    - cli: import / export commands
"""

from __future__ import annotations

import logging
import math
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException

from marksheet_toolkit.core.models import Mark, Student, uses_groups
from marksheet_toolkit.grading.entry import checked_total, regrade
from marksheet_toolkit.storage.base import RecordStore, StoreError

logger = logging.getLogger(__name__)

STUDENTS_SHEET = "Students"
MARKS_SHEET = "Marks"

STUDENT_HEADERS = ["ID", "Name", "Roll", "Class", "Section", "Group"]
MARK_HEADERS = [
    "ID", "StudentID", "Subject", "Exam", "Class", "Section", "Group",
    "Theory", "MCQ", "Practical", "Total", "Grade", "GradePoint",
]

HEADER_COLOR = "1F4E78"


class WorkbookError(Exception):
    """Workbook cannot be read or lacks a required sheet."""
    pass


@dataclass
class ImportSummary:
    """Outcome of import_workbook()."""
    students_imported: int = 0
    marks_imported: int = 0
    skipped: int = 0
    warnings: list[str] = field(default_factory=list)

    def skip(self, message: str) -> None:
        self.skipped += 1
        self.warnings.append(message)
        logger.warning(message)


# ─────────────────────────────────────────────────────────────────────────────
# Export
# ─────────────────────────────────────────────────────────────────────────────

def _write_sheet(ws, headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(start_color=HEADER_COLOR, end_color=HEADER_COLOR, fill_type="solid")
    thin_border = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin'),
    )

    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal='center')
        cell.border = thin_border

    for row, values in enumerate(rows, 2):
        for col, value in enumerate(values, 1):
            ws.cell(row=row, column=col, value=value).border = thin_border

    for col, header in enumerate(headers, 1):
        ws.column_dimensions[get_column_letter(col)].width = max(10, len(header) + 4)


def export_workbook(store: RecordStore, path: Path) -> Path:
    """
    Write every student and mark to an .xlsx workbook.

    The Marks sheet always carries its header row, even with no marks.

    Returns:
        The written path
    """
    path = Path(path)
    students = store.list_students()
    marks = sorted(store.list_marks(), key=lambda m: m.id or 0)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = STUDENTS_SHEET
    _write_sheet(ws, STUDENT_HEADERS, [
        [s.id, s.name, s.roll, s.class_level, s.section or "", s.group or ""]
        for s in students
    ])
    _write_sheet(wb.create_sheet(MARKS_SHEET), MARK_HEADERS, [
        [
            m.id, m.student_id, m.subject, m.exam, m.class_level,
            m.section or "", m.group or "",
            m.theory, m.mcq, m.practical, m.total, m.grade, m.grade_point,
        ]
        for m in marks
    ])

    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    logger.info(f"Exported {len(students)} students and {len(marks)} marks to {path}")
    return path


# ─────────────────────────────────────────────────────────────────────────────
# Import
# ─────────────────────────────────────────────────────────────────────────────

def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _integer(value: Any) -> Optional[int]:
    """Whole number from a cell, or None when blank or not numeric."""
    if value is None or _text(value) == "":
        return None
    try:
        number = float(value)
        whole = int(number)
    except (TypeError, ValueError, OverflowError):
        return None
    return whole if whole == number else None


def _score(value: Any) -> Optional[float]:
    if value is None or _text(value) == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _rows(ws) -> list[tuple[int, dict[str, Any]]]:
    """Non-blank data rows as (sheet row number, dict keyed by header)."""
    rows = ws.iter_rows(values_only=True)
    header = next(rows, None)
    if header is None:
        return []
    names = [_text(h) for h in header]
    result = []
    for line, row in enumerate(rows, 2):
        if not row or all(_text(v) == "" for v in row):
            continue
        result.append((line, {name: value for name, value in zip(names, row) if name}))
    return result


def _student_from_row(row: dict[str, Any]) -> Student:
    class_level = _integer(row.get("Class"))
    section = _text(row.get("Section")) or None
    group = _text(row.get("Group")) or None
    # Sheets from older exports repeat the group in the Section column.
    if uses_groups(class_level):
        section, group = None, group or section
    else:
        group = None
    return Student(
        id=None,
        name=_text(row.get("Name")),
        roll=_integer(row.get("Roll")),
        class_level=class_level,
        section=section,
        group=group,
    )


def _import_students(
    store: RecordStore,
    rows: list[tuple[int, dict[str, Any]]],
    summary: ImportSummary,
) -> dict[int, int]:
    """Upsert students; returns workbook ID -> stored id."""
    id_map: dict[int, int] = {}
    for line, row in rows:
        if not _text(row.get("Name")) or _integer(row.get("Roll")) is None \
                or _integer(row.get("Class")) is None:
            summary.skip(f"{STUDENTS_SHEET} row {line}: missing or invalid Name/Roll/Class")
            continue
        try:
            stored = store.upsert_student(_student_from_row(row))
        except (ValueError, StoreError) as e:
            summary.skip(f"{STUDENTS_SHEET} row {line}: {e}")
            continue
        sheet_id = _integer(row.get("ID"))
        if sheet_id is not None:
            id_map[sheet_id] = stored.id
        summary.students_imported += 1
    return id_map


def _import_marks(
    store: RecordStore,
    rows: list[tuple[int, dict[str, Any]]],
    id_map: dict[int, int],
    summary: ImportSummary,
) -> None:
    for line, row in rows:
        sheet_student = _integer(row.get("StudentID"))
        subject = _text(row.get("Subject"))
        exam = _text(row.get("Exam"))
        if sheet_student is None or not subject or not exam:
            summary.skip(f"{MARKS_SHEET} row {line}: missing or invalid StudentID/Subject/Exam")
            continue

        student = store.get_student(id_map.get(sheet_student, sheet_student))
        if student is None:
            summary.skip(f"{MARKS_SHEET} row {line}: unknown student {sheet_student}")
            continue

        theory = _score(row.get("Theory"))
        mcq = _score(row.get("MCQ"))
        practical = _score(row.get("Practical"))

        try:
            total = checked_total(
                subject,
                student.class_level,
                theory=theory,
                mcq=mcq,
                practical=practical,
                total=_score(row.get("Total")),
            )
            mark = Mark(
                id=None,
                student_id=student.id,
                subject=subject,
                exam=exam,
                class_level=student.class_level,
                section=student.section,
                group=student.group,
                theory=theory,
                mcq=mcq,
                practical=practical,
                total=total,
                grade=_text(row.get("Grade")) or "F",
                grade_point=_score(row.get("GradePoint")) or 0.0,
            )
            store.upsert_mark(regrade(mark))
        except (ValueError, StoreError) as e:
            summary.skip(f"{MARKS_SHEET} row {line}: {e}")
            continue
        summary.marks_imported += 1


def import_workbook(store: RecordStore, path: Path) -> ImportSummary:
    """
    Load students and marks from a workbook into the store.

    Students are matched on (roll, class, section-or-group) and marks on
    (student, subject, exam); matches are updated, others inserted. A
    mark's StudentID refers to the ID column of the Students sheet when
    that row was imported, otherwise to a stored student id.

    Args:
        store: Target store
        path: .xlsx file

    Returns:
        ImportSummary with counts and per-row warnings

    Raises:
        WorkbookError: If the file can't be opened or a sheet is missing
    """
    path = Path(path)
    try:
        wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    except (OSError, InvalidFileException, zipfile.BadZipFile, KeyError, ValueError) as e:
        raise WorkbookError(f"Cannot open workbook {path}: {e}") from e

    try:
        missing = [name for name in (STUDENTS_SHEET, MARKS_SHEET) if name not in wb.sheetnames]
        if missing:
            raise WorkbookError(
                f"Workbook {path.name} must contain '{STUDENTS_SHEET}' and "
                f"'{MARKS_SHEET}' sheets (missing: {', '.join(missing)})"
            )
        student_rows = _rows(wb[STUDENTS_SHEET])
        mark_rows = _rows(wb[MARKS_SHEET])
    finally:
        wb.close()

    summary = ImportSummary()

    def load(target: RecordStore) -> None:
        id_map = _import_students(target, student_rows, summary)
        _import_marks(target, mark_rows, id_map, summary)

    store.apply(load)
    logger.info(
        f"Imported {summary.students_imported} students, {summary.marks_imported} marks "
        f"from {path.name} ({summary.skipped} rows skipped)"
    )
    return summary
