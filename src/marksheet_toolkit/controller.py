"""
Module: controller

Purpose:
    Orchestrate report pipelines.
    Snapshot store → Grade → Rank → Render

Key Functions:
    - build_marksheet(): One student's exam marksheet
    - build_section_marksheets(): Marksheets for a whole cohort
    - build_final_results(): Combined Half-Yearly + Yearly transcripts
    - build_tabulation(): Cohort tabulation sheet

Key Classes:
    - ReportResult: Output path, page count and warnings
    - ReportError: Exception for pipeline failures

Dependencies:
    - storage: Record snapshot
    - grading: Results, GPA, ranking
    - reports: PDF rendering

Used By:
    - cli: Report commands
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from marksheet_toolkit.core.models import ExamResult, Student
from marksheet_toolkit.grading import (
    FINAL_EXAMS,
    build_exam_result,
    combine_exams,
    rank_exam_results,
    rank_final_results,
    tabulate,
)
from marksheet_toolkit.reports import (
    ReportConfig,
    render_final_results,
    render_marksheets,
    render_tabulation,
)
from marksheet_toolkit.storage import RecordStore, StoreError

logger = logging.getLogger(__name__)


class ReportError(Exception):
    """Error during a report pipeline."""
    pass


@dataclass(frozen=True)
class ReportResult:
    """
    Report pipeline result (immutable).

    Attributes:
        pdf_path: Path to the generated PDF
        page_count: Number of pages written
        warnings: Non-fatal issues (e.g. students without marks)

    Example:
        >>> result = build_tabulation(store, class_level=7, cohort="A",
        ...                           exam="Yearly", output_dir=Path("out"))
        >>> result.pdf_path.name
        'tabulation_sheet_class7_A_Yearly.pdf'
    """
    pdf_path: Path
    page_count: int
    warnings: tuple[str, ...] = ()


def _slug(text: str) -> str:
    """File-name safe form of a name or label."""
    return re.sub(r"[^A-Za-z0-9.-]+", "_", text.strip()).strip("_")


def _cohort(store: RecordStore, class_level: int, cohort: str) -> List[Student]:
    try:
        students = store.list_students(class_level=class_level, cohort=cohort)
    except StoreError as e:
        raise ReportError(f"Failed to read students: {e}") from e
    if not students:
        raise ReportError(f"No students found in class {class_level} {cohort}")
    return sorted(students, key=lambda s: s.roll)


def _ranked_exam_results(
    store: RecordStore,
    students: List[Student],
    exam: str,
    warnings: List[str],
) -> List[ExamResult]:
    try:
        marks = store.marks_for_students(students, exam=exam)
    except StoreError as e:
        raise ReportError(f"Failed to read marks: {e}") from e

    entered = {m.student_id for m in marks}
    for student in students:
        if student.id not in entered:
            warnings.append(f"Roll {student.roll} has no marks for {exam}")

    results = [build_exam_result(s, exam, marks) for s in students]
    return rank_exam_results(results)


def _finish(pdf_path: Path, page_count: int, warnings: List[str], start_time: float) -> ReportResult:
    for warning in warnings:
        logger.warning(warning)
    elapsed = time.perf_counter() - start_time
    logger.info(f"Wrote {pdf_path} ({page_count} pages) in {elapsed:.2f}s")
    return ReportResult(pdf_path=pdf_path, page_count=page_count, warnings=tuple(warnings))


def build_marksheet(
    store: RecordStore,
    *,
    class_level: int,
    cohort: str,
    roll: int,
    exam: str,
    output_dir: Path,
    config: Optional[ReportConfig] = None,
) -> ReportResult:
    """
    Build one student's marksheet for an exam.

    The position shown is the student's rank in their whole cohort.

    Raises:
        ReportError: If the student or cohort is not found, or the PDF
            cannot be written
    """
    start_time = time.perf_counter()
    warnings: List[str] = []

    students = _cohort(store, class_level, cohort)
    student = next((s for s in students if s.roll == roll), None)
    if student is None:
        raise ReportError(f"No student with roll {roll} in class {class_level} {cohort}")

    results = _ranked_exam_results(store, students, exam, warnings)
    result = next(r for r in results if r.student.id == student.id)
    warnings = [w for w in warnings if w.startswith(f"Roll {roll} ")]

    pdf_path = Path(output_dir) / f"marksheet_{_slug(student.name)}_{_slug(exam)}.pdf"
    try:
        pages = render_marksheets([result], pdf_path, config)
    except OSError as e:
        raise ReportError(f"Failed to write {pdf_path}: {e}") from e
    return _finish(pdf_path, pages, warnings, start_time)


def build_section_marksheets(
    store: RecordStore,
    *,
    class_level: int,
    cohort: str,
    exam: str,
    output_dir: Path,
    config: Optional[ReportConfig] = None,
) -> ReportResult:
    """
    Build marksheets for every student of a section or group, one page
    each in roll order.

    Raises:
        ReportError: If the cohort is empty or the PDF cannot be written
    """
    start_time = time.perf_counter()
    warnings: List[str] = []

    students = _cohort(store, class_level, cohort)
    results = _ranked_exam_results(store, students, exam, warnings)

    pdf_path = Path(output_dir) / (
        f"marksheet_class{class_level}_{_slug(cohort)}_{_slug(exam)}.pdf"
    )
    try:
        pages = render_marksheets(results, pdf_path, config)
    except OSError as e:
        raise ReportError(f"Failed to write {pdf_path}: {e}") from e
    return _finish(pdf_path, pages, warnings, start_time)


def build_final_results(
    store: RecordStore,
    *,
    class_level: int,
    cohort: str,
    output_dir: Path,
    roll: Optional[int] = None,
    config: Optional[ReportConfig] = None,
    exams: tuple[str, str] = FINAL_EXAMS,
) -> ReportResult:
    """
    Build combined final transcripts for a cohort.

    Merit positions are always computed over the whole cohort; ``roll``
    only limits which pages are printed.

    Args:
        store: Record store
        class_level: Class number
        cohort: Section (6-8) or group (9-10)
        output_dir: Directory for the PDF
        roll: Print only this student
        config: Report configuration
        exams: The two exams to combine

    Raises:
        ReportError: If the cohort or roll is not found, or the PDF
            cannot be written
    """
    start_time = time.perf_counter()
    warnings: List[str] = []

    students = _cohort(store, class_level, cohort)
    try:
        first_marks = store.marks_for_students(students, exam=exams[0])
        second_marks = store.marks_for_students(students, exam=exams[1])
    except StoreError as e:
        raise ReportError(f"Failed to read marks: {e}") from e

    for exam, marks in zip(exams, (first_marks, second_marks)):
        if not marks:
            warnings.append(f"No marks entered for {exam} in class {class_level} {cohort}")

    finals = rank_final_results([
        combine_exams(s, first_marks, second_marks, exams=exams) for s in students
    ])

    name = f"final_marksheet_class{class_level}_{_slug(cohort)}"
    if roll is not None:
        finals = [f for f in finals if f.student.roll == roll]
        if not finals:
            raise ReportError(f"No student with roll {roll} in class {class_level} {cohort}")
        name += f"_roll{roll}"

    pdf_path = Path(output_dir) / f"{name}.pdf"
    try:
        pages = render_final_results(finals, pdf_path, config)
    except OSError as e:
        raise ReportError(f"Failed to write {pdf_path}: {e}") from e
    return _finish(pdf_path, pages, warnings, start_time)


def build_tabulation(
    store: RecordStore,
    *,
    class_level: int,
    cohort: str,
    exam: str,
    output_dir: Path,
    config: Optional[ReportConfig] = None,
) -> ReportResult:
    """
    Build the tabulation sheet for a cohort and exam.

    Raises:
        ReportError: If the cohort is empty or the PDF cannot be written
    """
    start_time = time.perf_counter()
    warnings: List[str] = []

    students = _cohort(store, class_level, cohort)
    try:
        marks = store.marks_for_students(students, exam=exam)
    except StoreError as e:
        raise ReportError(f"Failed to read marks: {e}") from e
    if not marks:
        warnings.append(f"No marks entered for {exam} in class {class_level} {cohort}")

    tabulation = tabulate(students, exam, marks, class_level=class_level, cohort=cohort)

    pdf_path = Path(output_dir) / (
        f"tabulation_sheet_class{class_level}_{_slug(cohort)}_{_slug(exam)}.pdf"
    )
    try:
        pages = render_tabulation(tabulation, pdf_path, config or ReportConfig())
    except OSError as e:
        raise ReportError(f"Failed to write {pdf_path}: {e}") from e
    return _finish(pdf_path, pages, warnings, start_time)
