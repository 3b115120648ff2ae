"""
Module: cli

Purpose:
    Command-line entry point for roster maintenance, mark entry, workbook
    interchange and report generation against a JSON record store.

Usage:
    marksheet-toolkit --store school.json add-student --name "Rahim" --roll 1 --class 7 --section A
    marksheet-toolkit --store school.json list-students --class 7 --name rah
    marksheet-toolkit --store school.json edit-student --id 3 --roll 4
    marksheet-toolkit --store school.json enter-mark --class 7 --cohort A --roll 1 \\
        --subject Mathematics --exam Yearly --theory 55 --mcq 25
    marksheet-toolkit --store school.json import marks.xlsx
    marksheet-toolkit --store school.json tabulation --class 7 --cohort A --exam Yearly -o out/

Exit codes:
    0 on success, 1 on a reported error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from marksheet_toolkit import __version__
from marksheet_toolkit.controller import (
    ReportError,
    ReportResult,
    build_final_results,
    build_marksheet,
    build_section_marksheets,
    build_tabulation,
)
from marksheet_toolkit.core.models import Student, uses_groups
from marksheet_toolkit.grading import MarkEntryError, score_mark
from marksheet_toolkit.grading.gpa import FINAL_EXAMS
from marksheet_toolkit.interchange import WorkbookError, export_workbook, import_workbook
from marksheet_toolkit.reports import load_report_config
from marksheet_toolkit.storage import JsonFileStore, RecordStore, StoreError, StudentFilter

logger = logging.getLogger(__name__)

DEFAULT_STORE = Path("marksheet_store.json")


def _add_cohort_args(parser: argparse.ArgumentParser, *, roll: bool = False, exam: bool = False) -> None:
    parser.add_argument("--class", dest="class_level", type=int, required=True, help="Class (6-10)")
    parser.add_argument("--cohort", required=True, help="Section (classes 6-8) or group (classes 9-10)")
    if roll:
        parser.add_argument("--roll", type=int, required=True, help="Roll number")
    if exam:
        parser.add_argument("--exam", required=True, choices=FINAL_EXAMS, help="Exam")


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--output", "-o", type=Path, default=Path("."), help="Output directory")
    parser.add_argument("--config", type=Path, default=None, help="Report settings JSON")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marksheet-toolkit",
        description="Student marks, grades and printable result sheets",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--store", type=Path, default=DEFAULT_STORE, help="JSON record store")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("add-student", help="Add a student to the roster")
    p.add_argument("--name", required=True)
    p.add_argument("--roll", type=int, required=True)
    p.add_argument("--class", dest="class_level", type=int, required=True)
    p.add_argument("--section", default=None, help="Section (classes 6-8)")
    p.add_argument("--group", default=None, help="Group (classes 9-10)")

    p = sub.add_parser("list-students", help="List the roster, optionally filtered")
    p.add_argument("--name", default=None, help="Name contains (case-insensitive)")
    p.add_argument("--class", dest="class_level", type=int, default=None)
    p.add_argument("--section", default=None)
    p.add_argument("--group", default=None)
    p.add_argument("--roll", default=None, help="Roll number contains")

    p = sub.add_parser("edit-student", help="Change a student's details")
    p.add_argument("--id", dest="student_id", type=int, required=True)
    p.add_argument("--name", default=None)
    p.add_argument("--roll", type=int, default=None)
    p.add_argument("--class", dest="class_level", type=int, default=None)
    p.add_argument("--section", default=None)
    p.add_argument("--group", default=None)

    p = sub.add_parser("delete-student", help="Delete a student and all of their marks")
    p.add_argument("--id", dest="student_id", type=int, required=True)

    p = sub.add_parser("delete-mark", help="Delete one mark")
    p.add_argument("--id", dest="mark_id", type=int, required=True)

    p = sub.add_parser("enter-mark", help="Enter or update one subject mark")
    _add_cohort_args(p, roll=True, exam=True)
    p.add_argument("--subject", required=True)
    p.add_argument("--theory", type=float, default=None, help="Written component")
    p.add_argument("--mcq", type=float, default=None)
    p.add_argument("--practical", type=float, default=None)

    p = sub.add_parser("import", help="Import students and marks from .xlsx")
    p.add_argument("workbook", type=Path)

    p = sub.add_parser("export", help="Export students and marks to .xlsx")
    p.add_argument("workbook", type=Path)

    p = sub.add_parser("marksheet", help="One student's marksheet")
    _add_cohort_args(p, roll=True, exam=True)
    _add_output_args(p)

    p = sub.add_parser("section", help="Marksheets for a whole section or group")
    _add_cohort_args(p, exam=True)
    _add_output_args(p)

    p = sub.add_parser("final", help="Combined final results")
    _add_cohort_args(p)
    p.add_argument("--roll", type=int, default=None, help="Only this student")
    _add_output_args(p)

    p = sub.add_parser("tabulation", help="Tabulation sheet")
    _add_cohort_args(p, exam=True)
    _add_output_args(p)

    return parser


def _report(result: ReportResult) -> None:
    print(f"{result.pdf_path} ({result.page_count} pages)")


def _edited(store: RecordStore, args: argparse.Namespace) -> Student:
    """The stored student with the given options applied."""
    current = store.get_student(args.student_id)
    if current is None:
        raise StoreError(f"Unknown student id: {args.student_id}")

    class_level = args.class_level if args.class_level is not None else current.class_level
    section = args.section or current.section
    group = args.group or current.group
    # Moving between sections and groups keeps only the label the new class uses.
    if uses_groups(class_level):
        section = None
    else:
        group = None

    return replace(
        current,
        name=args.name or current.name,
        roll=args.roll if args.roll is not None else current.roll,
        class_level=class_level,
        section=section,
        group=group,
    )


def _run(args: argparse.Namespace) -> None:
    store = JsonFileStore(args.store)

    if args.command == "add-student":
        student = store.add_student(Student(
            id=None,
            name=args.name,
            roll=args.roll,
            class_level=args.class_level,
            section=args.section,
            group=args.group,
        ))
        print(f"Added {student.name} (id {student.id})")

    elif args.command == "list-students":
        students = store.filter_students(StudentFilter(
            name=args.name,
            class_level=args.class_level,
            section=args.section,
            group=args.group,
            roll=args.roll,
        ))
        if not students:
            print("No students found")
        for s in sorted(students, key=lambda s: (s.class_level, s.cohort, s.roll)):
            print(f"{s.id:>5}  class {s.class_level} {s.cohort:<16} roll {s.roll:>3}  {s.name}")

    elif args.command == "edit-student":
        student = store.update_student(_edited(store, args))
        print(f"Updated {student.name} (id {student.id})")

    elif args.command == "delete-student":
        store.delete_student(args.student_id)
        print(f"Deleted student {args.student_id}")

    elif args.command == "delete-mark":
        store.delete_mark(args.mark_id)
        print(f"Deleted mark {args.mark_id}")

    elif args.command == "enter-mark":
        student = store.find_student(args.class_level, args.cohort, args.roll)
        if student is None:
            raise StoreError(f"No student with roll {args.roll} in class {args.class_level} {args.cohort}")
        mark = store.upsert_mark(score_mark(
            student,
            args.subject,
            args.exam,
            theory=args.theory,
            mcq=args.mcq,
            practical=args.practical,
        ))
        print(f"{student.name} {mark.subject} ({mark.exam}): {mark.total:g} {mark.grade} {mark.grade_point:.2f}")

    elif args.command == "import":
        summary = import_workbook(store, args.workbook)
        print(
            f"Imported {summary.students_imported} students, {summary.marks_imported} marks, "
            f"skipped {summary.skipped} rows"
        )

    elif args.command == "export":
        print(export_workbook(store, args.workbook))

    else:
        config = load_report_config(args.config)
        common = dict(class_level=args.class_level, cohort=args.cohort, output_dir=args.output, config=config)
        if args.command == "marksheet":
            _report(build_marksheet(store, roll=args.roll, exam=args.exam, **common))
        elif args.command == "section":
            _report(build_section_marksheets(store, exam=args.exam, **common))
        elif args.command == "final":
            _report(build_final_results(store, roll=args.roll, **common))
        elif args.command == "tabulation":
            _report(build_tabulation(store, exam=args.exam, **common))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    try:
        _run(args)
    except (StoreError, MarkEntryError, WorkbookError, ReportError) as e:
        logger.error(str(e))
        return 1
    except ValueError as e:
        # Model validation (e.g. missing section for class 6-8)
        logger.error(f"Invalid input: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
