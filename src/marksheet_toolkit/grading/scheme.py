"""
Module: grading.scheme

Purpose:
    Marking scheme lookup: the maximum marks of a subject in a class
    and how they split across written, MCQ and practical components.

Key Classes:
    - MarkingScheme: Immutable component breakdown

Key Functions:
    - marking_scheme_for(): Resolve the scheme for (subject, class)

Canonical table:
    - Digital Technology (ICT): 10/15/25 = 50 in every class
    - Classes 6-8: Bangla 2nd Paper 35/15/0 = 50,
      English 2nd Paper 50/0/0 = 50
    - Classes 9-10: English 1st/2nd Paper 100/0/0, science subjects
      50/25/25, everything else 70/30/0
    - Anything else, including unknown subjects: 70/30/0 = 100

Dependencies:
    - grading.catalog: Subject names

Used By:
    - grading.entry: Component validation
    - grading.gpa: Percentages and total possible
    - interchange.workbook: Grade re-derivation on import
"""

from __future__ import annotations

from dataclasses import dataclass

from marksheet_toolkit.core.models.students import uses_groups

from .catalog import ICT


@dataclass(frozen=True)
class MarkingScheme:
    """
    Maximum marks per component for one subject (immutable).

    Attributes:
        written: Written/theory maximum
        mcq: Multiple-choice maximum
        practical: Practical maximum
        total: Subject maximum

    Invariants:
        - written + mcq + practical == total
    """

    written: int
    mcq: int
    practical: int
    total: int

    def __post_init__(self) -> None:
        if self.written + self.mcq + self.practical != self.total:
            raise ValueError(
                f"Components {self.written}/{self.mcq}/{self.practical} "
                f"do not add up to {self.total}"
            )

    def component_max(self, component: str) -> int:
        """Maximum for 'theory', 'mcq' or 'practical'."""
        if component == "theory":
            return self.written
        return getattr(self, component)


DEFAULT_SCHEME = MarkingScheme(written=70, mcq=30, practical=0, total=100)
ICT_SCHEME = MarkingScheme(written=10, mcq=15, practical=25, total=50)
WRITTEN_ONLY_SCHEME = MarkingScheme(written=100, mcq=0, practical=0, total=100)
SCIENCE_SCHEME = MarkingScheme(written=50, mcq=25, practical=25, total=100)

_JUNIOR_HALF_PAPERS: dict[str, MarkingScheme] = {
    "Bangla 2nd Paper": MarkingScheme(written=35, mcq=15, practical=0, total=50),
    "English 2nd Paper": MarkingScheme(written=50, mcq=0, practical=0, total=50),
}

_SECONDARY_SPECIAL: dict[str, MarkingScheme] = {
    "English 1st Paper": WRITTEN_ONLY_SCHEME,
    "English 2nd Paper": WRITTEN_ONLY_SCHEME,
    "Physics": SCIENCE_SCHEME,
    "Chemistry": SCIENCE_SCHEME,
    "Biology": SCIENCE_SCHEME,
    "Higher Math": SCIENCE_SCHEME,
    "Higher Math / Agriculture": SCIENCE_SCHEME,
}


def marking_scheme_for(subject: str, class_level: int) -> MarkingScheme:
    """
    Resolve the marking scheme for a subject in a class.

    Never fails: unknown subjects fall back to the 100-mark default.

    Args:
        subject: Subject name
        class_level: Class number

    Returns:
        MarkingScheme for the subject

    Example:
        >>> marking_scheme_for("Digital Technology (ICT)", 6).total
        50
        >>> marking_scheme_for("English 1st Paper", 10).total
        100
    """
    if subject == ICT:
        return ICT_SCHEME
    if uses_groups(class_level):
        return _SECONDARY_SPECIAL.get(subject, DEFAULT_SCHEME)
    if 6 <= class_level <= 8:
        return _JUNIOR_HALF_PAPERS.get(subject, DEFAULT_SCHEME)
    return DEFAULT_SCHEME


def total_possible(subjects: list[str], class_level: int) -> int:
    """Sum of subject maximums for one exam."""
    return sum(marking_scheme_for(s, class_level).total for s in subjects)
