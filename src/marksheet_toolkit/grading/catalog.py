"""
Module: grading.catalog

Purpose:
    Subject catalog per class and group. Classes 6-8 share one fixed
    list; classes 9-10 take a common core plus group electives.

Key Functions:
    - subjects_for(): Ordered subject list for a class/group
    - groups_for(): Groups offered in a class
    - sections_for(): Sections offered in a class
    - short_subject_name(): Compact label for tabulation headers

Dependencies:
    - core.models.students: class range helpers

Used By:
    - grading.gpa: Zero-filling complete mark lists
    - grading.ranking: Tabulation columns
    - cli: Choices for groups/sections
"""

from __future__ import annotations

from typing import Optional

from marksheet_toolkit.core.models.students import FIRST_GROUP_CLASS, MIN_CLASS, uses_groups

SCIENCE = "Science"
BUSINESS_STUDIES = "Business Studies"
HUMANITIES = "Humanities"

GROUPS: tuple[str, ...] = (SCIENCE, BUSINESS_STUDIES, HUMANITIES)
SECTIONS: tuple[str, ...] = ("A", "B")

ICT = "Digital Technology (ICT)"

JUNIOR_SUBJECTS: tuple[str, ...] = (
    "Bangla 1st Paper",
    "Bangla 2nd Paper",
    "English 1st Paper",
    "English 2nd Paper",
    "Mathematics",
    "Science & Technology",
    "Bangladesh & Global Studies",
    ICT,
    "Religion & Moral Education",
    "Health & Physical Ed.",
    "Agriculture",
    "Arts & Culture / Work & Arts",
)

SECONDARY_CORE: tuple[str, ...] = (
    "Bangla 1st Paper",
    "Bangla 2nd Paper",
    "English 1st Paper",
    "English 2nd Paper",
    "Mathematics",
    ICT,
    "Religion & Moral Education",
)

GROUP_ELECTIVES: dict[str, tuple[str, ...]] = {
    SCIENCE: (
        "Physics",
        "Chemistry",
        "Biology",
        "Bangladesh & Global Science",
        "Higher Math / Agriculture",
    ),
    BUSINESS_STUDIES: (
        "Accounting",
        "Finance",
        "Business Entrepreneurship",
    ),
    HUMANITIES: (
        "History",
        "Geography",
        "Civics",
        "Science",
    ),
}

_SHORT_NAMES: dict[str, str] = {
    "Bangla 1st Paper": "Ban 1st",
    "Bangla 2nd Paper": "Ban 2nd",
    "English 1st Paper": "Eng 1st",
    "English 2nd Paper": "Eng 2nd",
    "Mathematics": "Math",
    "Science & Technology": "Sci & Tech",
    "Bangladesh & Global Studies": "BGS",
    ICT: "ICT",
    "Religion & Moral Education": "Religion",
    "Health & Physical Ed.": "Health",
    "Agriculture": "Agri",
    "Arts & Culture / Work & Arts": "Arts",
    "Bangladesh & Global Science": "BGS",
    "Higher Math / Agriculture": "H.Math/Agri",
    "Business Entrepreneurship": "Bus. Ent.",
}


def subjects_for(class_level: int, group: Optional[str] = None) -> list[str]:
    """
    Ordered list of subjects a student of this class/group takes.

    Args:
        class_level: Class number
        group: Group name (only consulted for classes 9-10)

    Returns:
        Subject names in marksheet order. An unknown or missing group
        for classes 9-10 yields the common core only; a class outside
        6-10 yields an empty list.

    Example:
        >>> len(subjects_for(7))
        12
        >>> subjects_for(9, "Business Studies")[-1]
        'Business Entrepreneurship'
    """
    if uses_groups(class_level):
        return [*SECONDARY_CORE, *GROUP_ELECTIVES.get(group or "", ())]
    if MIN_CLASS <= class_level < FIRST_GROUP_CLASS:
        return list(JUNIOR_SUBJECTS)
    return []


def groups_for(class_level: int) -> list[str]:
    """Groups offered in a class (classes 9-10 only)."""
    return list(GROUPS) if uses_groups(class_level) else []


def sections_for(class_level: int) -> list[str]:
    """Sections offered in a class (classes 6-8 only)."""
    if MIN_CLASS <= class_level < FIRST_GROUP_CLASS:
        return list(SECTIONS)
    return []


def short_subject_name(subject: str) -> str:
    """Compact column label; unknown subjects are returned unchanged."""
    return _SHORT_NAMES.get(subject, subject)
