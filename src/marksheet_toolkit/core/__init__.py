"""
Marksheet Toolkit Core Package

Shared data models, validation and serialization.

1. **Immutable Data Models**
   Frozen dataclasses; edits produce new instances.

2. **Derived Values Never Stored**
   Exam totals, GPAs and positions are computed from marks at report
   time. Only per-subject grade/grade point travel with a stored mark.
"""

from .models import Student, Mark, ExamResult, FinalResult, TabulationResult

__all__ = [
    "Student",
    "Mark",
    "ExamResult",
    "FinalResult",
    "TabulationResult",
]
