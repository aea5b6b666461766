"""
Core Models Package

Immutable, validated data models shared by the selection, layout and
rendering stages.

All models in this package are frozen dataclasses validated on construction.
The only mutable state in the toolkit is the caller-owned SelectionSession in
builder.selection.session.
"""

from .questions import (
    DEFAULT_MARKS,
    MCQ_OPTION_COUNT,
    OPTION_LABELS,
    Difficulty,
    Question,
    QuestionOverride,
    QuestionType,
)
from .patterns import PaperPattern, QuestionSection, SectionType
from .marks import MarksBreakdown, MarksValidation, PaperMarks, SectionMarks, TypeMarks

__all__ = [
    "DEFAULT_MARKS",
    "MCQ_OPTION_COUNT",
    "OPTION_LABELS",
    "Difficulty",
    "Question",
    "QuestionOverride",
    "QuestionType",
    "PaperPattern",
    "QuestionSection",
    "SectionType",
    "MarksBreakdown",
    "MarksValidation",
    "PaperMarks",
    "SectionMarks",
    "TypeMarks",
]
