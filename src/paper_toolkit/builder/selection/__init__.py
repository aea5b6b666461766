"""
Module: builder.selection

Purpose:
    Question selection engine. Picks a non-repeating, optionally
    reproducible set of questions meeting per-type quotas and
    chapter/difficulty filters.

Key Functions:
    - select_questions(): Main entry point for selection
    - validate_availability(): Pool size check without side effects

Key Classes:
    - PaperConfig: Selection request
    - QuestionSelector: Store + session orchestrator
    - SelectionSession: Caller-owned used-id record

Dependencies:
    - paper_toolkit.core.models: Question, QuestionType
    - builder.loading.store: QuestionStore

Used By:
    - builder.controller: Main build controller
"""

from .config import PaperConfig
from .random_source import SeededRandom, ShuffleMode, comparator_shuffle, fisher_yates
from .selector import (
    AvailabilityReport,
    QuestionSelector,
    ResolvedPaper,
    TypeCounts,
    select_questions,
    validate_availability,
)
from .session import SelectionSession

__all__ = [
    "PaperConfig",
    "SeededRandom",
    "ShuffleMode",
    "comparator_shuffle",
    "fisher_yates",
    "AvailabilityReport",
    "QuestionSelector",
    "ResolvedPaper",
    "TypeCounts",
    "select_questions",
    "validate_availability",
    "SelectionSession",
]
