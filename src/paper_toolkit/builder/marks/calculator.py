"""
Module: builder.marks.calculator

Purpose:
    Marks arithmetic for a paper: per-type totals with custom marks per
    question, "attempt N of M" subtotals, header total validation and the
    live per-section formulas shown in section headers.

Key Functions:
    - compute_marks(): Per-type breakdown
    - validate_marks(): Compare a declared total with the computed one
    - validate_paper_total(): Same check against live section marks
    - compute_paper_marks(): Per-section live totals for a distributed paper
    - format_marks_display(): One-line summary string
    - attempt_text(): "Attempt any N (...)" helper

Key Classes:
    - MarkOverrides: Custom marks per question type
    - AttemptOverrides: Custom attempt counts for short/long

Dependencies:
    - paper_toolkit.core.models: Question, DEFAULT_MARKS, marks records

Used By:
    - builder.layout.distributor: Effective marks per question
    - builder.output.renderer: Header and section totals
    - builder.controller: Build pipeline
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

from paper_toolkit.core.models import (
    DEFAULT_MARKS,
    MarksBreakdown,
    MarksValidation,
    PaperMarks,
    Question,
    QuestionType,
    SectionMarks,
    TypeMarks,
)

if TYPE_CHECKING:
    from ..layout.distributor import SectionAllocation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkOverrides:
    """
    Custom marks per question, by type (immutable).

    None keeps the type default (mcq=1, short=2, long=5).
    """

    mcq: Optional[int] = None
    short: Optional[int] = None
    long: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("mcq", "short", "long"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} marks override cannot be negative: {value}")

    def get(self, question_type: QuestionType) -> Optional[int]:
        return getattr(self, question_type.value)

    def marks_for(self, question_type: QuestionType) -> int:
        """Override if set, else the type default."""
        value = self.get(question_type)
        return DEFAULT_MARKS[question_type] if value is None else value


@dataclass(frozen=True)
class AttemptOverrides:
    """Custom attempt counts for short and long questions (immutable)."""

    short: Optional[int] = None
    long: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("short", "long"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} attempt override cannot be negative: {value}")


def _attempt(count: int, override: Optional[int]) -> int:
    if override is None:
        return count
    return min(override, count)


def compute_marks(
    mcqs: Sequence[Question],
    shorts: Sequence[Question],
    longs: Sequence[Question],
    attempt_overrides: Optional[AttemptOverrides] = None,
    mark_overrides: Optional[MarkOverrides] = None,
) -> MarksBreakdown:
    """
    Per-type marks breakdown.

    Args:
        mcqs: MCQs on the paper
        shorts: Short questions on the paper
        longs: Long questions on the paper
        attempt_overrides: Attempt counts (capped at the question count)
        mark_overrides: Marks per question by type

    Returns:
        MarksBreakdown

    Example:
        >>> b = compute_marks(mcqs[:10], shorts[:5], longs[:3], mark_overrides=MarkOverrides(long=9))
        >>> b.total
        47
    """
    marks = mark_overrides or MarkOverrides()
    attempts = attempt_overrides or AttemptOverrides()

    return MarksBreakdown(
        mcq=TypeMarks(
            count=len(mcqs),
            marks_per_question=marks.marks_for(QuestionType.MCQ),
            attempt_count=len(mcqs),
        ),
        short=TypeMarks(
            count=len(shorts),
            marks_per_question=marks.marks_for(QuestionType.SHORT),
            attempt_count=_attempt(len(shorts), attempts.short),
        ),
        long=TypeMarks(
            count=len(longs),
            marks_per_question=marks.marks_for(QuestionType.LONG),
            attempt_count=_attempt(len(longs), attempts.long),
        ),
    )


def validate_marks(
    header_total: int,
    mcqs: Sequence[Question],
    shorts: Sequence[Question],
    longs: Sequence[Question],
    mark_overrides: Optional[MarkOverrides] = None,
) -> MarksValidation:
    """
    Compare a declared header total with the computed total.

    Never raises; a mismatch is reported in the result.
    """
    calculated = compute_marks(mcqs, shorts, longs, mark_overrides=mark_overrides).total
    return _compare_totals(header_total, calculated)


def validate_paper_total(header_total: int, paper_marks: PaperMarks) -> MarksValidation:
    """Compare a declared total with the live per-section total."""
    return _compare_totals(header_total, paper_marks.total)


def _compare_totals(header_total: int, calculated: int) -> MarksValidation:
    mismatch = abs(header_total - calculated)

    if mismatch == 0:
        return MarksValidation(
            valid=True,
            header_total=header_total,
            calculated_total=calculated,
            mismatch=0,
        )

    error = (
        f"Total marks mismatch: Header shows {header_total}, "
        f"but calculated total is {calculated}"
    )
    logger.warning(error)
    return MarksValidation(
        valid=False,
        header_total=header_total,
        calculated_total=calculated,
        mismatch=mismatch,
        error=error,
    )


def compute_paper_marks(allocations: Sequence[SectionAllocation]) -> PaperMarks:
    """Live marks for every allocated section, in pattern order."""
    return PaperMarks(
        sections=tuple(
            SectionMarks(
                q_number=a.section.q_number,
                assigned_count=a.assigned_count,
                attempt_count=a.attempt_count,
                marks_per_question=a.marks_per_question,
                total=a.total_marks,
                formula=a.marks_formula,
            )
            for a in allocations
        )
    )


# ─────────────────────────────────────────────────────────────────────────────
# Display Helpers
# ─────────────────────────────────────────────────────────────────────────────

def format_marks_display(breakdown: MarksBreakdown) -> str:
    """
    One-line summary.

    Example:
        'MCQ: 10 × 1 = 10 | Short: 5 × 2 = 10 | Total: 20 marks'
    """
    parts = []
    for label, tm in (("MCQ", breakdown.mcq), ("Short", breakdown.short), ("Long", breakdown.long)):
        if tm.count > 0:
            parts.append(f"{label}: {tm.count} × {tm.marks_per_question} = {tm.total}")
    parts.append(f"Total: {breakdown.total} marks")
    return " | ".join(parts)


def attempt_text(attempt_count: int, total_questions: int, marks_per_question: int) -> str:
    """Attempt instruction with its marks formula."""
    total = attempt_count * marks_per_question
    formula = f"{attempt_count} × {marks_per_question} = {total} Marks"
    if attempt_count >= total_questions:
        return f"Attempt all ({formula})"
    return f"Attempt any {attempt_count} ({formula})"
