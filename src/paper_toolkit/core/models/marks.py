"""
Module: marks

Purpose:
    Result dataclasses produced by the marks calculator: per-type breakdowns,
    header-vs-computed validation and per-section live totals.

Key Classes:
    - TypeMarks: Count/marks summary for one question type
    - MarksBreakdown: Per-type summary plus grand totals
    - MarksValidation: Header total check result
    - SectionMarks: Live marks for one distributed section
    - PaperMarks: Section marks plus grand total

Dependencies:
    - dataclasses (std)

Used By:
    - builder.marks.calculator: Produces these records
    - builder.output.renderer: Header totals and formulas
    - builder.controller: Build metadata
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TypeMarks:
    """
    Marks summary for one question type (immutable).

    Attributes:
        count: Number of questions of this type
        marks_per_question: Effective marks each (override or default)
        attempt_count: How many must be answered (== count for mcq)
    """

    count: int
    marks_per_question: int
    attempt_count: int

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"count cannot be negative: {self.count}")
        if self.marks_per_question < 0:
            raise ValueError(f"marks_per_question cannot be negative: {self.marks_per_question}")
        if not 0 <= self.attempt_count <= self.count:
            raise ValueError(
                f"attempt_count ({self.attempt_count}) must be within 0..{self.count}"
            )

    @property
    def total(self) -> int:
        """Marks if every question is answered."""
        return self.count * self.marks_per_question

    @property
    def attempted_marks(self) -> int:
        """Marks actually available to the student."""
        return self.attempt_count * self.marks_per_question


@dataclass(frozen=True)
class MarksBreakdown:
    """
    Per-type marks breakdown (immutable).

    Example:
        >>> b = compute_marks(mcqs, shorts, longs)
        >>> b.total, b.attempt_total
        (47, 37)
    """

    mcq: TypeMarks
    short: TypeMarks
    long: TypeMarks

    @property
    def total(self) -> int:
        """Sum of per-type totals."""
        return self.mcq.total + self.short.total + self.long.total

    @property
    def attempt_total(self) -> int:
        """Sum of attempted subtotals (all mcqs are attempted)."""
        return self.mcq.total + self.short.attempted_marks + self.long.attempted_marks

    def to_dict(self) -> dict:
        """Serialize for build metadata."""
        return {
            kind: {
                "count": tm.count,
                "marks_per_question": tm.marks_per_question,
                "attempt_count": tm.attempt_count,
                "total": tm.total,
                "attempted_marks": tm.attempted_marks,
            }
            for kind, tm in (("mcq", self.mcq), ("short", self.short), ("long", self.long))
        } | {"total": self.total, "attempt_total": self.attempt_total}


@dataclass(frozen=True)
class MarksValidation:
    """
    Result of checking a declared header total (immutable).

    Attributes:
        valid: True when header and calculated totals agree
        header_total: Total printed in the paper header
        calculated_total: Total computed from the questions
        mismatch: Absolute difference between the two
        error: Human readable message when invalid
    """

    valid: bool
    header_total: int
    calculated_total: int
    mismatch: int
    error: Optional[str] = None


@dataclass(frozen=True)
class SectionMarks:
    """
    Live marks for one distributed section (immutable).

    Attributes:
        q_number: Section number
        assigned_count: Questions actually placed in the section
        attempt_count: Effective attempt count
        marks_per_question: Effective marks per question
        total: Effective section total
        formula: Display formula, e.g. "5 × 2 = 10"
    """

    q_number: int
    assigned_count: int
    attempt_count: int
    marks_per_question: int
    total: int
    formula: str


@dataclass(frozen=True)
class PaperMarks:
    """Section-level marks for a whole paper (immutable)."""

    sections: tuple[SectionMarks, ...]

    @property
    def total(self) -> int:
        """Grand total across sections."""
        return sum(s.total for s in self.sections)

    def for_section(self, q_number: int) -> Optional[SectionMarks]:
        for section in self.sections:
            if section.q_number == q_number:
                return section
        return None
