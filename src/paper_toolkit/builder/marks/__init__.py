"""
Module: builder.marks

Purpose:
    Marks calculation and validation.
"""

from .calculator import (
    AttemptOverrides,
    MarkOverrides,
    attempt_text,
    compute_marks,
    compute_paper_marks,
    format_marks_display,
    validate_marks,
    validate_paper_total,
)

__all__ = [
    "AttemptOverrides",
    "MarkOverrides",
    "attempt_text",
    "compute_marks",
    "compute_paper_marks",
    "format_marks_display",
    "validate_marks",
    "validate_paper_total",
]
