"""
Module: builder.output

Purpose:
    Paper output generation: the print-ready HTML document, the answer
    key PDF and the pre-generation checks run before either.

Key Functions:
    - render_paper(): Render a distributed paper to HTML
    - render_answer_key(): Generate the answer key PDF (reportlab)
    - validate_paper_data(): Coded pre-generation checks
    - process_math_in_text(): Escape text and mark up formulas

Dependencies:
    - reportlab: Answer key PDF
    - PIL: Logo embedding

Used By:
    - builder.controller: Pipeline orchestration
"""

from .answer_key import AnswerKeyEntry, answer_key_entries, render_answer_key
from .logo import logo_data_uri, resolve_logo_src
from .mathtext import (
    MathValidation,
    TextSegment,
    collect_math_issues,
    extract_math_content,
    process_math_in_text,
    validate_latex,
)
from .renderer import render_paper, split_sub_parts, to_roman
from .validation import (
    PaperSettings,
    PaperValidationReport,
    ValidationIssue,
    format_validation_issues,
    validate_paper_data,
)

__all__ = [
    "AnswerKeyEntry",
    "answer_key_entries",
    "render_answer_key",
    "logo_data_uri",
    "resolve_logo_src",
    "MathValidation",
    "TextSegment",
    "collect_math_issues",
    "extract_math_content",
    "process_math_in_text",
    "validate_latex",
    "render_paper",
    "split_sub_parts",
    "to_roman",
    "PaperSettings",
    "PaperValidationReport",
    "ValidationIssue",
    "format_validation_issues",
    "validate_paper_data",
]
