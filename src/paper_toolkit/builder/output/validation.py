"""
Module: builder.output.validation

Purpose:
    Pre-generation checks on paper settings and the questions about to be
    printed. Problems are collected as coded issues; nothing is raised.

Key Functions:
    - validate_paper_data(): Check settings and question lists
    - format_validation_issues(): One line per issue for CLI output

Key Classes:
    - PaperSettings: Header fields the checks need
    - ValidationIssue: One coded error or warning
    - PaperValidationReport: All issues plus overall validity

Used By:
    - builder.controller: Reported in BuildResult.validation
    - paper_toolkit.__main__: Printed by the build command
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from paper_toolkit.core.models import MCQ_OPTION_COUNT, OPTION_LABELS, Question

from .mathtext import collect_math_issues

logger = logging.getLogger(__name__)

MAX_QUESTIONS = 100

# Error codes
MISSING_INSTITUTE = "MISSING_INSTITUTE"
MISSING_SUBJECT = "MISSING_SUBJECT"
MISSING_CLASS = "MISSING_CLASS"
MISSING_DATE = "MISSING_DATE"
EMPTY_QUESTION = "EMPTY_QUESTION"
MISSING_OPTIONS = "MISSING_OPTIONS"
EMPTY_OPTION = "EMPTY_OPTION"
NO_QUESTIONS = "NO_QUESTIONS"
TOO_MANY_QUESTIONS = "TOO_MANY_QUESTIONS"

# Warning codes
INVALID_CORRECT_OPTION = "INVALID_CORRECT_OPTION"
DUPLICATE_QUESTIONS = "DUPLICATE_QUESTIONS"
INVALID_MATH = "INVALID_MATH"


@dataclass(frozen=True)
class PaperSettings:
    """Header fields checked before generation."""

    institute_name: str
    subject: str
    class_id: str
    date: str


@dataclass(frozen=True)
class ValidationIssue:
    """
    One validation finding.

    Attributes:
        code: Stable machine-readable code (e.g. "EMPTY_OPTION")
        message: Human-readable description
        field: Settings field the issue refers to, if any
        question_id: Question the issue refers to, if any
    """

    code: str
    message: str
    field: Optional[str] = None
    question_id: Optional[str] = None


@dataclass(frozen=True)
class PaperValidationReport:
    """Errors block printing in interactive use; warnings never do."""

    errors: tuple[ValidationIssue, ...] = ()
    warnings: tuple[ValidationIssue, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    def codes(self) -> set[str]:
        return {issue.code for issue in (*self.errors, *self.warnings)}


def _check_settings(settings: PaperSettings) -> list[ValidationIssue]:
    required = (
        (settings.institute_name, MISSING_INSTITUTE, "Institute name is required", "institute_name"),
        (settings.subject, MISSING_SUBJECT, "Subject is required", "subject"),
        (settings.class_id, MISSING_CLASS, "Class is required", "class_id"),
        (settings.date, MISSING_DATE, "Date is required", "date"),
    )
    return [
        ValidationIssue(code=code, message=message, field=field_name)
        for value, code, message, field_name in required
        if not (value or "").strip()
    ]


def validate_paper_data(
    settings: PaperSettings,
    mcqs: Sequence[Question],
    shorts: Sequence[Question],
    longs: Sequence[Question],
) -> PaperValidationReport:
    """
    Validate settings and questions before rendering.

    Duplicate detection compares trimmed, lower-cased text across all three
    lists. Invalid formulas are reported once per question.

    Example:
        >>> report = validate_paper_data(settings, mcqs, [], [])
        >>> report.valid
        True
    """
    errors = _check_settings(settings)
    warnings: list[ValidationIssue] = []

    for index, mcq in enumerate(mcqs, start=1):
        if not mcq.text.strip():
            errors.append(ValidationIssue(
                code=EMPTY_QUESTION,
                message=f"MCQ #{index} has no question text",
                question_id=mcq.id,
            ))
        if len(mcq.options) < MCQ_OPTION_COUNT:
            errors.append(ValidationIssue(
                code=MISSING_OPTIONS,
                message=f"MCQ #{index} is missing options",
                question_id=mcq.id,
            ))
        else:
            for label, option in zip(OPTION_LABELS, mcq.options):
                if not option.strip():
                    errors.append(ValidationIssue(
                        code=EMPTY_OPTION,
                        message=f"MCQ #{index} option {label} is empty",
                        question_id=mcq.id,
                    ))
        if mcq.correct_option_index is None:
            warnings.append(ValidationIssue(
                code=INVALID_CORRECT_OPTION,
                message=f"MCQ #{index} has no correct answer marked",
                question_id=mcq.id,
            ))

    for label, questions in (("Short Question", shorts), ("Long Question", longs)):
        for index, question in enumerate(questions, start=1):
            if not question.text.strip():
                errors.append(ValidationIssue(
                    code=EMPTY_QUESTION,
                    message=f"{label} #{index} has no question text",
                    question_id=question.id,
                ))

    all_questions = [*mcqs, *shorts, *longs]
    seen: set[str] = set()
    duplicates = 0
    for question in all_questions:
        key = question.text.strip().lower()
        if not key:
            continue
        if key in seen:
            duplicates += 1
        seen.add(key)
    if duplicates:
        warnings.append(ValidationIssue(
            code=DUPLICATE_QUESTIONS,
            message=f"{duplicates} duplicate question(s) found",
        ))

    for question in all_questions:
        texts = [question.text, *question.options]
        issues = [issue for text in texts for issue in collect_math_issues(text)]
        if issues:
            formula, error = issues[0]
            warnings.append(ValidationIssue(
                code=INVALID_MATH,
                message=f"Question {question.id} has an invalid formula {formula!r}: {error}",
                question_id=question.id,
            ))

    if not all_questions:
        errors.append(ValidationIssue(code=NO_QUESTIONS, message="At least one question is required"))
    if len(all_questions) > MAX_QUESTIONS:
        errors.append(ValidationIssue(
            code=TOO_MANY_QUESTIONS,
            message=f"Maximum {MAX_QUESTIONS} questions allowed",
        ))

    report = PaperValidationReport(errors=tuple(errors), warnings=tuple(warnings))
    logger.debug(
        f"Paper validation: {len(report.errors)} error(s), {len(report.warnings)} warning(s)"
    )
    return report


def format_validation_issues(report: PaperValidationReport) -> str:
    """Join issues as "Error: ..." / "Warning: ..." lines."""
    lines = [f"Error: {issue.message}" for issue in report.errors]
    lines.extend(f"Warning: {issue.message}" for issue in report.warnings)
    return "\n".join(lines)
