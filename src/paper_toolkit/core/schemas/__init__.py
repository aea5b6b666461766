"""
Schemas Package

JSON Schema definitions and validation helpers for question-bank files.
"""

from .validator import ValidationError, validate_question_record, validate_subject_file

__all__ = [
    "ValidationError",
    "validate_question_record",
    "validate_subject_file",
]
