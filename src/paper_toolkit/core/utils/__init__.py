"""
Utils Package

Serialization helpers for question-bank files.
"""

from .serialization import (
    BANK_DEFAULT_MARKS,
    iter_subject_questions,
    load_subject_file,
    question_from_record,
    question_to_record,
    save_subject_file,
)

__all__ = [
    "BANK_DEFAULT_MARKS",
    "iter_subject_questions",
    "load_subject_file",
    "question_from_record",
    "question_to_record",
    "save_subject_file",
]
