"""
Schema Validation Utilities

Validates question-bank JSON against the bundled schema.

Basic structural checks run on every load and produce readable messages for
the common mistakes (missing chapters, wrong option count). Strict mode runs
the full JSON Schema through jsonschema and reports every violation with its
path.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}

_QUESTION_LISTS = ("mcqs", "shortQuestions", "longQuestions")


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_subject_file(data: Any, *, strict: bool = False) -> None:
    """
    Validate a question-bank subject file.

    Args:
        data: Parsed JSON content
        strict: If True, also run the full JSON Schema

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Subject file must be an object, got {type(data).__name__}", path=""
        )

    chapters = data.get("chapters")
    if not isinstance(chapters, list):
        raise ValidationError("Missing required field: chapters", path="chapters")

    for c_idx, chapter in enumerate(chapters):
        if not isinstance(chapter, dict) or not chapter.get("id"):
            raise ValidationError(
                f"Chapter {c_idx} is missing an id", path=f"chapters/{c_idx}"
            )
        for list_name in _QUESTION_LISTS:
            for q_idx, record in enumerate(chapter.get(list_name) or []):
                validate_question_record(
                    record,
                    mcq=list_name == "mcqs",
                    path=f"chapters/{c_idx}/{list_name}/{q_idx}",
                )

    if strict:
        _validate_with_schema(data, "question_bank")


def validate_question_record(record: Any, *, mcq: bool, path: str = "") -> None:
    """
    Basic checks for a single question record.

    Raises:
        ValidationError: If the record is unusable
    """
    if not isinstance(record, dict):
        raise ValidationError(f"Question record must be an object: {path}", path=path)

    required = ["id", "questionText"] + (["options"] if mcq else [])
    missing = [f for f in required if f not in record]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing],
        )

    if mcq:
        options = record["options"]
        if not isinstance(options, list) or len(options) != 4:
            raise ValidationError(
                f"MCQ {record['id']} must have 4 options", path=f"{path}/options"
            )
        correct = record.get("correctOption")
        if correct is not None and not (isinstance(correct, int) and 0 <= correct <= 3):
            raise ValidationError(
                f"Invalid correctOption {correct!r} for {record['id']}",
                path=f"{path}/correctOption",
            )

    marks = record.get("marks")
    if marks is not None and (not isinstance(marks, int) or marks < 0):
        raise ValidationError(
            f"Invalid marks {marks!r} for {record['id']}", path=f"{path}/marks"
        )


def _validate_with_schema(data: Any, schema_name: str) -> None:
    """Run full JSON Schema validation, collecting every error."""
    schema = _load_schema(schema_name)
    validator = jsonschema.Draft7Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        messages = [
            f"{'/'.join(str(p) for p in err.path) or '<root>'}: {err.message}"
            for err in errors
        ]
        first = errors[0]
        raise ValidationError(
            f"Schema validation failed: {messages[0]}",
            path="/".join(str(p) for p in first.path),
            errors=messages,
        )
