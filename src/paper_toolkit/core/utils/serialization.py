"""
Serialization Utilities

Converts between question-bank JSON records and Question models.

Bank files group questions by chapter in three lists (mcqs, shortQuestions,
longQuestions) using camelCase keys. Questions themselves serialize with
Question.to_dict() for build metadata and SQLite rows.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

from ..models.questions import Difficulty, Question, QuestionType
from ..schemas.validator import validate_subject_file

# Marks assumed when a bank record omits them
BANK_DEFAULT_MARKS = {
    QuestionType.MCQ: 1,
    QuestionType.SHORT: 2,
    QuestionType.LONG: 9,
}

BANK_LISTS = {
    "mcqs": QuestionType.MCQ,
    "shortQuestions": QuestionType.SHORT,
    "longQuestions": QuestionType.LONG,
}


# ─────────────────────────────────────────────────────────────────────────────
# Question Records
# ─────────────────────────────────────────────────────────────────────────────

def question_from_record(
    record: dict[str, Any],
    question_type: QuestionType,
    chapter_id: str,
) -> Question:
    """
    Build a Question from a bank record.

    Args:
        record: Record from one of the chapter lists
        question_type: Type implied by the list the record came from
        chapter_id: Owning chapter id

    Returns:
        Question instance
    """
    marks = record.get("marks")
    if marks is None:
        marks = BANK_DEFAULT_MARKS[question_type]

    options: tuple[str, ...] = ()
    if question_type == QuestionType.MCQ:
        options = tuple(record.get("options") or ())

    return Question(
        id=record["id"],
        type=question_type,
        text=record.get("questionText", ""),
        chapter_id=chapter_id,
        marks=marks,
        difficulty=Difficulty(record.get("difficulty") or "medium"),
        options=options,
        correct_option_index=record.get("correctOption"),
        topic=record.get("topic"),
        answer=record.get("answer"),
    )


def question_to_record(question: Question) -> dict[str, Any]:
    """Inverse of question_from_record (chapter is implied by placement)."""
    record: dict[str, Any] = {
        "id": question.id,
        "questionText": question.text,
        "difficulty": question.difficulty.value,
        "marks": question.marks,
    }
    if question.is_mcq:
        record["options"] = list(question.options)
        if question.correct_option_index is not None:
            record["correctOption"] = question.correct_option_index
    elif question.answer:
        record["answer"] = question.answer
    if question.topic:
        record["topic"] = question.topic
    return record


# ─────────────────────────────────────────────────────────────────────────────
# Subject Files
# ─────────────────────────────────────────────────────────────────────────────

def iter_subject_questions(data: dict[str, Any]) -> Iterator[Question]:
    """Yield every question in a parsed subject file in file order."""
    for chapter in data.get("chapters", []):
        chapter_id = chapter["id"]
        for list_name, question_type in BANK_LISTS.items():
            for record in chapter.get(list_name) or []:
                yield question_from_record(record, question_type, chapter_id)


def load_subject_file(path: Path, *, strict: bool = False) -> list[Question]:
    """
    Load and validate a subject file.

    Raises:
        ValidationError: If content fails validation
        json.JSONDecodeError: If the file is not JSON
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    validate_subject_file(data, strict=strict)
    return list(iter_subject_questions(data))


def save_subject_file(
    path: Path,
    questions: list[Question],
    chapter_names: dict[str, str] | None = None,
) -> None:
    """Write questions to a subject file, grouped by chapter in first-seen order."""
    chapters: dict[str, dict[str, Any]] = {}
    list_for_type = {qt: name for name, qt in BANK_LISTS.items()}
    for question in questions:
        chapter = chapters.setdefault(
            question.chapter_id,
            {
                "id": question.chapter_id,
                "number": len(chapters) + 1,
                "name": (chapter_names or {}).get(question.chapter_id, question.chapter_id),
                "mcqs": [],
                "shortQuestions": [],
                "longQuestions": [],
            },
        )
        chapter[list_for_type[question.type]].append(question_to_record(question))

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"chapters": list(chapters.values())}, f, indent=2, ensure_ascii=False)
