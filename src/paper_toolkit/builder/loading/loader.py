"""
Module: builder.loading.loader

Purpose:
    Load questions from flat JSON content files laid out as
    <root>/<class_id>/<subject>.json, validated against the question-bank
    schema and cached per (class, subject).

Key Functions:
    - load_questions(): Load one subject file with filters
    - discover_subjects(): (class, subject) pairs present under a root

Key Classes:
    - LoaderError: Exception for loading failures
    - JsonQuestionStore: QuestionStore backed by the content files

Dependencies:
    - pathlib (std)
    - paper_toolkit.core.utils: Record conversion
    - paper_toolkit.core.schemas: jsonschema validation

Used By:
    - paper_toolkit.__main__: CLI --bank option
    - builder.controller callers holding content on disk
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from paper_toolkit.core.models import Difficulty, Question, QuestionType
from paper_toolkit.core.schemas import ValidationError
from paper_toolkit.core.utils import load_subject_file

from .store import subject_key

logger = logging.getLogger(__name__)


class LoaderError(Exception):
    """Error loading questions from a content file."""
    pass


def subject_path(root: Path, class_id: str, subject_id: str) -> Path:
    """Content file path for a (class, subject) pair."""
    class_key, subject = subject_key(class_id, subject_id)
    return root / class_key / f"{subject}.json"


def load_questions(
    root: Path,
    class_id: str,
    subject_id: str,
    *,
    chapter_ids: Optional[Sequence[str]] = None,
    difficulty: Optional[Difficulty] = None,
    strict: bool = False,
) -> List[Question]:
    """
    Load one subject file.

    Args:
        root: Content root
        class_id: Class folder, e.g. "9th"
        subject_id: Subject file stem, e.g. "physics"
        chapter_ids: Optional chapter filter
        difficulty: Optional difficulty filter
        strict: Validate every record against the JSON schema

    Returns:
        Questions in file order. A missing file gives an empty list.

    Raises:
        LoaderError: If the file is not JSON or fails validation

    Example:
        >>> questions = load_questions(Path("content"), "9th", "physics", chapter_ids=["ch1"])
        >>> len(questions)
        30
    """
    path = subject_path(root, class_id, subject_id)
    if not path.exists():
        logger.warning(f"No content file for {class_id}/{subject_id}: {path}")
        return []

    try:
        questions = load_subject_file(path, strict=strict)
    except json.JSONDecodeError as e:
        raise LoaderError(f"Malformed JSON in {path}: {e}") from e
    except ValidationError as e:
        raise LoaderError(f"Invalid content file {path}: {e}") from e
    except ValueError as e:
        raise LoaderError(f"Invalid question in {path}: {e}") from e

    if chapter_ids is not None:
        chapters = set(chapter_ids)
        questions = [q for q in questions if q.chapter_id in chapters]
    if difficulty is not None:
        questions = [q for q in questions if q.difficulty == difficulty]

    logger.info(f"Loaded {len(questions)} questions from {path}")
    return questions


def discover_subjects(root: Path) -> List[Tuple[str, str]]:
    """List (class_id, subject) pairs with a content file, sorted."""
    if not root.exists():
        return []
    return sorted(
        (path.parent.name, path.stem)
        for path in root.glob("*/*.json")
        if path.is_file()
    )


class JsonQuestionStore:
    """
    QuestionStore over a directory of subject files.

    Each subject file is read once and kept for the lifetime of the store.

    Example:
        >>> store = JsonQuestionStore(Path("content"))
        >>> store.query("9th", "physics", ["ch1"], QuestionType.MCQ)
    """

    def __init__(self, root: Path, *, strict: bool = False):
        self.root = Path(root)
        self.strict = strict
        self._cache: Dict[Tuple[str, str], List[Question]] = {}

    def _subject_questions(self, class_id: str, subject_id: str) -> List[Question]:
        key = subject_key(class_id, subject_id)
        if key not in self._cache:
            self._cache[key] = load_questions(
                self.root, class_id, subject_id, strict=self.strict
            )
        return self._cache[key]

    def query(
        self,
        class_id: str,
        subject_id: str,
        chapter_ids: Sequence[str],
        question_type: Optional[QuestionType] = None,
    ) -> List[Question]:
        chapters = set(chapter_ids)
        return [
            q for q in self._subject_questions(class_id, subject_id)
            if q.chapter_id in chapters
            and (question_type is None or q.type == question_type)
        ]

    def clear_cache(self) -> None:
        """Forget loaded files so the next query re-reads them."""
        self._cache.clear()
