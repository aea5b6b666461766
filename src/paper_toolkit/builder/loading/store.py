"""
Module: builder.loading.store

Purpose:
    The query capability the selection engine needs from a question bank,
    plus a list-backed implementation.

Key Classes:
    - QuestionStore: Protocol with a single query() method
    - InMemoryQuestionStore: Questions held in memory per (class, subject)

Key Functions:
    - chapter_stats(): Per-chapter question counts from any store

Used By:
    - builder.selection.selector: Candidate fetch
    - builder.loading.loader: JsonQuestionStore
    - builder.loading.sqlite_store: SqliteQuestionStore
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence, runtime_checkable

from paper_toolkit.core.models import Question, QuestionType

logger = logging.getLogger(__name__)


@runtime_checkable
class QuestionStore(Protocol):
    """
    Read access to a question bank.

    Results are best-effort filtered: callers re-apply the chapter filter.
    """

    def query(
        self,
        class_id: str,
        subject_id: str,
        chapter_ids: Sequence[str],
        question_type: Optional[QuestionType] = None,
    ) -> list[Question]: ...


def subject_key(class_id: str, subject_id: str) -> tuple[str, str]:
    """Normalized (class, subject) lookup key."""
    return (class_id.strip().lower(), subject_id.strip().lower())


class InMemoryQuestionStore:
    """
    List-backed store.

    Example:
        >>> store = InMemoryQuestionStore()
        >>> store.add("9th", "physics", questions)
        >>> len(store.query("9th", "Physics", ["ch1"]))
        12
    """

    def __init__(self) -> None:
        self._questions: dict[tuple[str, str], list[Question]] = defaultdict(list)

    @classmethod
    def from_questions(
        cls, class_id: str, subject_id: str, questions: Iterable[Question]
    ) -> InMemoryQuestionStore:
        store = cls()
        store.add(class_id, subject_id, questions)
        return store

    def add(self, class_id: str, subject_id: str, questions: Iterable[Question]) -> None:
        """Append questions for a (class, subject) pair."""
        self._questions[subject_key(class_id, subject_id)].extend(questions)

    def query(
        self,
        class_id: str,
        subject_id: str,
        chapter_ids: Sequence[str],
        question_type: Optional[QuestionType] = None,
    ) -> list[Question]:
        chapters = set(chapter_ids)
        return [
            q for q in self._questions.get(subject_key(class_id, subject_id), [])
            if q.chapter_id in chapters
            and (question_type is None or q.type == question_type)
        ]

    def all_questions(self, class_id: str, subject_id: str) -> list[Question]:
        return list(self._questions.get(subject_key(class_id, subject_id), []))


@dataclass(frozen=True)
class ChapterStats:
    """Question counts for one chapter."""

    chapter_id: str
    mcq_count: int = 0
    short_count: int = 0
    long_count: int = 0

    @property
    def total(self) -> int:
        return self.mcq_count + self.short_count + self.long_count


def chapter_stats(
    store: QuestionStore,
    class_id: str,
    subject_id: str,
    chapter_ids: Sequence[str],
) -> list[ChapterStats]:
    """
    Count questions per chapter and type.

    Chapters are reported in the order given, including empty ones.
    """
    counts: dict[str, dict[QuestionType, int]] = {
        cid: {qt: 0 for qt in QuestionType} for cid in chapter_ids
    }
    for question in store.query(class_id, subject_id, chapter_ids):
        if question.chapter_id in counts:
            counts[question.chapter_id][question.type] += 1

    return [
        ChapterStats(
            chapter_id=cid,
            mcq_count=c[QuestionType.MCQ],
            short_count=c[QuestionType.SHORT],
            long_count=c[QuestionType.LONG],
        )
        for cid, c in counts.items()
    ]
