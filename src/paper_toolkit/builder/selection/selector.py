"""
Module: builder.selection.selector

Purpose:
    Main question selection algorithm. Picks MCQ, short and long questions
    for a paper from a question store, never repeating a question already
    recorded in the caller's session.

Key Functions:
    - select_questions(): Select questions for one PaperConfig
    - validate_availability(): Check the pool can satisfy a PaperConfig

Key Classes:
    - QuestionSelector: Binds a store to a session
    - ResolvedPaper: Chosen questions plus total marks
    - AvailabilityReport: Per-type available vs required counts

Algorithm:
    1. Fetch candidates for (class, subject, chapters) from the store
    2. Filter: chapter membership → difficulty → explicit excludes → session
    3. Shuffle the pool (seeded LCG or non-deterministic source)
    4. Take the first N of each type in shuffled order
    5. Record chosen ids in the session
    6. Total marks = sum of each chosen question's own marks

Dependencies:
    - paper_toolkit.core.models: Question, QuestionType
    - builder.loading.store: QuestionStore
    - builder.selection.random_source: Shuffling

Used By:
    - builder.controller: Build pipeline
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from paper_toolkit.core.models import Question, QuestionType

from ..loading.store import QuestionStore
from .config import PaperConfig
from .random_source import make_random, shuffle
from .session import SelectionSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeCounts:
    """Count per question type."""

    mcq: int = 0
    short: int = 0
    long: int = 0

    def get(self, question_type: QuestionType) -> int:
        return getattr(self, question_type.value)

    def to_dict(self) -> dict[str, int]:
        return {"mcq": self.mcq, "short": self.short, "long": self.long}


@dataclass(frozen=True)
class ResolvedPaper:
    """
    Output of selection (immutable).

    Attributes:
        mcqs: Chosen MCQs in shuffled order
        shorts: Chosen short questions in shuffled order
        longs: Chosen long questions in shuffled order
        total_marks: Sum of the chosen questions' own marks

    Example:
        >>> paper = select_questions(store, config, session)
        >>> paper.total_marks == sum(q.marks for q in paper.all_questions)
        True
    """

    mcqs: tuple[Question, ...]
    shorts: tuple[Question, ...]
    longs: tuple[Question, ...]
    total_marks: int

    @property
    def all_questions(self) -> tuple[Question, ...]:
        return self.mcqs + self.shorts + self.longs

    @property
    def question_ids(self) -> list[str]:
        return [q.id for q in self.all_questions]

    @property
    def counts(self) -> TypeCounts:
        return TypeCounts(len(self.mcqs), len(self.shorts), len(self.longs))

    def of_type(self, question_type: QuestionType) -> tuple[Question, ...]:
        return {
            QuestionType.MCQ: self.mcqs,
            QuestionType.SHORT: self.shorts,
            QuestionType.LONG: self.longs,
        }[question_type]


@dataclass(frozen=True)
class AvailabilityReport:
    """
    Whether the filtered pool can satisfy a request (immutable).

    Attributes:
        valid: True iff available >= required for every type
        available: Filtered pool size per type
        required: Requested count per type
    """

    valid: bool
    available: TypeCounts
    required: TypeCounts

    @property
    def shortfall(self) -> TypeCounts:
        """Questions missing per type (0 when enough are available)."""
        return TypeCounts(
            mcq=max(0, self.required.mcq - self.available.mcq),
            short=max(0, self.required.short - self.available.short),
            long=max(0, self.required.long - self.available.long),
        )

    def describe(self) -> list[str]:
        """Readable shortfall lines, empty when valid."""
        lines = []
        for question_type in QuestionType:
            missing = self.shortfall.get(question_type)
            if missing:
                lines.append(
                    f"Not enough {question_type.value} questions: "
                    f"{self.available.get(question_type)} available, "
                    f"{self.required.get(question_type)} required"
                )
        return lines


def select_questions(
    store: QuestionStore,
    config: PaperConfig,
    session: Optional[SelectionSession] = None,
) -> ResolvedPaper:
    """
    Select questions for a paper.

    Never raises for an undersized pool; fewer questions are returned
    instead. Use validate_availability() beforehand to detect shortfalls.

    Args:
        store: Question store to query
        config: Selection request
        session: Used-id record to honour and extend (a throwaway session
            is used when omitted)

    Returns:
        ResolvedPaper with the chosen questions

    Invariants:
        - No id appears twice in the result
        - No returned id was in the session before the call
        - Every returned question's chapter is in config.chapter_ids
    """
    return QuestionSelector(store, session).select_questions(config)


def validate_availability(
    store: QuestionStore,
    config: PaperConfig,
    session: Optional[SelectionSession] = None,
) -> AvailabilityReport:
    """Check availability without touching the session."""
    return QuestionSelector(store, session).validate_availability(config)


class QuestionSelector:
    """
    Selection orchestrator bound to one store and one session.

    Attributes:
        store: Question store
        session: Used-id record extended by each select_questions() call
    """

    def __init__(self, store: QuestionStore, session: Optional[SelectionSession] = None) -> None:
        self.store = store
        self.session = session if session is not None else SelectionSession()

    def select_questions(self, config: PaperConfig) -> ResolvedPaper:
        """Select questions and record them in the session."""
        pool = self._filtered_pool(config)
        rng = make_random(config.seed)
        shuffled = shuffle(pool, rng, config.shuffle_mode)

        chosen: dict[QuestionType, list[Question]] = {qt: [] for qt in QuestionType}
        for question in shuffled:
            bucket = chosen[question.type]
            if len(bucket) < config.count_for(question.type):
                bucket.append(question)

        paper = ResolvedPaper(
            mcqs=tuple(chosen[QuestionType.MCQ]),
            shorts=tuple(chosen[QuestionType.SHORT]),
            longs=tuple(chosen[QuestionType.LONG]),
            total_marks=sum(q.marks for bucket in chosen.values() for q in bucket),
        )
        self.session.mark_used(paper.question_ids)

        for question_type in QuestionType:
            got = len(paper.of_type(question_type))
            wanted = config.count_for(question_type)
            if got < wanted:
                logger.warning(
                    f"Only {got} of {wanted} {question_type.value} questions available "
                    f"for {config.class_id}/{config.subject_id}"
                )

        logger.info(
            f"Selected {len(paper.mcqs)} mcq, {len(paper.shorts)} short, "
            f"{len(paper.longs)} long ({paper.total_marks} marks, seed={config.seed})"
        )
        return paper

    def validate_availability(self, config: PaperConfig) -> AvailabilityReport:
        """Report available vs required counts; the session is not modified."""
        pool = self._filtered_pool(config)
        available = TypeCounts(
            mcq=sum(1 for q in pool if q.type == QuestionType.MCQ),
            short=sum(1 for q in pool if q.type == QuestionType.SHORT),
            long=sum(1 for q in pool if q.type == QuestionType.LONG),
        )
        required = TypeCounts(config.mcq_count, config.short_count, config.long_count)
        valid = all(available.get(qt) >= required.get(qt) for qt in QuestionType)

        report = AvailabilityReport(valid=valid, available=available, required=required)
        if not valid:
            for line in report.describe():
                logger.warning(line)
        return report

    def clear_session(self) -> None:
        """Forget previously used ids so the next selection starts fresh."""
        self.session.clear()

    # ─────────────────────────────────────────────────────────────────────────
    # Filtering
    # ─────────────────────────────────────────────────────────────────────────

    def _filtered_pool(self, config: PaperConfig) -> list[Question]:
        """Fetch candidates and apply every filter in order."""
        candidates = self.store.query(config.class_id, config.subject_id, config.chapter_ids)
        logger.debug(f"Store returned {len(candidates)} candidates")

        pool = _dedupe(candidates)

        chapters = config.chapter_set
        pool = [q for q in pool if q.chapter_id in chapters]
        logger.debug(f"After chapter filter: {len(pool)}")

        if config.difficulty is not None:
            pool = [q for q in pool if q.difficulty == config.difficulty]
            logger.debug(f"After difficulty filter ({config.difficulty.value}): {len(pool)}")

        if config.exclude_ids:
            pool = [q for q in pool if q.id not in config.exclude_ids]
            logger.debug(f"After exclude filter: {len(pool)}")

        pool = [q for q in pool if q.id not in self.session]
        logger.debug(f"After session filter: {len(pool)}")
        return pool


def _dedupe(questions: Sequence[Question]) -> list[Question]:
    """Drop repeated ids, keeping the first occurrence."""
    seen: set[str] = set()
    unique = []
    for question in questions:
        if question.id in seen:
            continue
        seen.add(question.id)
        unique.append(question)
    return unique
