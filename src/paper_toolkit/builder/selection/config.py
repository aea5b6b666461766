"""
Module: builder.selection.config

Purpose:
    Configuration dataclass for the selection engine.
    Immutable configuration with validation on construction.

Key Classes:
    - PaperConfig: What to select (class, subject, chapters, per-type counts)

Dependencies:
    - dataclasses (std)

Used By:
    - builder.selection.selector: Main selector
    - builder.config: BuilderConfig
    - builder.controller: Build controller
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from paper_toolkit.core.models import Difficulty, PaperPattern, QuestionType

from .random_source import ShuffleMode


@dataclass(frozen=True)
class PaperConfig:
    """
    Selection request for one paper (immutable).

    Attributes:
        class_id: Class like "9th"
        subject_id: Subject like "physics"
        chapter_ids: Chapters questions may come from
        mcq_count: MCQs to select
        short_count: Short questions to select
        long_count: Long questions to select
        difficulty: Only select questions of this difficulty
        exclude_ids: Question ids never to select
        seed: Seed for reproducible shuffling (None = non-deterministic)
        shuffle_mode: Pool permutation strategy

    Invariants:
        - counts >= 0
        - chapter_ids non-empty

    Example:
        >>> config = PaperConfig(
        ...     class_id="9th", subject_id="physics",
        ...     chapter_ids=("ch1", "ch2"),
        ...     mcq_count=5, short_count=3, long_count=2, seed=12345,
        ... )
        >>> config.requested_total
        10
    """

    class_id: str
    subject_id: str
    chapter_ids: tuple[str, ...]
    mcq_count: int = 0
    short_count: int = 0
    long_count: int = 0
    difficulty: Optional[Difficulty] = None
    exclude_ids: frozenset[str] = frozenset()
    seed: Optional[int] = None
    shuffle_mode: ShuffleMode = ShuffleMode.UNIFORM

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        # Accept lists/sets from callers but store hashable forms
        if not isinstance(self.chapter_ids, tuple):
            object.__setattr__(self, "chapter_ids", tuple(self.chapter_ids))
        if not isinstance(self.exclude_ids, frozenset):
            object.__setattr__(self, "exclude_ids", frozenset(self.exclude_ids))

        if not self.class_id:
            raise ValueError("class_id must be non-empty")
        if not self.subject_id:
            raise ValueError("subject_id must be non-empty")
        if not self.chapter_ids:
            raise ValueError("chapter_ids must contain at least one chapter")
        for name in ("mcq_count", "short_count", "long_count"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative: {value}")

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def chapter_set(self) -> frozenset[str]:
        return frozenset(self.chapter_ids)

    @property
    def requested_total(self) -> int:
        """Total number of questions requested."""
        return self.mcq_count + self.short_count + self.long_count

    def count_for(self, question_type: QuestionType) -> int:
        """Requested count for one question type."""
        return {
            QuestionType.MCQ: self.mcq_count,
            QuestionType.SHORT: self.short_count,
            QuestionType.LONG: self.long_count,
        }[question_type]

    @classmethod
    def for_pattern(
        cls,
        pattern: PaperPattern,
        chapter_ids: tuple[str, ...] | list[str],
        *,
        subject_id: Optional[str] = None,
        **kwargs,
    ) -> PaperConfig:
        """
        Build a config whose counts fill every section of ``pattern``.

        Args:
            pattern: Resolved paper pattern
            chapter_ids: Chapters to draw from
            subject_id: Subject id (defaults to the pattern subject lower-cased)
            **kwargs: Other PaperConfig fields (difficulty, seed, ...)
        """
        return cls(
            class_id=pattern.class_id,
            subject_id=subject_id or pattern.subject.lower(),
            chapter_ids=tuple(chapter_ids),
            mcq_count=pattern.required_count(QuestionType.MCQ),
            short_count=pattern.required_count(QuestionType.SHORT),
            long_count=pattern.required_count(QuestionType.LONG),
            **kwargs,
        )
