"""
Module: questions

Purpose:
    Provides the Question dataclass - the immutable content record handed
    from the question store to the paper assembly engine - plus the
    QuestionOverride record used to overlay manual edits at render time.

Key Functions:
    - Question.to_dict() / Question.from_dict(): Serialization
    - QuestionOverride.apply(): Produce an edited copy of a question

Key Classes:
    - QuestionType: mcq / short / long
    - Difficulty: easy / medium / hard
    - Question: Immutable question record
    - QuestionOverride: Partial per-question edit overlay

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - builder.selection.selector: Selection engine
    - builder.layout.distributor: Section distribution
    - builder.output.renderer: Document rendering
    - core.utils.serialization: Bank record conversion

Design Note:
    Questions are never mutated by the engine. Edits made while previewing a
    paper are kept beside the question as a QuestionOverride keyed by id and
    applied only when rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

MCQ_OPTION_COUNT = 4
OPTION_LABELS = ("A", "B", "C", "D")


class QuestionType(str, Enum):
    """Kind of question as stored in the bank."""

    MCQ = "mcq"
    SHORT = "short"
    LONG = "long"


class Difficulty(str, Enum):
    """Author-assigned difficulty level."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# Punjab Board standard marks per question type
DEFAULT_MARKS = {
    QuestionType.MCQ: 1,
    QuestionType.SHORT: 2,
    QuestionType.LONG: 5,
}


@dataclass(frozen=True)
class Question:
    """
    Complete question record (immutable).

    Attributes:
        id: Unique identifier like "9_phy_ch1_mcq_4"
        type: Question type (mcq/short/long)
        text: Question text, may contain $...$ / \\(...\\) math
        chapter_id: Chapter the question belongs to
        marks: Marks the author assigned to the question
        difficulty: Difficulty level
        options: Exactly four options for MCQs, empty otherwise
        correct_option_index: Index (0-3) of the correct MCQ option
        topic: Optional topic such as "Exercise" or "Additional"
        answer: Optional model answer for short/long questions

    Invariants:
        - id is non-empty, marks >= 0
        - MCQs have exactly 4 options; other types have none
        - correct_option_index is None or within 0..3

    Example:
        >>> q = Question(
        ...     id="9_phy_ch1_s1",
        ...     type=QuestionType.SHORT,
        ...     text="Define density.",
        ...     chapter_id="9_phy_ch1",
        ...     marks=2,
        ... )
        >>> q.is_mcq
        False
    """

    id: str
    type: QuestionType
    text: str
    chapter_id: str
    marks: int
    difficulty: Difficulty = Difficulty.MEDIUM
    options: tuple[str, ...] = ()
    correct_option_index: Optional[int] = None
    topic: Optional[str] = None
    answer: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate question on construction."""
        if not self.id:
            raise ValueError("Question id must be non-empty")
        if self.marks < 0:
            raise ValueError(f"Marks cannot be negative: {self.marks} ({self.id})")
        if not isinstance(self.type, QuestionType):
            raise ValueError(f"Invalid question type: {self.type!r} ({self.id})")
        if not isinstance(self.difficulty, Difficulty):
            raise ValueError(f"Invalid difficulty: {self.difficulty!r} ({self.id})")

        if self.type == QuestionType.MCQ:
            if len(self.options) != MCQ_OPTION_COUNT:
                raise ValueError(
                    f"MCQ {self.id} must have {MCQ_OPTION_COUNT} options, "
                    f"got {len(self.options)}"
                )
        elif self.options:
            raise ValueError(f"Only MCQs carry options: {self.id}")

        if self.correct_option_index is not None and not (
            0 <= self.correct_option_index < MCQ_OPTION_COUNT
        ):
            raise ValueError(
                f"correct_option_index must be 0-3: {self.correct_option_index} ({self.id})"
            )

    @property
    def is_mcq(self) -> bool:
        """True for multiple-choice questions."""
        return self.type == QuestionType.MCQ

    @property
    def correct_letter(self) -> Optional[str]:
        """Letter (A-D) of the correct option, if known."""
        if self.correct_option_index is None:
            return None
        return OPTION_LABELS[self.correct_option_index]

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON storage.

        Returns:
            Dict representation (enum values as strings)
        """
        d = {
            "id": self.id,
            "type": self.type.value,
            "text": self.text,
            "chapter_id": self.chapter_id,
            "marks": self.marks,
            "difficulty": self.difficulty.value,
        }
        if self.options:
            d["options"] = list(self.options)
        if self.correct_option_index is not None:
            d["correct_option_index"] = self.correct_option_index
        if self.topic:
            d["topic"] = self.topic
        if self.answer:
            d["answer"] = self.answer
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Question:
        """
        Deserialize from dictionary produced by to_dict().

        Args:
            data: Dict representation

        Returns:
            Question instance
        """
        return cls(
            id=data["id"],
            type=QuestionType(data["type"]),
            text=data["text"],
            chapter_id=data["chapter_id"],
            marks=data["marks"],
            difficulty=Difficulty(data.get("difficulty", "medium")),
            options=tuple(data.get("options", ())),
            correct_option_index=data.get("correct_option_index"),
            topic=data.get("topic"),
            answer=data.get("answer"),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"Question({self.id!r}, {self.type.value}, marks={self.marks}, "
            f"chapter={self.chapter_id!r})"
        )


@dataclass(frozen=True)
class QuestionOverride:
    """
    Partial edit applied on top of a stored question when rendering.

    Only the fields that are set replace the stored values; everything else
    comes from the original question.

    Attributes:
        text: Replacement question text
        options: Replacement MCQ options (must be 4 when given)

    Example:
        >>> edited = QuestionOverride(text="Define speed.").apply(q)
        >>> edited.text
        'Define speed.'
    """

    text: Optional[str] = None
    options: Optional[tuple[str, ...]] = None

    def __post_init__(self) -> None:
        """Validate override on construction."""
        if self.options is not None and len(self.options) != MCQ_OPTION_COUNT:
            raise ValueError(
                f"Option override must have {MCQ_OPTION_COUNT} entries, "
                f"got {len(self.options)}"
            )

    @property
    def is_empty(self) -> bool:
        """True when the override changes nothing."""
        return self.text is None and self.options is None

    def apply(self, question: Question) -> Question:
        """
        Return a copy of ``question`` with the overridden fields replaced.

        Option overrides are ignored for non-MCQ questions.
        """
        changes = {}
        if self.text is not None:
            changes["text"] = self.text
        if self.options is not None and question.is_mcq:
            changes["options"] = tuple(self.options)
        if not changes:
            return question
        return replace(question, **changes)
