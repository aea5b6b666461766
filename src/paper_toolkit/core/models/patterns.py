"""
Module: patterns

Purpose:
    Immutable description of a board exam paper layout: which numbered
    sections appear, what type of question each holds, how many are shown,
    how many must be attempted and how each is marked.

Key Classes:
    - SectionType: mcq / short / long / writing
    - QuestionSection: One numbered section (e.g. "Q2: Short Questions")
    - PaperPattern: Ordered sections for one (class, subject) pair

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - builder.patterns.catalog: Pattern data
    - builder.patterns.resolver: Pattern lookup
    - builder.layout.distributor: Section distribution
    - builder.output.renderer: Section rendering
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .questions import QuestionType


class SectionType(str, Enum):
    """Kind of section in a paper pattern."""

    MCQ = "mcq"
    SHORT = "short"
    LONG = "long"
    WRITING = "writing"

    @property
    def question_type(self) -> Optional[QuestionType]:
        """Bank question type filling this section (None for writing)."""
        if self is SectionType.WRITING:
            return None
        return QuestionType(self.value)

    @property
    def is_objective(self) -> bool:
        return self is SectionType.MCQ

    @property
    def is_subjective(self) -> bool:
        return self is not SectionType.MCQ


@dataclass(frozen=True)
class QuestionSection:
    """
    One numbered section of a paper pattern (immutable).

    Attributes:
        q_number: Section number printed as "Q{n}:"
        title: Section title, e.g. "Short Questions"
        instruction: Instruction line, e.g. "Attempt any 5 short questions."
        type: Section type
        total_questions: How many questions are shown
        attempt_count: How many the student must answer
        marks_per_question: Marks for each attempted question
        marks_formula: Static display string from the board pattern
        total_marks_override: Explicit section total (writing sections whose
            marks do not follow attempt × marks_per_question)
        has_sub_parts: Long questions split into (a)/(b) parts
        sub_part_marks: Marks for each sub-part, e.g. (5, 4)
        special_note: Optional note printed under the section bar
        writing_prompt: Prompt line for writing sections
        answer_lines: Ruled lines for writing sections (derived if None)

    Invariants:
        - q_number >= 1, marks_per_question >= 0
        - 0 <= attempt_count <= total_questions
        - writing sections have total_questions == attempt_count == 1

    Example:
        >>> sec = QuestionSection(
        ...     q_number=2, title="Short Questions",
        ...     instruction="Attempt any 5 short questions.",
        ...     type=SectionType.SHORT, total_questions=8,
        ...     attempt_count=5, marks_per_question=2,
        ... )
        >>> sec.total_marks
        10
    """

    q_number: int
    title: str
    instruction: str
    type: SectionType
    total_questions: int
    attempt_count: int
    marks_per_question: int
    marks_formula: str = ""
    total_marks_override: Optional[int] = None
    has_sub_parts: bool = False
    sub_part_marks: tuple[int, ...] = ()
    special_note: Optional[str] = None
    writing_prompt: Optional[str] = None
    answer_lines: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate section on construction."""
        if self.q_number < 1:
            raise ValueError(f"q_number must be positive: {self.q_number}")
        if self.marks_per_question < 0:
            raise ValueError(
                f"marks_per_question cannot be negative: {self.marks_per_question} "
                f"(Q{self.q_number})"
            )
        if self.attempt_count < 0 or self.attempt_count > self.total_questions:
            raise ValueError(
                f"attempt_count ({self.attempt_count}) must be within 0.."
                f"{self.total_questions} (Q{self.q_number})"
            )
        if self.type is SectionType.WRITING and not (
            self.total_questions == 1 and self.attempt_count == 1
        ):
            raise ValueError(
                f"Writing section Q{self.q_number} must have exactly one "
                f"question and one attempt"
            )
        if self.total_marks_override is not None and self.total_marks_override < 0:
            raise ValueError(
                f"total_marks_override cannot be negative: {self.total_marks_override}"
            )
        if self.answer_lines is not None and self.answer_lines < 0:
            raise ValueError(f"answer_lines cannot be negative: {self.answer_lines}")

    @property
    def total_marks(self) -> int:
        """Declared section total (override or attempt × marks_per_question)."""
        if self.total_marks_override is not None:
            return self.total_marks_override
        return self.attempt_count * self.marks_per_question

    @property
    def display_formula(self) -> str:
        """Static formula from the pattern, computed when not supplied."""
        if self.marks_formula:
            return self.marks_formula
        if self.type is SectionType.WRITING:
            return f"{self.total_marks} Marks"
        return f"{self.attempt_count} × {self.marks_per_question} = {self.total_marks}"


@dataclass(frozen=True)
class PaperPattern:
    """
    Board paper layout for one (class, subject) pair (immutable).

    Attributes:
        class_id: Class like "9th"
        subject: Subject like "Physics"
        total_marks: Declared paper total
        time_allowed: Display string like "2 Hours"
        sections: Sections in Q-number order
        class_group: "matric" / "intermediate" / None for the generic default

    Invariants:
        - at least one section
        - q_numbers strictly increasing
    """

    class_id: str
    subject: str
    total_marks: int
    time_allowed: str
    sections: tuple[QuestionSection, ...]
    class_group: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate pattern on construction."""
        if not self.sections:
            raise ValueError(f"Pattern {self.key} must have at least one section")
        numbers = [s.q_number for s in self.sections]
        if any(b <= a for a, b in zip(numbers, numbers[1:])):
            raise ValueError(f"Section numbers must be increasing in {self.key}: {numbers}")
        if self.total_marks < 0:
            raise ValueError(f"total_marks cannot be negative: {self.total_marks}")

    @property
    def key(self) -> str:
        """Catalog key, lower-cased "{class_id}_{subject}"."""
        return f"{self.class_id}_{self.subject}".lower()

    @property
    def computed_total(self) -> int:
        """Sum of the declared section totals."""
        return sum(s.total_marks for s in self.sections)

    def sections_of(self, section_type: SectionType) -> tuple[QuestionSection, ...]:
        """Sections of one type in pattern order."""
        return tuple(s for s in self.sections if s.type is section_type)

    def required_count(self, question_type: QuestionType) -> int:
        """Questions of a bank type needed to fill every section of that type."""
        return sum(
            s.total_questions for s in self.sections
            if s.type.question_type is question_type
        )

    def get_section(self, q_number: int) -> Optional[QuestionSection]:
        """Find a section by its Q number."""
        for section in self.sections:
            if section.q_number == q_number:
                return section
        return None
