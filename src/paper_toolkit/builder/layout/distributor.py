"""
Module: builder.layout.distributor

Purpose:
    Place selected questions into the numbered sections of a paper
    pattern and derive each section's effective attempt count and marks
    from the questions it actually received.

Key Functions:
    - distribute_paper(): Allocate every question type across a pattern
    - distribute_section_type(): Allocate one type's list across its sections

Key Classes:
    - SectionDistributor: Allocation strategy protocol
    - SequentialDistributor: Each section claims the next N (default)
    - BalancedDistributor: Shortages spread round-robin across sections
    - SectionAllocation: Questions placed in one section plus live marks
    - DistributedPaper: All allocations plus unplaced questions

Algorithm (sequential):
    Sections of a type are visited in pattern order; each claims the next
    total_questions items from the front of the shared list. When the list
    runs out, later sections get fewer (or none). No rebalancing.

Dependencies:
    - paper_toolkit.core.models: PaperPattern, QuestionSection, Question
    - builder.marks.calculator: MarkOverrides

Used By:
    - builder.controller: Build pipeline
    - builder.output.renderer: Section blocks
    - builder.output.answer_key: Paper-order numbering
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from paper_toolkit.core.models import (
    PaperPattern,
    Question,
    QuestionSection,
    QuestionType,
    SectionType,
)

from ..marks.calculator import MarkOverrides
from ..selection.selector import ResolvedPaper

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Strategies
# ─────────────────────────────────────────────────────────────────────────────

class SectionDistributor(Protocol):
    """Splits one question type's list across that type's sections."""

    def allocate(
        self,
        sections: Sequence[QuestionSection],
        questions: Sequence[Question],
    ) -> list[tuple[Question, ...]]:
        """Return one tuple per section, in section order."""
        ...


class SequentialDistributor:
    """
    Each section claims the next ``total_questions`` items.

    Example:
        Two 8-question sections fed 10 questions get 8 and 2.
    """

    def allocate(
        self,
        sections: Sequence[QuestionSection],
        questions: Sequence[Question],
    ) -> list[tuple[Question, ...]]:
        result = []
        cursor = 0
        for section in sections:
            take = questions[cursor:cursor + section.total_questions]
            cursor += len(take)
            result.append(tuple(take))
        return result


class BalancedDistributor:
    """
    Deal questions round-robin to sections that still have room.

    Example:
        Two 8-question sections fed 10 questions get 5 and 5.
    """

    def allocate(
        self,
        sections: Sequence[QuestionSection],
        questions: Sequence[Question],
    ) -> list[tuple[Question, ...]]:
        buckets: list[list[Question]] = [[] for _ in sections]
        remaining = deque(questions)
        while remaining:
            placed = False
            for idx, section in enumerate(sections):
                if not remaining:
                    break
                if len(buckets[idx]) < section.total_questions:
                    buckets[idx].append(remaining.popleft())
                    placed = True
            if not placed:
                break
        return [tuple(b) for b in buckets]


# ─────────────────────────────────────────────────────────────────────────────
# Results
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SectionAllocation:
    """
    Questions placed in one section with live marks (immutable).

    Attributes:
        section: Pattern section
        questions: Questions assigned to the section
        marks_per_question: Effective marks per question (override or pattern)

    Writing sections hold no bank questions; their marks come straight from
    the pattern.
    """

    section: QuestionSection
    questions: tuple[Question, ...]
    marks_per_question: int

    @property
    def is_writing(self) -> bool:
        return self.section.type is SectionType.WRITING

    @property
    def assigned_count(self) -> int:
        return len(self.questions)

    @property
    def attempt_count(self) -> int:
        """Pattern attempt count, reduced to what was actually assigned."""
        if self.is_writing:
            return self.section.attempt_count
        return min(self.section.attempt_count, self.assigned_count)

    @property
    def total_marks(self) -> int:
        if self.is_writing:
            return self.section.total_marks
        return self.attempt_count * self.marks_per_question

    @property
    def marks_formula(self) -> str:
        """Live formula, e.g. "2 × 2 = 4" for a short-filled section."""
        if self.is_writing:
            return self.section.display_formula
        return f"{self.attempt_count} × {self.marks_per_question} = {self.total_marks}"

    @property
    def shortfall(self) -> int:
        """Questions missing against the pattern (0 for writing sections)."""
        if self.is_writing:
            return 0
        return max(0, self.section.total_questions - self.assigned_count)

    @property
    def is_empty(self) -> bool:
        return not self.is_writing and not self.questions

    @property
    def instruction(self) -> str:
        """Pattern instruction, rewritten when fewer questions were placed."""
        if (
            self.section.type is not SectionType.SHORT
            and self.section.type is not SectionType.LONG
        ) or self.attempt_count == self.section.attempt_count:
            return self.section.instruction
        noun = "short questions" if self.section.type is SectionType.SHORT else "questions"
        if self.attempt_count >= self.assigned_count:
            return f"Attempt all {noun}."
        return f"Attempt any {self.attempt_count} {noun}."


@dataclass(frozen=True)
class DistributedPaper:
    """
    A pattern with every section's questions assigned (immutable).

    Attributes:
        pattern: Resolved paper pattern
        allocations: One allocation per pattern section, in order
        unplaced: Questions beyond every section's capacity
    """

    pattern: PaperPattern
    allocations: tuple[SectionAllocation, ...]
    unplaced: tuple[Question, ...] = ()

    @property
    def total_marks(self) -> int:
        """Live grand total across sections."""
        return sum(a.total_marks for a in self.allocations)

    def allocation_for(self, q_number: int) -> Optional[SectionAllocation]:
        for allocation in self.allocations:
            if allocation.section.q_number == q_number:
                return allocation
        return None

    def allocations_of(self, section_type: SectionType) -> tuple[SectionAllocation, ...]:
        return tuple(a for a in self.allocations if a.section.type is section_type)

    def questions_of(self, question_type: QuestionType) -> tuple[Question, ...]:
        """Placed questions of a type in paper order."""
        return tuple(
            q
            for a in self.allocations
            if a.section.type.question_type is question_type
            for q in a.questions
        )

    @property
    def placed_questions(self) -> tuple[Question, ...]:
        return tuple(q for a in self.allocations for q in a.questions)


# ─────────────────────────────────────────────────────────────────────────────
# Entry Points
# ─────────────────────────────────────────────────────────────────────────────

def distribute_section_type(
    pattern: PaperPattern,
    section_type: SectionType,
    questions: Sequence[Question],
    distributor: Optional[SectionDistributor] = None,
) -> tuple[list[tuple[QuestionSection, tuple[Question, ...]]], tuple[Question, ...]]:
    """
    Allocate one type's questions across the pattern's sections of that type.

    Returns:
        (section, questions) pairs in pattern order, and the unplaced questions
    """
    strategy = distributor or SequentialDistributor()
    sections = pattern.sections_of(section_type)
    if not sections:
        return [], tuple(questions)

    slices = strategy.allocate(sections, questions)
    placed_ids = {q.id for chunk in slices for q in chunk}
    unplaced = tuple(q for q in questions if q.id not in placed_ids)
    return list(zip(sections, slices)), unplaced


def distribute_paper(
    pattern: PaperPattern,
    paper: ResolvedPaper,
    distributor: Optional[SectionDistributor] = None,
    mark_overrides: Optional[MarkOverrides] = None,
) -> DistributedPaper:
    """
    Allocate a resolved paper's questions across a pattern.

    Args:
        pattern: Resolved pattern
        paper: Selected questions
        distributor: Allocation strategy (SequentialDistributor by default)
        mark_overrides: Marks per question by type, replacing the pattern's

    Returns:
        DistributedPaper; short-filled sections are not an error
    """
    overrides = mark_overrides or MarkOverrides()
    assigned: dict[int, tuple[Question, ...]] = {}
    unplaced: list[Question] = []

    for question_type in QuestionType:
        section_type = SectionType(question_type.value)
        pairs, leftover = distribute_section_type(
            pattern, section_type, paper.of_type(question_type), distributor
        )
        for section, chunk in pairs:
            assigned[section.q_number] = chunk
        if leftover:
            logger.warning(
                f"{len(leftover)} {question_type.value} question(s) did not fit "
                f"any section of {pattern.key}"
            )
            unplaced.extend(leftover)

    allocations = []
    for section in pattern.sections:
        question_type = section.type.question_type
        mpq = section.marks_per_question
        if question_type is not None and overrides.get(question_type) is not None:
            mpq = overrides.get(question_type)
        allocation = SectionAllocation(
            section=section,
            questions=assigned.get(section.q_number, ()),
            marks_per_question=mpq,
        )
        if allocation.shortfall:
            logger.info(
                f"Q{section.q_number} received {allocation.assigned_count} of "
                f"{section.total_questions} questions; attempt count now "
                f"{allocation.attempt_count}"
            )
        allocations.append(allocation)

    return DistributedPaper(
        pattern=pattern,
        allocations=tuple(allocations),
        unplaced=tuple(unplaced),
    )
