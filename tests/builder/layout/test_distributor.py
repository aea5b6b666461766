"""
Unit tests for section distribution.
"""

import logging

import pytest

from conftest import make_bank
from paper_toolkit.builder.layout import (
    BalancedDistributor,
    SequentialDistributor,
    distribute_paper,
    distribute_section_type,
)
from paper_toolkit.builder.marks import MarkOverrides
from paper_toolkit.builder.patterns import PATTERN_CATALOG
from paper_toolkit.builder.selection import ResolvedPaper
from paper_toolkit.core.models import PaperPattern, QuestionSection, QuestionType, SectionType


def short_section(q_number: int) -> QuestionSection:
    return QuestionSection(
        q_number=q_number,
        title="Short Questions",
        instruction="Attempt any 5 short questions.",
        type=SectionType.SHORT,
        total_questions=8,
        attempt_count=5,
        marks_per_question=2,
    )


@pytest.fixture
def two_short_pattern() -> PaperPattern:
    """Pattern with two 8-question short sections."""
    return PaperPattern("9th", "Physics", 20, "2 Hours", (short_section(2), short_section(3)))


def resolved(mcqs=(), shorts=(), longs=()) -> ResolvedPaper:
    return ResolvedPaper(
        mcqs=tuple(mcqs),
        shorts=tuple(shorts),
        longs=tuple(longs),
        total_marks=sum(q.marks for q in (*mcqs, *shorts, *longs)),
    )


class TestDistributePaper:
    """Tests for distribute_paper function."""

    def test_distribute_when_ten_shorts_over_two_sections_then_eight_and_two(self, two_short_pattern):
        """Later sections are short-filled, with a reduced attempt count."""
        # Arrange
        shorts = make_bank("ch1", short=10)

        # Act
        distributed = distribute_paper(two_short_pattern, resolved(shorts=shorts))
        first, second = distributed.allocations

        # Assert
        assert first.assigned_count == 8
        assert first.attempt_count == 5
        assert first.marks_formula == "5 × 2 = 10"
        assert first.instruction == "Attempt any 5 short questions."
        assert second.assigned_count == 2
        assert second.attempt_count == 2
        assert second.marks_formula == "2 × 2 = 4"
        assert second.instruction == "Attempt all short questions."
        assert distributed.total_marks == 14

    def test_distribute_when_in_order_then_questions_keep_selection_order(self, two_short_pattern):
        shorts = make_bank("ch1", short=10)

        distributed = distribute_paper(two_short_pattern, resolved(shorts=shorts))

        assert distributed.placed_questions == tuple(shorts)

    def test_distribute_when_no_questions_then_sections_empty(self, two_short_pattern):
        distributed = distribute_paper(two_short_pattern, resolved())

        assert all(a.is_empty for a in distributed.allocations)
        assert distributed.total_marks == 0

    def test_distribute_when_more_than_capacity_then_unplaced_warned(self, two_short_pattern, caplog):
        shorts = make_bank("ch1", short=18)

        with caplog.at_level(logging.WARNING):
            distributed = distribute_paper(two_short_pattern, resolved(shorts=shorts))

        assert [q.id for q in distributed.unplaced] == ["ch1_short_16", "ch1_short_17"]
        assert "did not fit" in caplog.text

    def test_distribute_when_three_shorts_in_five_of_eight_then_attempt_any_reduced(self):
        """Attempt is capped by placed questions; instruction follows."""
        # Arrange
        pattern = PaperPattern("9th", "Physics", 10, "2 Hours", (short_section(2),))

        # Act
        (allocation,) = distribute_paper(pattern, resolved(shorts=make_bank("ch1", short=3))).allocations

        # Assert
        assert allocation.attempt_count == 3
        assert allocation.shortfall == 5
        assert allocation.instruction == "Attempt all short questions."

    def test_distribute_when_mark_override_then_replaces_pattern_marks(self, two_short_pattern):
        distributed = distribute_paper(
            two_short_pattern,
            resolved(shorts=make_bank("ch1", short=16)),
            mark_overrides=MarkOverrides(short=3),
        )

        assert distributed.allocations[0].marks_formula == "5 × 3 = 15"
        assert distributed.total_marks == 30

    def test_distribute_when_writing_sections_then_static_marks(self):
        """Writing sections take no questions and keep their marks."""
        pattern = PATTERN_CATALOG["9th_english"]

        distributed = distribute_paper(pattern, resolved())
        writing = distributed.allocations_of(SectionType.WRITING)

        assert all(not a.is_empty for a in writing)
        assert writing[0].marks_formula == "2 × 4 = 8"
        assert distributed.total_marks == sum(a.section.total_marks for a in writing)

    def test_distribute_when_full_matric_paper_then_declared_total(self):
        pattern = PATTERN_CATALOG["9th_physics"]
        paper = resolved(
            mcqs=make_bank("ch1", mcq=12),
            shorts=make_bank("ch1", short=24),
            longs=make_bank("ch1", long=3),
        )

        distributed = distribute_paper(pattern, paper)

        assert distributed.total_marks == pattern.total_marks == 60
        assert len(distributed.questions_of(QuestionType.SHORT)) == 24


class TestDistributors:
    """Tests for allocation strategies."""

    def test_sequential_when_ten_over_two_then_eight_and_two(self, two_short_pattern):
        pairs, unplaced = distribute_section_type(
            two_short_pattern, SectionType.SHORT, make_bank("ch1", short=10), SequentialDistributor()
        )

        assert [len(chunk) for _, chunk in pairs] == [8, 2]
        assert unplaced == ()

    def test_balanced_when_ten_over_two_then_five_and_five(self, two_short_pattern):
        pairs, _ = distribute_section_type(
            two_short_pattern, SectionType.SHORT, make_bank("ch1", short=10), BalancedDistributor()
        )

        assert [len(chunk) for _, chunk in pairs] == [5, 5]

    def test_distribute_section_type_when_no_sections_then_all_unplaced(self, two_short_pattern):
        longs = make_bank("ch1", long=2)

        pairs, unplaced = distribute_section_type(two_short_pattern, SectionType.LONG, longs)

        assert pairs == []
        assert unplaced == tuple(longs)

    def test_balanced_when_uneven_then_dealt_in_turn(self, two_short_pattern):
        shorts = make_bank("ch1", short=11)

        pairs, unplaced = distribute_section_type(
            two_short_pattern, SectionType.SHORT, shorts, BalancedDistributor()
        )

        assert [len(chunk) for _, chunk in pairs] == [6, 5]
        assert pairs[0][1][:2] == (shorts[0], shorts[2])
        assert pairs[1][1][0] == shorts[1]
        assert unplaced == ()

    def test_balanced_when_more_than_capacity_then_overflow_unplaced(self, two_short_pattern):
        shorts = make_bank("ch1", short=18)

        pairs, unplaced = distribute_section_type(
            two_short_pattern, SectionType.SHORT, shorts, BalancedDistributor()
        )

        assert [len(chunk) for _, chunk in pairs] == [8, 8]
        assert unplaced == tuple(shorts[16:])
