"""
Unit Tests for Marks Models

Tests for TypeMarks, MarksBreakdown and PaperMarks.
"""

import pytest

from paper_toolkit.core.models.marks import MarksBreakdown, PaperMarks, SectionMarks, TypeMarks


class TestTypeMarks:
    """Tests for TypeMarks."""

    def test_total_when_attempt_lower_then_attempted_marks_reduced(self):
        tm = TypeMarks(count=8, marks_per_question=2, attempt_count=5)

        assert tm.total == 16
        assert tm.attempted_marks == 10

    def test_init_when_attempt_exceeds_count_then_raises_error(self):
        with pytest.raises(ValueError, match="attempt_count"):
            TypeMarks(count=2, marks_per_question=2, attempt_count=3)

    def test_init_when_negative_count_then_raises_error(self):
        with pytest.raises(ValueError, match="count cannot be negative"):
            TypeMarks(count=-1, marks_per_question=2, attempt_count=0)


class TestMarksBreakdown:
    """Tests for MarksBreakdown."""

    def test_to_dict_when_serialized_then_totals_included(self):
        # Arrange
        breakdown = MarksBreakdown(
            mcq=TypeMarks(10, 1, 10),
            short=TypeMarks(5, 2, 5),
            long=TypeMarks(3, 9, 2),
        )

        # Act
        data = breakdown.to_dict()

        # Assert
        assert data["total"] == 47
        assert data["attempt_total"] == 38
        assert data["long"]["attempted_marks"] == 18


class TestPaperMarks:
    """Tests for PaperMarks."""

    def test_for_section_when_present_then_found(self):
        marks = PaperMarks(sections=(
            SectionMarks(1, 12, 12, 1, 12, "12 × 1 = 12"),
            SectionMarks(2, 2, 2, 2, 4, "2 × 2 = 4"),
        ))

        assert marks.total == 16
        assert marks.for_section(2).formula == "2 × 2 = 4"
        assert marks.for_section(7) is None
