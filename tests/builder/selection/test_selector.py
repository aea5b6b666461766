"""
Unit tests for the question selector.
"""

import pytest

from conftest import make_bank, make_question
from paper_toolkit.builder.loading import InMemoryQuestionStore
from paper_toolkit.builder.selection import (
    PaperConfig,
    QuestionSelector,
    SelectionSession,
    select_questions,
    validate_availability,
)
from paper_toolkit.core.models import Difficulty, QuestionType


def config(**kwargs) -> PaperConfig:
    fields = dict(class_id="9th", subject_id="physics", chapter_ids=("ch1", "ch2"))
    fields.update(kwargs)
    return PaperConfig(**fields)


class TestSelectQuestions:
    """Tests for select_questions function."""

    def test_select_when_pool_large_enough_then_exact_counts(self, physics_store):
        """Each type gets exactly the requested count."""
        # Act
        paper = select_questions(physics_store, config(mcq_count=12, short_count=10, long_count=3))

        # Assert
        assert paper.counts.to_dict() == {"mcq": 12, "short": 10, "long": 3}
        assert all(q.type == QuestionType.MCQ for q in paper.mcqs)
        assert paper.total_marks == 12 * 1 + 10 * 2 + 3 * 5

    def test_select_when_store_returns_duplicates_then_no_id_repeated(self):
        """Duplicate store rows never produce a repeated question."""
        # Arrange
        bank = make_bank("ch1", mcq=5)
        store = InMemoryQuestionStore.from_questions("9th", "physics", bank + bank)

        # Act
        paper = select_questions(store, config(chapter_ids=("ch1",), mcq_count=10))

        # Assert
        assert len(paper.question_ids) == len(set(paper.question_ids)) == 5

    def test_select_when_same_session_then_calls_disjoint(self, physics_store):
        """Two selections on one session never share ids."""
        # Arrange
        session = SelectionSession()
        request = config(mcq_count=8, short_count=10, long_count=2)

        # Act
        first = select_questions(physics_store, request, session)
        second = select_questions(physics_store, request, session)

        # Assert
        assert set(first.question_ids).isdisjoint(second.question_ids)
        assert session.used_ids == set(first.question_ids) | set(second.question_ids)

    def test_select_when_pool_exhausted_by_session_then_fewer_returned(self, physics_store):
        """Selection short-fills instead of raising."""
        session = SelectionSession()
        request = config(long_count=4)

        select_questions(physics_store, request, session)
        second = select_questions(physics_store, request, session)

        assert len(second.longs) == 2

    def test_select_when_seeded_and_session_cleared_then_identical(self, physics_store):
        """Same seed and a fresh session reproduce the paper exactly."""
        # Arrange
        selector = QuestionSelector(physics_store)
        request = config(mcq_count=12, short_count=10, long_count=3, seed=2024)

        # Act
        first = selector.select_questions(request)
        selector.clear_session()
        second = selector.select_questions(request)

        # Assert
        assert first.question_ids == second.question_ids

    def test_select_when_seed_zero_then_deterministic(self, physics_store):
        request = config(mcq_count=5, seed=0)

        first = select_questions(physics_store, request)
        second = select_questions(physics_store, request)

        assert first.question_ids == second.question_ids

    def test_select_when_chapter_subset_then_only_those_chapters(self, physics_store):
        paper = select_questions(physics_store, config(chapter_ids=("ch2",), mcq_count=10, short_count=5))

        assert {q.chapter_id for q in paper.all_questions} == {"ch2"}

    def test_select_when_store_ignores_chapters_then_filter_reapplied(self):
        """Chapter filtering does not trust the store."""
        # Arrange
        class LooseStore:
            def query(self, class_id, subject_id, chapter_ids, question_type=None):
                return make_bank("ch1", mcq=3) + make_bank("ch9", mcq=3)

        # Act
        paper = select_questions(LooseStore(), config(chapter_ids=("ch1",), mcq_count=6))

        # Assert
        assert {q.chapter_id for q in paper.mcqs} == {"ch1"}

    def test_select_when_difficulty_set_then_only_that_difficulty(self):
        bank = make_bank("ch1", short=4, difficulty=Difficulty.EASY) + [
            make_question("hard_1", QuestionType.SHORT, "ch1", difficulty=Difficulty.HARD)
        ]
        store = InMemoryQuestionStore.from_questions("9th", "physics", bank)

        paper = select_questions(store, config(chapter_ids=("ch1",), short_count=5, difficulty=Difficulty.HARD))

        assert paper.question_ids == ["hard_1"]

    def test_select_when_ids_excluded_then_never_chosen(self, physics_store):
        excluded = {f"ch1_long_{i}" for i in range(3)}

        paper = select_questions(physics_store, config(long_count=6, exclude_ids=excluded))

        assert excluded.isdisjoint(paper.question_ids)
        assert len(paper.longs) == 3


class TestValidateAvailability:
    """Tests for validate_availability function."""

    def test_validate_when_request_exceeds_pool_then_invalid(self):
        """1000 requested against 20 available is reported, not raised."""
        # Arrange
        store = InMemoryQuestionStore.from_questions("9th", "physics", make_bank("ch1", mcq=20))

        # Act
        report = validate_availability(store, config(chapter_ids=("ch1",), mcq_count=1000))

        # Assert
        assert not report.valid
        assert report.available.mcq == 20
        assert report.shortfall.mcq == 980
        assert report.describe() == ["Not enough mcq questions: 20 available, 1000 required"]

    def test_validate_when_enough_then_valid_and_session_untouched(self, physics_store):
        session = SelectionSession()

        report = validate_availability(physics_store, config(mcq_count=20, short_count=30), session)

        assert report.valid
        assert report.describe() == []
        assert len(session) == 0

    def test_validate_when_session_holds_ids_then_they_are_unavailable(self, physics_store):
        session = SelectionSession([f"ch1_long_{i}" for i in range(3)])

        report = validate_availability(physics_store, config(long_count=4), session)

        assert not report.valid
        assert report.available.long == 3
