"""
Unit tests for the SQLite question store.
"""

import pytest

from conftest import make_bank, make_question
from paper_toolkit.builder.loading import SqliteQuestionStore
from paper_toolkit.core.models import QuestionType


@pytest.fixture
def store(physics_bank):
    db = SqliteQuestionStore(":memory:")
    db.add_questions("9th", "Physics", physics_bank)
    yield db
    db.close()


class TestSqliteQuestionStore:
    """Tests for SqliteQuestionStore."""

    def test_query_when_type_filter_then_insertion_order(self, store):
        result = store.query("9th", "physics", ["ch1"], QuestionType.LONG)

        assert [q.id for q in result] == ["ch1_long_0", "ch1_long_1", "ch1_long_2"]

    def test_query_when_round_tripped_then_fields_kept(self):
        """Options, answer and correct option survive storage."""
        question = make_question("m1", QuestionType.MCQ, correct=3, answer=None)

        with SqliteQuestionStore(":memory:") as db:
            db.add_questions("9th", "physics", [question])
            (stored,) = db.query("9th", "physics", ["ch1"])

        assert stored == question

    def test_query_when_no_chapters_then_empty(self, store):
        assert store.query("9th", "physics", []) == []

    def test_add_when_same_id_then_replaced(self, store):
        count = store.add_questions("9th", "physics", [make_question("ch1_short_0", text="Edited?")])

        result = store.query("9th", "physics", ["ch1"], QuestionType.SHORT)

        assert count == 1
        assert len(result) == 15
        assert "Edited?" in [q.text for q in result]

    def test_chapter_stats_when_counted_then_by_chapter_id(self, store):
        stats = store.chapter_stats("9th", "physics")

        assert [(s.chapter_id, s.mcq_count, s.short_count, s.long_count) for s in stats] == [
            ("ch1", 10, 15, 3),
            ("ch2", 10, 15, 3),
        ]

    def test_init_when_file_path_then_persisted(self, tmp_path):
        path = tmp_path / "bank.db"
        with SqliteQuestionStore(path) as db:
            db.add_questions("9th", "physics", make_bank("ch1", short=2))

        with SqliteQuestionStore(path) as db:
            assert len(db.query("9th", "physics", ["ch1"])) == 2
