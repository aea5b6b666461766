"""
Unit tests for SelectionSession.
"""

from paper_toolkit.builder.selection import SelectionSession


class TestSelectionSession:
    """Tests for SelectionSession."""

    def test_mark_used_when_ids_added_then_contained(self):
        session = SelectionSession()

        session.mark_used(["q2", "q1", "q2"])

        assert "q1" in session
        assert len(session) == 2
        assert list(session) == ["q1", "q2"]

    def test_clear_when_called_then_empty(self):
        session = SelectionSession(["q1"])

        session.clear()

        assert len(session) == 0
        assert session.used_ids == frozenset()

    def test_used_ids_when_session_changes_then_snapshot_unchanged(self):
        session = SelectionSession(["q1"])
        snapshot = session.used_ids

        session.mark_used(["q2"])

        assert snapshot == frozenset({"q1"})
