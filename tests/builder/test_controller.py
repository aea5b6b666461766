"""
Integration tests for the build pipeline.
"""

import json

import pytest

from conftest import make_bank
from paper_toolkit.builder import BuildError, BuilderConfig, RenderOptions, build_paper
from paper_toolkit.builder.loading import InMemoryQuestionStore
from paper_toolkit.builder.marks import MarkOverrides
from paper_toolkit.builder.patterns import PATTERN_CATALOG
from paper_toolkit.builder.selection import PaperConfig, SelectionSession
from paper_toolkit.core.models import QuestionOverride, QuestionType


RENDER = RenderOptions(institute_name="City School", date="2025-03-01")


def physics_config(**kwargs) -> BuilderConfig:
    paper = PaperConfig.for_pattern(PATTERN_CATALOG["9th_physics"], ["ch1", "ch2"], seed=7)
    kwargs.setdefault("render", RENDER)
    return BuilderConfig(paper=paper, **kwargs)


class TestBuildPaper:
    """Tests for build_paper function."""

    def test_build_when_bank_fills_pattern_then_declared_total(self, physics_store):
        """A full 9th physics paper matches the board total with no warnings."""
        # Act
        result = build_paper(physics_store, physics_config())

        # Assert
        assert result.total_marks == 60
        assert result.marks_validation.valid
        assert result.validation.valid
        assert result.warnings == ()
        assert result.paper.counts.to_dict() == {"mcq": 12, "short": 24, "long": 3}
        assert not result.resolution.is_fallback
        assert "<title>Physics - Class 9th</title>" in result.html
        assert result.answer_key is None

    def test_build_when_full_paper_then_breakdown_uses_pattern_marks(self, physics_store):
        breakdown = build_paper(physics_store, physics_config()).breakdown

        assert breakdown.long.marks_per_question == 9
        assert breakdown.short.attempt_count == 15
        assert breakdown.attempt_total == 60

    def test_build_when_same_seed_then_same_paper(self, physics_store):
        first = build_paper(physics_store, physics_config())
        second = build_paper(physics_store, physics_config())

        assert first.paper.question_ids == second.paper.question_ids

    def test_build_when_shared_session_then_papers_disjoint(self, physics_store):
        # Arrange
        session = SelectionSession()
        paper = PaperConfig("9th", "physics", ("ch1", "ch2"), mcq_count=10, short_count=12, long_count=3)
        config = BuilderConfig(paper=paper, render=RENDER)

        # Act
        first = build_paper(physics_store, config, session)
        second = build_paper(physics_store, config, session)

        # Assert
        assert set(first.paper.question_ids).isdisjoint(second.paper.question_ids)
        assert len(session) == 50

    def test_build_when_pool_too_small_and_full_paper_required_then_build_error(self, physics_store):
        paper = PaperConfig("9th", "physics", ("ch1",), mcq_count=40)
        config = BuilderConfig(paper=paper, render=RENDER, validate_availability=True)

        with pytest.raises(BuildError, match="Not enough mcq questions: 10 available, 40 required"):
            build_paper(physics_store, config)

    def test_build_when_pool_too_small_then_short_filled_with_warnings(self, physics_store):
        # Arrange
        paper = PaperConfig.for_pattern(PATTERN_CATALOG["9th_physics"], ["ch1"], seed=1)
        config = BuilderConfig(paper=paper, render=RENDER)

        # Act
        result = build_paper(physics_store, config)

        # Assert
        assert result.paper.counts.to_dict() == {"mcq": 10, "short": 15, "long": 3}
        assert "Only 10 of 12 mcq questions selected" in result.warnings
        assert "Total marks mismatch: Header shows 60, but calculated total is 48" in result.warnings
        assert result.metadata["sections"][3]["marks"] == 0

    def test_build_when_pool_too_small_then_html_shows_live_total(self, physics_store):
        """A short paper still renders, with the marks actually on it."""
        paper = PaperConfig("9th", "physics", ("ch1",), mcq_count=40, seed=3)

        result = build_paper(physics_store, BuilderConfig(paper=paper, render=RENDER))

        assert result.paper.counts.mcq == 10
        assert "Only 10 of 40 mcq questions selected" in result.warnings
        assert result.html.startswith("<!DOCTYPE html>")
        assert (
            '<span class="pp-meta-label">Total Marks:</span>'
            f'<span class="pp-meta-value" style="font-weight:bold">{result.total_marks}</span>'
        ) in result.html

    def test_build_when_unknown_subject_then_default_pattern(self):
        store = InMemoryQuestionStore.from_questions("9th", "geography", make_bank("g1", mcq=12, short=8, long=3))
        paper = PaperConfig("9th", "geography", ("g1",), mcq_count=12, short_count=8, long_count=3)

        result = build_paper(store, BuilderConfig(paper=paper, render=RENDER))

        assert result.resolution.is_fallback
        assert result.total_marks == 32
        assert "No paper pattern for 9th_geography; generic default used" in result.warnings
        assert result.metadata["pattern"]["is_fallback"] is True

    def test_build_when_strict_pattern_and_unknown_subject_then_build_error(self):
        store = InMemoryQuestionStore.from_questions("9th", "geography", make_bank("g1", mcq=2))
        paper = PaperConfig("9th", "geography", ("g1",), mcq_count=2)

        with pytest.raises(BuildError, match="No paper pattern registered"):
            build_paper(store, BuilderConfig(paper=paper, render=RENDER, strict_pattern=True))

    def test_build_when_header_total_differs_then_mismatch_reported(self, physics_store):
        result = build_paper(physics_store, physics_config(header_total=50))

        assert not result.marks_validation.valid
        assert "Total marks mismatch: Header shows 50, but calculated total is 60" in result.warnings

    def test_build_when_mark_override_then_live_total_changes(self, physics_store):
        result = build_paper(physics_store, physics_config(mark_overrides=MarkOverrides(long=10)))

        assert result.total_marks == 62
        assert "2 × 10 = 20" in result.html

    def test_build_when_answer_key_requested_then_pdf(self, physics_store):
        result = build_paper(physics_store, physics_config(include_answer_key=True))

        assert result.answer_key.startswith(b"%PDF")

    def test_build_when_override_blanks_text_then_validation_warning(self, physics_store):
        """Validation runs on the edited text and never blocks rendering."""
        # Arrange
        baseline = build_paper(physics_store, physics_config())
        first_id = baseline.distributed.questions_of(QuestionType.MCQ)[0].id
        render = RenderOptions(
            institute_name="City School",
            date="2025-03-01",
            question_overrides={first_id: QuestionOverride(text=" ")},
        )

        # Act
        result = build_paper(physics_store, physics_config(render=render))

        # Assert
        assert not result.validation.valid
        assert "MCQ #1 has no question text" in result.warnings
        assert result.html.startswith("<!DOCTYPE html>")

    def test_build_when_header_fields_missing_then_reported(self, physics_store):
        result = build_paper(physics_store, physics_config(render=RenderOptions()))

        assert "Institute name is required" in result.warnings
        assert "Date is required" in result.warnings

    def test_build_metadata_when_serialized_then_json_ready(self, physics_store):
        # Act
        metadata = build_paper(physics_store, physics_config()).metadata

        # Assert
        assert json.loads(json.dumps(metadata)) == metadata
        assert [s["q_number"] for s in metadata["sections"]] == [1, 2, 3, 4, 5]
        assert metadata["sections"][1]["formula"] == "5 × 2 = 10"
        assert metadata["config"]["seed"] == 7
        assert metadata["pattern"]["key"] == "9th_physics"
        assert metadata["total_marks"] == 60
