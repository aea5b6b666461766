"""
Unit tests for answer key generation.
"""

import logging
from pathlib import Path

import reportlab
from reportlab.pdfbase import pdfmetrics

from conftest import make_bank, make_question
from paper_toolkit.builder.config import RenderOptions
from paper_toolkit.builder.layout import distribute_paper
from paper_toolkit.builder.output.answer_key import (
    BODY_FONT,
    BOLD_FONT,
    NO_ANSWER,
    AnswerKeyEntry,
    answer_key_entries,
    register_answer_key_font,
    render_answer_key,
)
from paper_toolkit.builder.patterns import PATTERN_CATALOG
from paper_toolkit.builder.selection import ResolvedPaper
from paper_toolkit.core.models import QuestionType


def distributed_paper(mcqs=(), shorts=(), longs=()):
    paper = ResolvedPaper(
        mcqs=tuple(mcqs),
        shorts=tuple(shorts),
        longs=tuple(longs),
        total_marks=sum(q.marks for q in (*mcqs, *shorts, *longs)),
    )
    return distribute_paper(PATTERN_CATALOG["9th_physics"], paper)


class TestAnswerKeyEntries:
    """Tests for answer_key_entries function."""

    def test_entries_when_mcqs_then_numbered_with_letters(self):
        # Arrange
        mcqs = [
            make_question("m1", QuestionType.MCQ, correct=2),
            make_question("m2", QuestionType.MCQ, correct=None),
        ]

        # Act
        mcq_rows, written_rows = answer_key_entries(distributed_paper(mcqs=mcqs))

        # Assert
        assert mcq_rows == [
            AnswerKeyEntry(label="1", question_id="m1", answer="C"),
            AnswerKeyEntry(label="2", question_id="m2", answer=NO_ANSWER),
        ]
        assert written_rows == []

    def test_entries_when_written_then_labels_follow_paper_numbering(self):
        """Shorts use Q{n} (roman); longs continue as Q.{n}."""
        shorts = [make_question("s1", answer="Work is force times displacement."), *make_bank("ch1", short=8)]
        longs = [make_question("l1", QuestionType.LONG, answer="  ")]

        _, written = answer_key_entries(distributed_paper(shorts=shorts, longs=longs))
        labels = [entry.label for entry in written]

        assert labels[0] == "Q2 (i)"
        assert labels[8] == "Q3 (i)"
        assert labels[-1] == "Q.5"
        assert written[0].answer == "Work is force times displacement."
        assert written[-1].answer == NO_ANSWER


class TestRenderAnswerKey:
    """Tests for render_answer_key function."""

    def test_render_when_questions_then_pdf_bytes(self):
        distributed = distributed_paper(
            mcqs=make_bank("ch1", mcq=12),
            shorts=make_bank("ch1", short=10),
            longs=make_bank("ch1", long=3),
        )

        pdf = render_answer_key(distributed, RenderOptions(institute_name="City School", date="2025-03-01"))

        assert pdf.startswith(b"%PDF")
        assert len(pdf) > 500

    def test_render_when_long_answers_then_spans_pages(self, caplog):
        """Long model answers wrap and continue on new pages."""
        longs = [
            make_question(f"l{i}", QuestionType.LONG, answer="Momentum is conserved. " * 200)
            for i in range(3)
        ]

        with caplog.at_level(logging.INFO, logger="paper_toolkit"):
            pdf = render_answer_key(distributed_paper(longs=longs), RenderOptions())

        assert pdf.startswith(b"%PDF")
        assert "1 page(s)" not in caplog.text
        assert "page(s)" in caplog.text

    def test_render_when_empty_paper_then_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            pdf = render_answer_key(distributed_paper(), RenderOptions())

        assert pdf.startswith(b"%PDF")
        assert "has no questions" in caplog.text


VERA_TTF = Path(reportlab.__file__).parent / "fonts" / "Vera.ttf"


class TestAnswerKeyFont:
    """Tests for the optional TrueType answer key font."""

    def test_register_when_no_path_then_helvetica(self):
        assert register_answer_key_font(None) == (BODY_FONT, BOLD_FONT)

    def test_register_when_ttf_given_then_registered_for_body_and_bold(self):
        fonts = register_answer_key_font(VERA_TTF)

        assert fonts == ("AnswerKey-Vera", "AnswerKey-Vera")
        assert "AnswerKey-Vera" in pdfmetrics.getRegisteredFontNames()

    def test_register_when_file_missing_then_warns_and_falls_back(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            fonts = register_answer_key_font(tmp_path / "NotoNastaliq.ttf")

        assert fonts == (BODY_FONT, BOLD_FONT)
        assert "Answer key font not found" in caplog.text

    def test_register_when_file_not_a_font_then_warns_and_falls_back(self, tmp_path, caplog):
        bogus = tmp_path / "Broken.ttf"
        bogus.write_bytes(b"not a font")

        with caplog.at_level(logging.WARNING):
            fonts = register_answer_key_font(bogus)

        assert fonts == (BODY_FONT, BOLD_FONT)
        assert "Cannot load answer key font" in caplog.text

    def test_render_when_custom_font_then_pdf_uses_it(self):
        # Arrange
        shorts = [make_question("s1", QuestionType.SHORT, answer="Speed is distance over time.")]
        options = RenderOptions(institute_name="City School", answer_key_font_path=VERA_TTF)

        # Act
        pdf = render_answer_key(distributed_paper(shorts=shorts), options)

        # Assert
        assert pdf.startswith(b"%PDF")
        assert b"Vera" in pdf
