"""
Module: builder.output.answer_key

Purpose:
    Generate the answer key PDF for a distributed paper: the MCQ key
    (number → letter) followed by model answers for short and long
    questions, numbered exactly as they appear on the paper.

Key Functions:
    - render_answer_key(): Create the answer key PDF in memory
    - answer_key_entries(): Paper-order (label, answer) rows
    - register_answer_key_font(): Optional TrueType font for non-Latin answers

Dependencies:
    - reportlab: PDF generation, TrueType font registration

Used By:
    - builder.controller: Optional pipeline output

Notes:
    The built-in Helvetica covers Latin text only. Banks with Urdu answers
    need RenderOptions.answer_key_font_path set to a TrueType font with
    those glyphs. Right-to-left shaping is not applied.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

from paper_toolkit.core.models import SectionType

from ..config import RenderOptions
from ..layout.distributor import DistributedPaper
from .mathtext import strip_emojis
from .renderer import to_roman

logger = logging.getLogger(__name__)

# Constants
A4_WIDTH, A4_HEIGHT = A4
MARGIN = 50
LINE_HEIGHT = 14
BODY_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
BODY_SIZE = 10
MCQ_COLUMNS = 5
NO_ANSWER = "-"


@dataclass(frozen=True)
class AnswerKeyEntry:
    """One answer key row."""

    label: str
    question_id: str
    answer: str


def answer_key_entries(
    distributed: DistributedPaper,
) -> tuple[list[AnswerKeyEntry], list[AnswerKeyEntry]]:
    """
    Collect answer rows in paper order.

    Returns:
        (mcq entries, written entries). MCQs without a known correct option
        and written questions without a model answer show "-".
    """
    mcq_rows: list[AnswerKeyEntry] = []
    written_rows: list[AnswerKeyEntry] = []
    mcq_number = 1
    long_number: Optional[int] = None

    for allocation in distributed.allocations:
        section = allocation.section
        if section.type is SectionType.MCQ:
            for question in allocation.questions:
                mcq_rows.append(AnswerKeyEntry(
                    label=str(mcq_number),
                    question_id=question.id,
                    answer=question.correct_letter or NO_ANSWER,
                ))
                mcq_number += 1
        elif section.type is SectionType.SHORT:
            for i, question in enumerate(allocation.questions):
                written_rows.append(AnswerKeyEntry(
                    label=f"Q{section.q_number} ({to_roman(i + 1)})",
                    question_id=question.id,
                    answer=(question.answer or "").strip() or NO_ANSWER,
                ))
        elif section.type is SectionType.LONG:
            if long_number is None:
                long_number = section.q_number
            for question in allocation.questions:
                written_rows.append(AnswerKeyEntry(
                    label=f"Q.{long_number}",
                    question_id=question.id,
                    answer=(question.answer or "").strip() or NO_ANSWER,
                ))
                long_number += 1

    return mcq_rows, written_rows


def register_answer_key_font(font_path: Optional[Path]) -> tuple[str, str]:
    """
    Register a TrueType font for the answer key.

    Returns:
        (body font, bold font) names. The registered font serves both roles;
        Helvetica is returned when no path is given or the file cannot be
        loaded.
    """
    if font_path is None:
        return BODY_FONT, BOLD_FONT
    font_name = f"AnswerKey-{font_path.stem}"
    if font_name in pdfmetrics.getRegisteredFontNames():
        return font_name, font_name
    if not font_path.is_file():
        logger.warning(f"Answer key font not found, using {BODY_FONT}: {font_path}")
        return BODY_FONT, BOLD_FONT
    try:
        pdfmetrics.registerFont(TTFont(font_name, str(font_path)))
    except (TTFError, OSError) as e:
        logger.warning(f"Cannot load answer key font {font_path}, using {BODY_FONT}: {e}")
        return BODY_FONT, BOLD_FONT
    logger.debug(f"Registered answer key font {font_name} from {font_path}")
    return font_name, font_name


class _PageWriter:
    """Top-down text cursor that starts a new page when the bottom is reached."""

    def __init__(self, c: canvas.Canvas, body_font: str = BODY_FONT):
        self.c = c
        self.body_font = body_font
        self.y = A4_HEIGHT - MARGIN
        self.pages = 1

    def ensure(self, height: float) -> None:
        if self.y - height < MARGIN:
            self.c.showPage()
            self.pages += 1
            self.y = A4_HEIGHT - MARGIN

    def line(
        self,
        text: str,
        *,
        font: Optional[str] = None,
        size: int = BODY_SIZE,
        x: float = MARGIN,
    ) -> None:
        self.ensure(LINE_HEIGHT)
        self.c.setFont(font or self.body_font, size)
        self.c.drawString(x, self.y, text)
        self.y -= LINE_HEIGHT

    def wrapped(self, text: str, *, x: float = MARGIN) -> None:
        width = A4_WIDTH - MARGIN - x
        for paragraph in text.splitlines() or [""]:
            for chunk in simpleSplit(paragraph, self.body_font, BODY_SIZE, width) or [""]:
                self.line(chunk, x=x)

    def gap(self, height: float = LINE_HEIGHT / 2) -> None:
        self.y -= height


def render_answer_key(distributed: DistributedPaper, options: RenderOptions) -> bytes:
    """
    Render the answer key to PDF bytes.

    Args:
        distributed: Paper with questions placed in sections
        options: Header fields (institute name, date) and the optional
            answer key font

    Returns:
        PDF document bytes

    Example:
        >>> pdf = render_answer_key(distributed, RenderOptions(institute_name="City School"))
        >>> pdf[:4]
        b'%PDF'
    """
    pattern = distributed.pattern
    mcq_rows, written_rows = answer_key_entries(distributed)
    body_font, bold_font = register_answer_key_font(options.answer_key_font_path)

    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(f"Answer Key - {pattern.subject} {pattern.class_id}")
    writer = _PageWriter(c, body_font)

    if options.institute_name:
        writer.line(strip_emojis(options.institute_name).upper(), font=bold_font, size=14)
    writer.line(
        f"Answer Key: {pattern.subject} (Class {pattern.class_id})",
        font=bold_font,
        size=12,
    )
    if options.date:
        writer.line(f"Date: {options.date}")
    writer.gap()

    if mcq_rows:
        writer.line("Objective (MCQs)", font=bold_font, size=11)
        column_width = (A4_WIDTH - 2 * MARGIN) / MCQ_COLUMNS
        for start in range(0, len(mcq_rows), MCQ_COLUMNS):
            writer.ensure(LINE_HEIGHT)
            c.setFont(body_font, BODY_SIZE)
            for col, entry in enumerate(mcq_rows[start:start + MCQ_COLUMNS]):
                c.drawString(MARGIN + col * column_width, writer.y, f"{entry.label}. {entry.answer}")
            writer.gap(LINE_HEIGHT)
        writer.gap()

    if written_rows:
        writer.line("Subjective (Model Answers)", font=bold_font, size=11)
        for entry in written_rows:
            writer.line(entry.label, font=bold_font)
            writer.wrapped(strip_emojis(entry.answer), x=MARGIN + 16)
            writer.gap(4)

    if not mcq_rows and not written_rows:
        logger.warning(f"Answer key for {pattern.key} has no questions")
        writer.line("No questions placed on this paper.")

    c.save()
    logger.info(
        f"Rendered answer key: {len(mcq_rows)} MCQ, {len(written_rows)} written, "
        f"{writer.pages} page(s)"
    )
    return buf.getvalue()
