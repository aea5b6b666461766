"""
Module: builder.output.renderer

Purpose:
    Render a distributed paper to a self-contained, print-ready HTML
    document: institute header, student-info block, one block per pattern
    section, optional OMR answer sheet and a footer watermark.

Key Functions:
    - render_paper(): Main rendering function
    - split_sub_parts(): Split "(a) ... (b) ..." long-question text
    - sub_part_marks(): Effective (a)/(b) marks for a long section
    - answer_line_count(): Ruled lines for a writing section
    - to_roman(): Lower-case roman numerals for short-question numbering

Output Markers:
    - Section bars carry "Q{n}:", title, instruction and the live formula
    - MCQs are numbered from 1 with options labelled (A)-(D)
    - Every question row carries data-qid for downstream tooling
    - A "SUBJECTIVE SECTION" divider forces the subjective part onto a new page

Dependencies:
    - builder.output.mathtext: Escaping and formula markup
    - builder.output.logo: Logo embedding (PIL)
    - builder.output.styles: Print stylesheet

Used By:
    - builder.controller: Pipeline orchestration
"""

from __future__ import annotations

import logging
import math
import re
from typing import Mapping, Optional, Sequence

from paper_toolkit.core.models import (
    OPTION_LABELS,
    PaperMarks,
    PaperPattern,
    Question,
    QuestionOverride,
    QuestionSection,
    SectionType,
)

from ..config import RenderOptions
from ..layout.distributor import DistributedPaper, SectionAllocation
from .logo import resolve_logo_src
from .mathtext import escape_attr, escape_html, find_math_spans, process_math_in_text
from .styles import paper_css

logger = logging.getLogger(__name__)

OMR_PER_ROW = 10
MAX_WRITING_LINES = 22
WRITING_LINES_PER_MARK = 1.8
SYNTHESIZED_PART_B = "Solve the related numerical / practical application."
DIVIDER_TEXT = "SUBJECTIVE SECTION"

# "(a)" style markers at the start of the text or after whitespace
_SUB_PART_RE = re.compile(r"(?:^|(?<=\s))\(([a-h])\)\s*")

_ROMAN = (
    (1000, "m"), (900, "cm"), (500, "d"), (400, "cd"),
    (100, "c"), (90, "xc"), (50, "l"), (40, "xl"),
    (10, "x"), (9, "ix"), (5, "v"), (4, "iv"), (1, "i"),
)


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def to_roman(n: int) -> str:
    """
    Lower-case roman numeral.

    Example:
        >>> to_roman(14)
        'xiv'
    """
    if n <= 0:
        raise ValueError(f"Roman numerals need a positive number: {n}")
    out = []
    for value, symbol in _ROMAN:
        while n >= value:
            out.append(symbol)
            n -= value
    return "".join(out)


def split_sub_parts(text: str) -> tuple[str, list[tuple[str, str]]]:
    """
    Split author-marked sub-parts.

    Markers inside a formula, such as the (a) in $g (a) = 1$, are ignored.

    Returns:
        (lead text before the first marker, [(label, part text), ...]);
        the list is empty when the text has no (a)/(b) markers

    Example:
        >>> split_sub_parts("Explain: (a) inertia (b) momentum")
        ('Explain:', [('a', 'inertia'), ('b', 'momentum')])
    """
    spans = find_math_spans(text)
    markers = [
        m for m in _SUB_PART_RE.finditer(text)
        if not any(start <= m.start() < end for start, end in spans)
    ]
    if not markers:
        return text.strip(), []
    lead = text[:markers[0].start()].strip()
    parts = []
    for idx, marker in enumerate(markers):
        stop = markers[idx + 1].start() if idx + 1 < len(markers) else len(text)
        parts.append((marker.group(1), text[marker.end():stop].strip()))
    return lead, parts


def sub_part_marks(section: QuestionSection, marks_per_question: int) -> tuple[int, int]:
    """
    Marks for the (a)/(b) split of a long question.

    The pattern's split is used when it adds up to the effective marks per
    question; otherwise the marks are halved with the extra mark on (a).
    """
    configured = tuple(section.sub_part_marks)
    if len(configured) == 2 and sum(configured) == marks_per_question:
        return configured[0], configured[1]
    part_b = marks_per_question // 2
    return marks_per_question - part_b, part_b


def answer_line_count(section: QuestionSection) -> int:
    """Configured answer lines, else min(ceil(marks × 1.8), 22)."""
    if section.answer_lines is not None:
        return section.answer_lines
    return min(math.ceil(section.total_marks * WRITING_LINES_PER_MARK), MAX_WRITING_LINES)


def _apply_override(question: Question, overrides: Mapping[str, QuestionOverride]) -> Question:
    override = overrides.get(question.id)
    if override is None:
        return question
    return override.apply(question)


# ─────────────────────────────────────────────────────────────────────────────
# Main Entry Point
# ─────────────────────────────────────────────────────────────────────────────

def render_paper(
    pattern: PaperPattern,
    distributed: DistributedPaper,
    marks: PaperMarks,
    options: RenderOptions,
) -> str:
    """
    Render a paper to HTML.

    Sections with no placed questions are omitted (writing sections always
    render). The header total is the live total from ``marks``.

    Args:
        pattern: Resolved pattern
        distributed: Questions allocated to sections
        marks: Live section marks (compute_paper_marks)
        options: Presentation options

    Returns:
        Complete HTML document

    Example:
        >>> html = render_paper(pattern, distributed, marks, RenderOptions(institute_name="City School"))
        >>> "Q1:" in html
        True
    """
    overrides = options.question_overrides
    blocks: list[str] = []
    mcq_number = 1
    long_number: Optional[int] = None
    seen_objective = False
    divider_done = False
    mcq_total = 0

    for allocation in distributed.allocations:
        section = allocation.section
        if allocation.is_empty:
            logger.debug(f"Skipping empty section Q{section.q_number}")
            continue

        if section.type.is_subjective and seen_objective and not divider_done:
            blocks.append(f'<div class="pp-divider">{DIVIDER_TEXT}</div>')
            divider_done = True

        formula = allocation.marks_formula
        live = marks.for_section(section.q_number)
        if live is not None:
            formula = live.formula

        questions = [_apply_override(q, overrides) for q in allocation.questions]

        if section.type is SectionType.MCQ:
            blocks.append(_render_mcq(allocation, questions, formula, mcq_number, options))
            mcq_number += len(questions)
            mcq_total += len(questions)
            seen_objective = True
        elif section.type is SectionType.SHORT:
            blocks.append(_render_shorts(allocation, questions, formula))
        elif section.type is SectionType.LONG:
            if long_number is None:
                long_number = section.q_number
            blocks.append(_render_longs(allocation, questions, formula, long_number))
            long_number += len(questions)
        else:
            blocks.append(_render_writing(allocation, formula))

    if options.include_bubble_sheet and mcq_total:
        blocks.append(_render_omr_sheet(mcq_total))
    if options.show_watermark:
        blocks.append(f'<div class="pp-footer">{escape_html(options.watermark_text)}</div>')

    time_allowed = options.time_allowed or pattern.time_allowed
    title = f"{pattern.subject} - Class {pattern.class_id}"
    body = "\n".join([
        _render_header(options),
        _render_student_meta(pattern, options, time_allowed, marks.total),
        *blocks,
    ])

    logger.info(
        f"Rendered {pattern.key}: {len(blocks)} blocks, {marks.total} marks"
    )
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=794, initial-scale=1.0">
<title>{escape_html(title)}</title>
<style>{paper_css(options.base_font_pt, options.bubbles_per_row)}</style>
</head>
<body>
{body}
</body>
</html>
"""


# ─────────────────────────────────────────────────────────────────────────────
# Header Blocks
# ─────────────────────────────────────────────────────────────────────────────

def _render_header(options: RenderOptions) -> str:
    parts = ['<div class="pp-header">', '<div class="pp-header-body">']

    logo_src = resolve_logo_src(options)
    if logo_src:
        parts.append(f'<img src="{escape_attr(logo_src)}" alt="School Logo" class="pp-logo" />')
    if options.custom_header and options.custom_header.strip():
        parts.append(f'<div class="pp-custom-header">{escape_html(options.custom_header)}</div>')
    parts.append(f'<div class="pp-school-name">{escape_html(options.institute_name)}</div>')
    if options.custom_sub_header and options.custom_sub_header.strip():
        parts.append(f'<div class="pp-custom-subheader">{escape_html(options.custom_sub_header)}</div>')
    if options.exam_type:
        parts.append(f'<div class="pp-exam-type">{escape_html(options.exam_type)}</div>')
    parts.append("</div>")

    if options.has_contact:
        contact = [
            f"<span>{escape_html(value)}</span>"
            for value in (
                options.institute_address,
                options.institute_website,
                options.institute_email,
                options.institute_phone,
            )
            if value
        ]
        parts.append(f'<div class="pp-contact-bar">{"".join(contact)}</div>')

    parts.append("</div>")
    return "\n".join(parts)


def _meta_cell(label: str, value: Optional[str] = None, *, bold: bool = False) -> str:
    if value is None:
        content = '<span class="pp-meta-line"></span>'
    else:
        style = ' style="font-weight:bold"' if bold else ""
        content = f'<span class="pp-meta-value"{style}>{escape_html(value)}</span>'
    return (
        f'<div class="pp-meta-cell"><span class="pp-meta-label">{label}:</span>'
        f"{content}</div>"
    )


def _render_student_meta(
    pattern: PaperPattern,
    options: RenderOptions,
    time_allowed: str,
    total_marks: int,
) -> str:
    rows = [
        [
            _meta_cell("Name"),
            _meta_cell("Roll No"),
            _meta_cell("Class", pattern.class_id),
            _meta_cell("Subject", pattern.subject),
        ],
        [
            _meta_cell("Date", options.date),
            _meta_cell("Time", time_allowed),
            _meta_cell("Total Marks", str(total_marks), bold=True),
            _meta_cell("Signature"),
        ],
        [
            _meta_cell("Syllabus", options.syllabus),
        ],
    ]
    row_html = "".join(f'<div class="pp-meta-row">{"".join(r)}</div>' for r in rows)
    return f'<div class="pp-meta">{row_html}</div>'


def _render_section_bar(allocation: SectionAllocation, formula: str) -> str:
    section = allocation.section
    bar = (
        '<div class="pp-sec-bar">'
        f'<span class="pp-sec-qnum">Q{section.q_number}:</span>'
        f'<span class="pp-sec-title">{escape_html(section.title)}</span>'
        f'<span class="pp-sec-instr">{escape_html(allocation.instruction)}</span>'
        f'<span class="pp-sec-marks">{escape_html(formula)}</span>'
        "</div>"
    )
    if section.special_note:
        bar += f'<div class="pp-sec-note">&#9658; {escape_html(section.special_note)}</div>'
    return bar


# ─────────────────────────────────────────────────────────────────────────────
# Section Blocks
# ─────────────────────────────────────────────────────────────────────────────

def _render_mcq(
    allocation: SectionAllocation,
    questions: Sequence[Question],
    formula: str,
    start_number: int,
    options: RenderOptions,
) -> str:
    bubbles = []
    rows = []
    for offset, question in enumerate(questions):
        number = start_number + offset
        letters = "".join(
            f'<div class="pp-bub-opt"><span class="pp-bub-letter">{label}</span>'
            f'<span class="pp-bub-circle"></span></div>'
            for label in OPTION_LABELS
        )
        bubbles.append(
            f'<div class="pp-bub-item"><span class="pp-bub-num">{number}.</span>'
            f'<div class="pp-bub-opts">{letters}</div></div>'
        )

        opts = "".join(
            f'<div class="pp-mcq-opt"><span class="pp-mcq-opt-lbl">({label})</span>&nbsp;'
            f"{process_math_in_text(option)}</div>"
            for label, option in zip(OPTION_LABELS, question.options)
        )
        rows.append(
            f'<tr class="pp-mcq-tr" data-qid="{escape_attr(question.id)}">'
            f'<td class="pp-mcq-num">{number}.</td>'
            f'<td class="pp-mcq-body"><span class="pp-mcq-qtext">{process_math_in_text(question.text)}</span>'
            f'<div class="pp-mcq-opts">{opts}</div></td></tr>'
        )

    return (
        f'<div data-section="mcq-{allocation.section.q_number}">'
        f"{_render_section_bar(allocation, formula)}"
        f'<div class="pp-bubbles" data-per-row="{options.bubbles_per_row}">{"".join(bubbles)}</div>'
        f'<table class="pp-mcq-table"><tbody>{"".join(rows)}</tbody></table>'
        "</div>"
    )


def _render_shorts(
    allocation: SectionAllocation,
    questions: Sequence[Question],
    formula: str,
) -> str:
    mpq = allocation.marks_per_question
    rows = "".join(
        f'<div class="pp-short-row" data-qid="{escape_attr(q.id)}">'
        f'<span class="pp-short-num">({to_roman(i + 1)})</span>'
        f'<span class="pp-short-text">{process_math_in_text(q.text)}</span>'
        f'<span class="pp-short-marks">[{mpq}]</span>'
        "</div>"
        for i, q in enumerate(questions)
    )
    return (
        f'<div data-section="short-{allocation.section.q_number}">'
        f"{_render_section_bar(allocation, formula)}"
        f'<div class="pp-shorts">{rows}</div>'
        "</div>"
    )


def _render_long_parts(section: QuestionSection, question: Question, mpq: int) -> str:
    lead, parts = split_sub_parts(question.text)
    part_a, part_b = sub_part_marks(section, mpq)

    if parts:
        part_marks = [part_a, part_b] if len(parts) == 2 else [None] * len(parts)
        lines = []
        if lead:
            lines.append(f'<div class="pp-long-lead">{process_math_in_text(lead)}</div>')
        for (label, text), part_mark in zip(parts, part_marks):
            mark_html = (
                f'<span class="pp-long-part-marks">[{part_mark}]</span>'
                if part_mark is not None else ""
            )
            lines.append(
                f'<div class="pp-long-part"><span class="pp-long-part-lbl">({label})</span>'
                f'<span class="pp-long-part-text">{process_math_in_text(text)}</span>{mark_html}</div>'
            )
        return f'<div class="pp-long-parts">{"".join(lines)}</div>'

    return (
        '<div class="pp-long-parts">'
        '<div class="pp-long-part"><span class="pp-long-part-lbl">(a)</span>'
        f'<span class="pp-long-part-text">{process_math_in_text(question.text)}</span>'
        f'<span class="pp-long-part-marks">[{part_a}]</span></div>'
        '<div class="pp-long-part"><span class="pp-long-part-lbl">(b)</span>'
        f'<span class="pp-long-part-text">{SYNTHESIZED_PART_B}</span>'
        f'<span class="pp-long-part-marks">[{part_b}]</span></div>'
        "</div>"
    )


def _render_longs(
    allocation: SectionAllocation,
    questions: Sequence[Question],
    formula: str,
    start_number: int,
) -> str:
    section = allocation.section
    mpq = allocation.marks_per_question
    items = []
    for offset, question in enumerate(questions):
        number = f"Q.{start_number + offset}"
        if section.has_sub_parts:
            items.append(
                f'<div class="pp-long-item" data-qid="{escape_attr(question.id)}">'
                f'<div class="pp-long-header"><span class="pp-long-qnum">{number}.</span>'
                f'<span class="pp-long-text"></span>'
                f'<span class="pp-long-marks">[{mpq}]</span></div>'
                f"{_render_long_parts(section, question, mpq)}"
                "</div>"
            )
        else:
            items.append(
                f'<div class="pp-long-item" data-qid="{escape_attr(question.id)}">'
                f'<div class="pp-long-header"><span class="pp-long-qnum">{number}.</span>'
                f'<span class="pp-long-text">{process_math_in_text(question.text)}</span>'
                f'<span class="pp-long-marks">[{mpq}]</span></div>'
                "</div>"
            )
    return (
        f'<div data-section="long-{section.q_number}">'
        f"{_render_section_bar(allocation, formula)}"
        f'<div class="pp-longs">{"".join(items)}</div>'
        "</div>"
    )


def _render_writing(allocation: SectionAllocation, formula: str) -> str:
    section = allocation.section
    prompt = (
        f'<div class="pp-writing-prompt"><em>{escape_html(section.writing_prompt)}</em></div>'
        if section.writing_prompt else ""
    )
    lines = '<div class="pp-line"></div>' * answer_line_count(section)
    return (
        f'<div data-section="writing-{section.q_number}">'
        f"{_render_section_bar(allocation, formula)}"
        f"{prompt}"
        f'<div class="pp-lines">{lines}</div>'
        "</div>"
    )


def _render_omr_sheet(mcq_count: int) -> str:
    rows = []
    for start in range(1, mcq_count + 1, OMR_PER_ROW):
        end = min(start + OMR_PER_ROW - 1, mcq_count)
        cells = "".join(
            f'<div class="omr-q"><span class="omr-num">{n}</span><div class="omr-bubbles">'
            + "".join(
                f'<span class="omr-letter">{label}</span><span class="omr-circle"></span>'
                for label in OPTION_LABELS
            )
            + "</div></div>"
            for n in range(start, end + 1)
        )
        rows.append(f'<div class="omr-row"><span class="omr-range">{start}-{end}</span>{cells}</div>')

    return (
        '<div class="pp-page-break"></div>'
        '<div class="omr-sheet">'
        '<div class="omr-header"><h3>OMR Answer Sheet</h3>'
        "<p>Fill bubbles completely. Use only blue/black ball point pen.</p></div>"
        '<div class="omr-info">'
        '<div class="omr-field"><span>Name:</span><div class="omr-line"></div></div>'
        '<div class="omr-field"><span>Roll No:</span><div class="omr-line"></div></div>'
        '<div class="omr-field"><span>Class:</span><div class="omr-line"></div></div>'
        "</div>"
        '<div class="omr-instructions"><strong>Instructions:</strong> '
        "Darken the correct bubble completely. Do not make stray marks.</div>"
        f'<div class="omr-bubbles-container">{"".join(rows)}</div>'
        "</div>"
    )
