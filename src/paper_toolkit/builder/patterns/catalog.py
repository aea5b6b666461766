"""
Module: builder.patterns.catalog

Purpose:
    Punjab Board paper structures for Matric (9th, 10th) and Intermediate
    (11th, 12th), plus the generic three-section default used when no
    explicit entry exists.

Key Functions:
    - default_pattern(): Generic mcq/short/long pattern for any class/subject
    - catalog_keys(): Sorted list of every "{class}_{subject}" key

Key Classes:
    (none - data module)

Used By:
    - builder.patterns.resolver: Lookup
    - paper_toolkit.__main__: "patterns" command

Notes:
    Each group pattern is registered under every class of its group and
    every subject it covers. Declared paper totals are always the sum of the
    section totals.
"""

from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import Optional

from paper_toolkit.core.models import PaperPattern, QuestionSection, SectionType

MATRIC_CLASSES = ("9th", "10th")
INTERMEDIATE_CLASSES = ("11th", "12th")
SCIENCE_SUBJECTS = ("physics", "chemistry", "biology")


# ─────────────────────────────────────────────────────────────────────────────
# Section Builders
# ─────────────────────────────────────────────────────────────────────────────

def _mcq(count: int, instruction: str = "Circle the correct answer.") -> QuestionSection:
    return QuestionSection(
        q_number=1,
        title="Objective (MCQs)",
        instruction=instruction,
        type=SectionType.MCQ,
        total_questions=count,
        attempt_count=count,
        marks_per_question=1,
    )


def _short(
    q_number: int,
    attempt: int,
    total: int,
    title: str = "Short Questions",
) -> QuestionSection:
    return QuestionSection(
        q_number=q_number,
        title=title,
        instruction=f"Attempt any {attempt} short questions.",
        type=SectionType.SHORT,
        total_questions=total,
        attempt_count=attempt,
        marks_per_question=2,
    )


def _long(
    q_number: int,
    attempt: int,
    total: int,
    marks: int,
    sub_parts: tuple[int, ...] = (),
    instruction: Optional[str] = None,
    special_note: Optional[str] = None,
) -> QuestionSection:
    return QuestionSection(
        q_number=q_number,
        title="Long Questions",
        instruction=instruction or f"Attempt any {attempt} questions.",
        type=SectionType.LONG,
        total_questions=total,
        attempt_count=attempt,
        marks_per_question=marks,
        has_sub_parts=bool(sub_parts),
        sub_part_marks=sub_parts,
        special_note=special_note,
    )


def _writing(
    q_number: int,
    title: str,
    instruction: str,
    marks: int,
    prompt: str,
    lines: int,
    formula: Optional[str] = None,
) -> QuestionSection:
    # Writing tasks are one block; "any 2 of 3 paragraphs" style rules live in the formula
    return QuestionSection(
        q_number=q_number,
        title=title,
        instruction=instruction,
        type=SectionType.WRITING,
        total_questions=1,
        attempt_count=1,
        marks_per_question=marks,
        marks_formula=formula or f"{marks} Marks",
        writing_prompt=prompt,
        answer_lines=lines,
    )


def _pattern(
    class_group: str,
    subject: str,
    time_allowed: str,
    sections: tuple[QuestionSection, ...],
) -> PaperPattern:
    return PaperPattern(
        class_id=class_group,
        subject=subject,
        total_marks=sum(s.total_marks for s in sections),
        time_allowed=time_allowed,
        sections=sections,
        class_group=class_group,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Matric (9th & 10th)
# ─────────────────────────────────────────────────────────────────────────────

MATRIC_SCIENCE = _pattern("matric", "Science", "2 Hours", (
    _mcq(12),
    _short(2, 5, 8),
    _short(3, 5, 8),
    _short(4, 5, 8),
    _long(5, 2, 3, 9, sub_parts=(5, 4)),
))

MATRIC_COMPUTER = _pattern("matric", "Computer", "2 Hours", (
    _mcq(12),
    _short(2, 4, 6),
    _short(3, 4, 6),
    _short(4, 4, 6),
    _long(5, 2, 3, 8),
))

MATRIC_MATHEMATICS = _pattern("matric", "Mathematics", "2.5 Hours", (
    _mcq(15),
    _short(2, 6, 9),
    _short(3, 6, 9),
    _short(4, 6, 9),
    _long(
        5, 3, 5, 8,
        sub_parts=(4, 4),
        instruction="Attempt any 3 questions. Q9 (Theorem) is Compulsory.",
        special_note="Note: Q9 (Theorem) is Compulsory (8 Marks).",
    ),
))

MATRIC_ENGLISH = _pattern("matric", "English", "2.5 Hours", (
    _mcq(19, "Choose the correct answer. (Spelling / Synonyms / Grammar)"),
    _short(2, 5, 8),
    _writing(
        3, "Translation of Paragraphs into Urdu",
        "Attempt any 2 out of 3 paragraphs.", 8,
        "Translate the following paragraph(s) into Urdu:", 12,
        formula="2 × 4 = 8",
    ),
    _writing(
        4, "Summary / Poem Paraphrase",
        "Write the summary of the poem or paraphrase the given stanza.", 5,
        "Write the summary of the poem / Paraphrase the given stanza:", 10,
    ),
    _writing(
        5, "Essay / Letter / Story / Dialogue",
        "Attempt the following.", 15,
        "Write an essay / letter / story / dialogue on the given topic:", 22,
    ),
    _writing(
        6, "Change of Voice (Active / Passive)",
        "Change the voice of the following sentences.", 5,
        "Change the voice of the following sentences:", 10,
    ),
    _writing(
        7, "Translation (Urdu to English)",
        "Translate the following sentences into English.", 5,
        "Translate the following sentences from Urdu into English:", 10,
    ),
))


# ─────────────────────────────────────────────────────────────────────────────
# Intermediate (11th & 12th)
# ─────────────────────────────────────────────────────────────────────────────

INTER_SCIENCE = _pattern("intermediate", "Science", "3 Hours", (
    _mcq(17),
    _short(2, 8, 12),
    _short(3, 8, 12),
    _short(4, 6, 9),
    _long(5, 3, 5, 8, sub_parts=(4, 4)),
))

INTER_COMPUTER = _pattern("intermediate", "Computer", "3 Hours", (
    _mcq(15),
    _short(2, 6, 9),
    _short(3, 6, 9),
    _short(4, 6, 9),
    _long(5, 3, 5, 8),
))

INTER_MATHEMATICS = _pattern("intermediate", "Mathematics", "3 Hours", (
    _mcq(20),
    _short(2, 8, 12),
    _short(3, 8, 12),
    _short(4, 9, 13),
    _long(5, 3, 5, 10, sub_parts=(5, 5)),
))

INTER_ENGLISH = _pattern("intermediate", "English", "3 Hours", (
    _mcq(20, "Choose the correct answer. (Synonyms / Prepositions / Grammar)"),
    _short(2, 6, 9, title="Short Questions (Book I / II - Prose)"),
    _short(3, 6, 9, title="Short Questions (Plays / Heroes)"),
    _short(4, 4, 6, title="Short Questions (Poems / Novel)"),
    _writing(
        5, "Letter / Application Writing",
        "Write a letter / application on the given topic.", 10,
        "Write a letter / application on the given topic:", 16,
    ),
    _writing(
        6, "Story Writing",
        "Write a story on the given topic.", 10,
        "Write a story on the given topic:", 16,
    ),
    _writing(
        7, "Explanation with Reference to Context",
        "Explain the following stanza with reference to the context.", 5,
        "Explain the following stanza with reference to the context:", 10,
    ),
    _writing(
        8, "Punctuation / Translation of Passage",
        "Punctuate the passage OR translate into Urdu.", 15,
        "Punctuate the following passage OR translate it into Urdu:", 20,
    ),
))


# ─────────────────────────────────────────────────────────────────────────────
# Generic Default
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_PATTERN = PaperPattern(
    class_id="default",
    subject="General",
    total_marks=32,
    time_allowed="2 Hours",
    sections=(
        _mcq(12),
        _short(2, 5, 8),
        _long(3, 2, 3, 5),
    ),
)


def default_pattern(class_id: str, subject: str) -> PaperPattern:
    """Generic 12 mcq / 5-of-8 short / 2-of-3 long pattern labelled for the request."""
    return replace(DEFAULT_PATTERN, class_id=class_id, subject=subject)


# ─────────────────────────────────────────────────────────────────────────────
# Catalog
# ─────────────────────────────────────────────────────────────────────────────

def _expand() -> dict[str, PaperPattern]:
    groups = (
        (MATRIC_CLASSES, {
            "mathematics": MATRIC_MATHEMATICS,
            "computer": MATRIC_COMPUTER,
            "english": MATRIC_ENGLISH,
            **{s: MATRIC_SCIENCE for s in SCIENCE_SUBJECTS},
        }),
        (INTERMEDIATE_CLASSES, {
            "mathematics": INTER_MATHEMATICS,
            "computer": INTER_COMPUTER,
            "english": INTER_ENGLISH,
            **{s: INTER_SCIENCE for s in SCIENCE_SUBJECTS},
        }),
    )
    catalog: dict[str, PaperPattern] = {}
    for classes, subjects in groups:
        for class_id in classes:
            for subject, group_pattern in subjects.items():
                pattern = replace(group_pattern, class_id=class_id, subject=subject.title())
                catalog[pattern.key] = pattern
    return catalog


PATTERN_CATALOG: MappingProxyType[str, PaperPattern] = MappingProxyType(_expand())


def catalog_keys() -> list[str]:
    """Every registered catalog key, sorted."""
    return sorted(PATTERN_CATALOG)
