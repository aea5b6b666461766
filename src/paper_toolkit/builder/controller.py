"""
Module: builder.controller

Purpose:
    Orchestrate the complete paper building pipeline.
    Check → Select → Resolve pattern → Distribute → Marks → Validate → Render

Key Functions:
    - build_paper(): Main entry point for building a paper

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - builder.selection: Question selection
    - builder.patterns: Pattern lookup
    - builder.layout: Section distribution
    - builder.marks: Marks calculation
    - builder.output: HTML rendering, answer key, pre-checks

Used By:
    - paper_toolkit.__main__: CLI build command
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from paper_toolkit.core.models import (
    MarksBreakdown,
    MarksValidation,
    PaperMarks,
    PaperPattern,
    QuestionType,
    SectionType,
)

from .config import BuilderConfig
from .layout import DistributedPaper, distribute_paper
from .loading import LoaderError, QuestionStore
from .marks import (
    AttemptOverrides,
    MarkOverrides,
    compute_marks,
    compute_paper_marks,
    validate_paper_total,
)
from .output import (
    PaperSettings,
    PaperValidationReport,
    render_answer_key,
    render_paper,
    validate_paper_data,
)
from .patterns import PatternResolution, UnsupportedPatternError, lookup_pattern
from .selection import QuestionSelector, ResolvedPaper, SelectionSession

logger = logging.getLogger(__name__)


class BuildError(Exception):
    """Error during build pipeline."""
    pass


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        html: Rendered paper document
        paper: Selected questions per type
        distributed: Questions placed in pattern sections
        marks: Live per-section marks
        breakdown: Per-type marks breakdown
        resolution: Pattern lookup result (check is_fallback)
        validation: Pre-generation validation report
        marks_validation: Declared vs live total
        answer_key: Answer key PDF bytes (if requested)
        metadata: Build metadata dictionary
        warnings: Any warnings during build
        elapsed: Build time in seconds

    Example:
        >>> result = build_paper(store, config)
        >>> print(f"{result.marks.total} marks, fallback={result.resolution.is_fallback}")
    """

    html: str
    paper: ResolvedPaper
    distributed: DistributedPaper
    marks: PaperMarks
    breakdown: MarksBreakdown
    resolution: PatternResolution
    validation: PaperValidationReport
    marks_validation: MarksValidation
    answer_key: Optional[bytes]
    metadata: dict
    warnings: tuple[str, ...]
    elapsed: float = 0.0

    @property
    def total_marks(self) -> int:
        return self.marks.total


def build_paper(
    store: QuestionStore,
    config: BuilderConfig,
    session: Optional[SelectionSession] = None,
) -> BuildResult:
    """
    Build a paper from start to finish.

    Pipeline:
    1. Check the pool can satisfy the request (optional)
    2. Select questions (session-aware, optionally seeded)
    3. Resolve the class/subject pattern
    4. Distribute questions across sections
    5. Compute live marks and check the declared total
    6. Run pre-generation validation (reported, never blocking)
    7. Render HTML
    8. (Optional) Render answer key PDF

    Args:
        store: Question bank
        config: Build configuration
        session: Caller-owned session; ids used by this paper are recorded

    Returns:
        BuildResult

    Raises:
        BuildError: On a pool shortfall (when checked), a store failure or an
            unmapped pattern under strict_pattern

    Example:
        >>> session = SelectionSession()
        >>> first = build_paper(store, config, session)
        >>> second = build_paper(store, config, session)
        >>> set(first.paper.question_ids).isdisjoint(second.paper.question_ids)
        True
    """
    warnings: List[str] = []
    start_time = time.perf_counter()
    paper_config = config.paper
    selector = QuestionSelector(store, session)

    logger.info(
        f"Starting build for {paper_config.class_id}/{paper_config.subject_id} "
        f"({paper_config.mcq_count} MCQ, {paper_config.short_count} short, "
        f"{paper_config.long_count} long)"
    )

    # 1-2. Availability and selection
    try:
        if config.validate_availability:
            report = selector.validate_availability(paper_config)
            if not report.valid:
                raise BuildError("; ".join(report.describe()))
        paper = selector.select_questions(paper_config)
    except LoaderError as e:
        raise BuildError(f"Failed to load questions: {e}") from e

    for question_type in QuestionType:
        got = paper.counts.get(question_type)
        wanted = paper_config.count_for(question_type)
        if got < wanted:
            warnings.append(f"Only {got} of {wanted} {question_type.value} questions selected")

    # 3. Pattern
    try:
        resolution = lookup_pattern(
            paper_config.class_id,
            paper_config.subject_id,
            strict=config.strict_pattern,
        )
    except UnsupportedPatternError as e:
        raise BuildError(str(e)) from e
    if resolution.is_fallback:
        warnings.append(f"No paper pattern for {resolution.key}; generic default used")
    pattern = resolution.pattern

    # 4. Distribution
    distributed = distribute_paper(
        pattern,
        paper,
        distributor=config.distributor,
        mark_overrides=config.mark_overrides,
    )
    if distributed.unplaced:
        warnings.append(f"{len(distributed.unplaced)} selected question(s) did not fit the pattern")

    # 5. Marks
    marks = compute_paper_marks(distributed.allocations)
    breakdown = compute_marks(
        distributed.questions_of(QuestionType.MCQ),
        distributed.questions_of(QuestionType.SHORT),
        distributed.questions_of(QuestionType.LONG),
        attempt_overrides=_effective_attempts(distributed, config.attempt_overrides),
        mark_overrides=_effective_marks(pattern, config.mark_overrides),
    )
    header_total = config.header_total if config.header_total is not None else pattern.total_marks
    marks_validation = validate_paper_total(header_total, marks)
    if not marks_validation.valid and marks_validation.error:
        warnings.append(marks_validation.error)

    # 6. Pre-generation validation
    overrides = config.render.question_overrides

    def printed(question_type: QuestionType):
        return [
            overrides[q.id].apply(q) if q.id in overrides else q
            for q in distributed.questions_of(question_type)
        ]

    validation = validate_paper_data(
        PaperSettings(
            institute_name=config.render.institute_name,
            subject=pattern.subject,
            class_id=paper_config.class_id,
            date=config.render.date,
        ),
        printed(QuestionType.MCQ),
        printed(QuestionType.SHORT),
        printed(QuestionType.LONG),
    )
    warnings.extend(issue.message for issue in validation.errors)
    warnings.extend(issue.message for issue in validation.warnings)

    # 7. Render
    html = render_paper(pattern, distributed, marks, config.render)

    # 8. Answer key (optional)
    answer_key = None
    if config.include_answer_key:
        answer_key = render_answer_key(distributed, config.render)

    elapsed = time.perf_counter() - start_time
    logger.info(f"Paper generation completed in {elapsed:.2f}s ({marks.total} marks)")

    metadata = _build_metadata(config, pattern, resolution, distributed, marks, elapsed)

    return BuildResult(
        html=html,
        paper=paper,
        distributed=distributed,
        marks=marks,
        breakdown=breakdown,
        resolution=resolution,
        validation=validation,
        marks_validation=marks_validation,
        answer_key=answer_key,
        metadata=metadata,
        warnings=tuple(warnings),
        elapsed=elapsed,
    )


def _effective_marks(pattern: PaperPattern, overrides: MarkOverrides) -> MarkOverrides:
    """Fill unset overrides from the first pattern section of each type."""
    values = {}
    for question_type in QuestionType:
        value = overrides.get(question_type)
        if value is None:
            sections = pattern.sections_of(SectionType(question_type.value))
            if sections:
                value = sections[0].marks_per_question
        values[question_type.value] = value
    return MarkOverrides(**values)


def _effective_attempts(distributed: DistributedPaper, overrides: AttemptOverrides) -> AttemptOverrides:
    """Fill unset attempt overrides from the live section attempt counts."""
    def attempted(section_type: SectionType) -> int:
        return sum(a.attempt_count for a in distributed.allocations_of(section_type))

    return AttemptOverrides(
        short=overrides.short if overrides.short is not None else attempted(SectionType.SHORT),
        long=overrides.long if overrides.long is not None else attempted(SectionType.LONG),
    )


def _build_metadata(
    config: BuilderConfig,
    pattern: PaperPattern,
    resolution: PatternResolution,
    distributed: DistributedPaper,
    marks: PaperMarks,
    elapsed: float,
) -> dict:
    """
    Build metadata dictionary for a generated paper.

    Contains:
    - Build configuration
    - Pattern resolution
    - Question ids per section
    - Live marks
    - Timestamp

    Returns:
        Metadata dictionary ready for JSON serialization
    """
    paper_config = config.paper
    return {
        "config": {
            "class_id": paper_config.class_id,
            "subject_id": paper_config.subject_id,
            "chapter_ids": list(paper_config.chapter_ids),
            "mcq_count": paper_config.mcq_count,
            "short_count": paper_config.short_count,
            "long_count": paper_config.long_count,
            "difficulty": paper_config.difficulty.value if paper_config.difficulty else None,
            "seed": paper_config.seed,
            "shuffle_mode": paper_config.shuffle_mode.value,
        },
        "pattern": {
            "key": resolution.key,
            "is_fallback": resolution.is_fallback,
            "declared_total": pattern.total_marks,
            "time_allowed": pattern.time_allowed,
        },
        "sections": [
            {
                "q_number": a.section.q_number,
                "type": a.section.type.value,
                "question_ids": [q.id for q in a.questions],
                "attempt_count": a.attempt_count,
                "marks": a.total_marks,
                "formula": a.marks_formula,
            }
            for a in distributed.allocations
        ],
        "unplaced_ids": [q.id for q in distributed.unplaced],
        "total_marks": marks.total,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "build_seconds": round(elapsed, 3),
    }
