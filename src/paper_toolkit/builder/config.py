"""
Module: builder.config

Purpose:
    Configuration dataclasses for the paper building pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - RenderOptions: Header, contact, logo and print options for rendering
    - BuilderConfig: Everything build_paper() needs besides the store

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - builder.controller: Main build controller
    - builder.output.renderer: Document rendering
    - builder.output.answer_key: Answer key header
    - paper_toolkit.__main__: CLI
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from paper_toolkit.core.models import QuestionOverride

from .layout.distributor import SectionDistributor
from .marks.calculator import AttemptOverrides, MarkOverrides
from .selection.config import PaperConfig

DEFAULT_WATERMARK = "Generated with Paper Toolkit"


@dataclass(frozen=True)
class RenderOptions:
    """
    Presentation options for a rendered paper (immutable).

    Attributes:
        institute_name: Printed in large capitals at the top
        institute_address: Contact bar entry
        institute_email: Contact bar entry
        institute_phone: Contact bar entry
        institute_website: Contact bar entry
        custom_header: Small italic line above the institute name
        custom_sub_header: Small line below the institute name
        exam_type: Optional line such as "Monthly Test"
        date: Date printed in the student block
        time_allowed: Overrides the pattern's time allowed
        syllabus: Pre-filled syllabus line (blank when None)
        logo_path: Local logo image (embedded as a data URI)
        logo_url: Remote or data URI logo (used when no logo_path)
        show_logo: Print the logo when one is configured
        logo_size_px: Longest side of the embedded logo thumbnail
        show_watermark: Append the footer watermark line
        watermark_text: Footer text
        include_bubble_sheet: Append an OMR answer sheet page
        bubbles_per_row: Items per row in the MCQ answer-bubble grid
        answer_key_font_path: TrueType font for the answer key (Helvetica when None)
        question_overrides: Edited text/options per question id

    Example:
        >>> options = RenderOptions(institute_name="City Grammar School", date="2025-03-01")
    """

    institute_name: str = ""
    institute_address: Optional[str] = None
    institute_email: Optional[str] = None
    institute_phone: Optional[str] = None
    institute_website: Optional[str] = None
    custom_header: Optional[str] = None
    custom_sub_header: Optional[str] = None
    exam_type: Optional[str] = None
    date: str = ""
    time_allowed: Optional[str] = None
    syllabus: Optional[str] = None

    # Logo
    logo_path: Optional[Path] = None
    logo_url: Optional[str] = None
    show_logo: bool = True
    logo_size_px: int = 96

    # Print extras
    show_watermark: bool = True
    watermark_text: str = DEFAULT_WATERMARK
    include_bubble_sheet: bool = False
    bubbles_per_row: int = 5
    base_font_pt: int = 12
    answer_key_font_path: Optional[Path] = None

    # Edit overlay
    question_overrides: Mapping[str, QuestionOverride] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate options on construction."""
        if self.bubbles_per_row < 1:
            raise ValueError(f"bubbles_per_row must be positive: {self.bubbles_per_row}")
        if self.logo_size_px <= 0:
            raise ValueError(f"logo_size_px must be positive: {self.logo_size_px}")
        if self.base_font_pt <= 0:
            raise ValueError(f"base_font_pt must be positive: {self.base_font_pt}")
        if self.logo_path is not None and not isinstance(self.logo_path, Path):
            object.__setattr__(self, "logo_path", Path(self.logo_path))
        if self.answer_key_font_path is not None and not isinstance(self.answer_key_font_path, Path):
            object.__setattr__(self, "answer_key_font_path", Path(self.answer_key_font_path))

    @property
    def has_contact(self) -> bool:
        return any((
            self.institute_address,
            self.institute_email,
            self.institute_phone,
            self.institute_website,
        ))

    @property
    def has_logo(self) -> bool:
        return self.show_logo and (self.logo_path is not None or bool(self.logo_url))


@dataclass(frozen=True)
class BuilderConfig:
    """
    Configuration for building one paper (immutable).

    Attributes:
        paper: Selection request
        render: Presentation options
        mark_overrides: Marks per question by type
        attempt_overrides: Attempt counts for the per-type breakdown
        distributor: Section allocation strategy (sequential when None)
        strict_pattern: Fail instead of using the generic default pattern
        header_total: Declared total to check against the computed total
        include_answer_key: Also render the answer key PDF
        validate_availability: Raise BuildError when the pool cannot fill the
            request (default: short-fill and report warnings)

    Example:
        >>> config = BuilderConfig(
        ...     paper=PaperConfig(class_id="9th", subject_id="physics",
        ...                       chapter_ids=("ch1",), mcq_count=12),
        ...     render=RenderOptions(institute_name="City School"),
        ... )
    """

    paper: PaperConfig
    render: RenderOptions = field(default_factory=RenderOptions)
    mark_overrides: MarkOverrides = field(default_factory=MarkOverrides)
    attempt_overrides: AttemptOverrides = field(default_factory=AttemptOverrides)
    distributor: Optional[SectionDistributor] = None
    strict_pattern: bool = False
    header_total: Optional[int] = None
    include_answer_key: bool = False
    validate_availability: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.header_total is not None and self.header_total < 0:
            raise ValueError(f"header_total cannot be negative: {self.header_total}")
