"""
Module: builder

Purpose:
    Paper building pipeline. Selects questions from a bank, lays them out
    on a board paper pattern and renders a print-ready document.

Key Functions:
    - select_questions(): Pick questions meeting per-type quotas
    - lookup_pattern(): Pattern for a class and subject
    - distribute_paper(): Place questions into pattern sections
    - render_paper(): Render the paper to HTML
    - build_paper(): Main entry point for paper generation

Key Classes:
    - PaperConfig: Selection request
    - RenderOptions: Presentation options
    - BuilderConfig: Configuration for building
    - SelectionSession: Caller-owned used-id record

Used By:
    - paper_toolkit.__main__: CLI
"""

from .config import BuilderConfig, RenderOptions
from .selection import PaperConfig, SelectionSession, select_questions, validate_availability
from .patterns import lookup_pattern, resolve_pattern
from .layout import distribute_paper
from .output import render_answer_key, render_paper
from .loading import InMemoryQuestionStore, JsonQuestionStore, LoaderError, SqliteQuestionStore
from .controller import BuildError, BuildResult, build_paper

__all__ = [
    # Config
    "BuilderConfig",
    "RenderOptions",
    "PaperConfig",
    # Selection
    "SelectionSession",
    "select_questions",
    "validate_availability",
    # Patterns and layout
    "lookup_pattern",
    "resolve_pattern",
    "distribute_paper",
    # Output
    "render_answer_key",
    "render_paper",
    # Loading
    "InMemoryQuestionStore",
    "JsonQuestionStore",
    "LoaderError",
    "SqliteQuestionStore",
    # Controller
    "build_paper",
    "BuildResult",
    "BuildError",
]
