"""
Module: builder.loading

Purpose:
    Question bank access. Defines the QuestionStore capability used by
    the selection engine and three implementations: in-memory, flat JSON
    content files and SQLite.

Key Functions:
    - load_questions(): Load one subject file
    - chapter_stats(): Per-chapter counts from any store

Key Classes:
    - QuestionStore: Query protocol
    - InMemoryQuestionStore, JsonQuestionStore, SqliteQuestionStore
    - LoaderError: Malformed content file

Dependencies:
    - paper_toolkit.core.utils: Record conversion
    - paper_toolkit.core.schemas: Schema validation

Used By:
    - builder.selection.selector: Candidate fetch
    - builder.controller: Main build controller
"""

from .store import (
    ChapterStats,
    InMemoryQuestionStore,
    QuestionStore,
    chapter_stats,
    subject_key,
)
from .loader import (
    JsonQuestionStore,
    LoaderError,
    discover_subjects,
    load_questions,
    subject_path,
)
from .sqlite_store import SqliteQuestionStore

__all__ = [
    "ChapterStats",
    "InMemoryQuestionStore",
    "QuestionStore",
    "chapter_stats",
    "subject_key",
    "JsonQuestionStore",
    "LoaderError",
    "discover_subjects",
    "load_questions",
    "subject_path",
    "SqliteQuestionStore",
]
