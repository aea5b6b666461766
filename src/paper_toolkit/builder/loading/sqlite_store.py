"""
Module: builder.loading.sqlite_store

Purpose:
    QuestionStore backed by a single SQLite table, for banks too large to
    keep as JSON files or shared between tools.

Key Classes:
    - SqliteQuestionStore: Indexed questions table with query()

Dependencies:
    - sqlite3 (std)

Used By:
    - builder.controller callers
    - paper_toolkit.__main__: --db option
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from paper_toolkit.core.models import Difficulty, Question, QuestionType

from .store import ChapterStats, subject_key

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS questions (
    id TEXT PRIMARY KEY,
    class_id TEXT NOT NULL,
    subject_id TEXT NOT NULL,
    chapter_id TEXT NOT NULL,
    question_type TEXT NOT NULL,
    text TEXT NOT NULL,
    marks INTEGER NOT NULL,
    difficulty TEXT NOT NULL DEFAULT 'medium',
    options_json TEXT NOT NULL DEFAULT '[]',
    correct_option INTEGER,
    topic TEXT,
    answer TEXT
);

CREATE INDEX IF NOT EXISTS idx_questions_subject ON questions (class_id, subject_id);
CREATE INDEX IF NOT EXISTS idx_questions_chapter ON questions (chapter_id);
CREATE INDEX IF NOT EXISTS idx_questions_type ON questions (question_type);
CREATE INDEX IF NOT EXISTS idx_questions_difficulty ON questions (difficulty);
"""


def _row_to_question(row: sqlite3.Row) -> Question:
    return Question(
        id=row["id"],
        type=QuestionType(row["question_type"]),
        text=row["text"],
        chapter_id=row["chapter_id"],
        marks=row["marks"],
        difficulty=Difficulty(row["difficulty"]),
        options=tuple(json.loads(row["options_json"])),
        correct_option_index=row["correct_option"],
        topic=row["topic"],
        answer=row["answer"],
    )


class SqliteQuestionStore:
    """
    Questions table keyed by id.

    Example:
        >>> store = SqliteQuestionStore(":memory:")
        >>> store.add_questions("9th", "physics", questions)
        >>> len(store.query("9th", "physics", ["ch1"]))
        12
    """

    def __init__(self, db_path: Union[Path, str]):
        self.db_path = db_path
        self.conn = sqlite3.connect(str(db_path))
        self.conn.row_factory = sqlite3.Row
        self._init_schema()

    def _init_schema(self) -> None:
        self.conn.executescript(SCHEMA)
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> SqliteQuestionStore:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def add_questions(self, class_id: str, subject_id: str, questions: Iterable[Question]) -> int:
        """Insert or replace questions for a (class, subject) pair."""
        class_key, subject = subject_key(class_id, subject_id)
        rows = [
            (
                q.id,
                class_key,
                subject,
                q.chapter_id,
                q.type.value,
                q.text,
                q.marks,
                q.difficulty.value,
                json.dumps(list(q.options), ensure_ascii=False),
                q.correct_option_index,
                q.topic,
                q.answer,
            )
            for q in questions
        ]
        self.conn.executemany(
            """INSERT OR REPLACE INTO questions
               (id, class_id, subject_id, chapter_id, question_type, text, marks,
                difficulty, options_json, correct_option, topic, answer)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            rows,
        )
        self.conn.commit()
        logger.info(f"Stored {len(rows)} questions for {class_key}/{subject}")
        return len(rows)

    def query(
        self,
        class_id: str,
        subject_id: str,
        chapter_ids: Sequence[str],
        question_type: Optional[QuestionType] = None,
    ) -> List[Question]:
        if not chapter_ids:
            return []
        class_key, subject = subject_key(class_id, subject_id)
        placeholders = ", ".join("?" for _ in chapter_ids)
        sql = (
            "SELECT * FROM questions WHERE class_id = ? AND subject_id = ? "
            f"AND chapter_id IN ({placeholders})"
        )
        params: list = [class_key, subject, *chapter_ids]
        if question_type is not None:
            sql += " AND question_type = ?"
            params.append(question_type.value)
        sql += " ORDER BY rowid"
        rows = self.conn.execute(sql, params).fetchall()
        return [_row_to_question(row) for row in rows]

    def chapter_stats(self, class_id: str, subject_id: str) -> List[ChapterStats]:
        """Per-chapter counts for every chapter of a subject, by chapter id."""
        class_key, subject = subject_key(class_id, subject_id)
        rows = self.conn.execute(
            """SELECT chapter_id,
                      SUM(question_type = 'mcq') AS mcq_count,
                      SUM(question_type = 'short') AS short_count,
                      SUM(question_type = 'long') AS long_count
               FROM questions WHERE class_id = ? AND subject_id = ?
               GROUP BY chapter_id ORDER BY chapter_id""",
            (class_key, subject),
        ).fetchall()
        return [
            ChapterStats(
                chapter_id=row["chapter_id"],
                mcq_count=row["mcq_count"] or 0,
                short_count=row["short_count"] or 0,
                long_count=row["long_count"] or 0,
            )
            for row in rows
        ]
