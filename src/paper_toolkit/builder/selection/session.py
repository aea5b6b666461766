"""
Module: builder.selection.session

Purpose:
    Caller-owned record of question ids already placed on a paper, so
    successive selections against the same session never repeat a question.

Key Classes:
    - SelectionSession: Mutable used-id set

Used By:
    - builder.selection.selector: Exclusion and recording
    - builder.controller: Optional session passed into build_paper
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


class SelectionSession:
    """
    Set of question ids used so far.

    One session per user or request. Selections made against the same
    session are disjoint until clear() is called. Not thread-safe; share a
    session between threads only with external locking.

    Example:
        >>> session = SelectionSession()
        >>> session.mark_used(["q1", "q2"])
        >>> "q1" in session
        True
        >>> session.clear()
        >>> len(session)
        0
    """

    def __init__(self, used_ids: Iterable[str] = ()) -> None:
        self._used: set[str] = set(used_ids)

    def mark_used(self, question_ids: Iterable[str]) -> None:
        """Record ids as used."""
        before = len(self._used)
        self._used.update(question_ids)
        logger.debug(f"Session now holds {len(self._used)} ids (+{len(self._used) - before})")

    def clear(self) -> None:
        """Forget every used id."""
        logger.debug(f"Clearing session of {len(self._used)} used ids")
        self._used.clear()

    @property
    def used_ids(self) -> frozenset[str]:
        """Snapshot of the used ids."""
        return frozenset(self._used)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._used

    def __len__(self) -> int:
        return len(self._used)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._used))

    def __repr__(self) -> str:
        return f"SelectionSession(used={len(self._used)})"
