"""
Module: builder.patterns.resolver

Purpose:
    Map a (class, subject) pair to its paper pattern. Unknown pairs fall
    back to the generic default so a paper can always be rendered; the
    fallback is logged and reported, and strict mode refuses it.

Key Functions:
    - pattern_key(): Normalized catalog key
    - resolve_pattern(): Pattern for a (class, subject) pair
    - lookup_pattern(): Pattern plus whether the fallback was used

Key Classes:
    - PatternResolution: Lookup result
    - UnsupportedPatternError: Raised in strict mode on a miss

Used By:
    - builder.controller: Build pipeline
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from paper_toolkit.core.models import PaperPattern

from .catalog import PATTERN_CATALOG, default_pattern

logger = logging.getLogger(__name__)

SUBJECT_ALIASES = {
    "maths": "mathematics",
    "math": "mathematics",
    "computer science": "computer",
    "cs": "computer",
}


class UnsupportedPatternError(Exception):
    """No pattern is registered for the requested class and subject."""
    pass


@dataclass(frozen=True)
class PatternResolution:
    """
    Result of a pattern lookup (immutable).

    Attributes:
        pattern: Resolved pattern (catalog entry or generic default)
        key: Normalized key that was looked up
        is_fallback: True when the generic default was returned
    """

    pattern: PaperPattern
    key: str
    is_fallback: bool


def pattern_key(class_id: str, subject: str) -> str:
    """
    Normalized "{class}_{subject}" key.

    Example:
        >>> pattern_key("9th", " Maths ")
        '9th_mathematics'
    """
    normalized = " ".join(subject.strip().lower().split())
    normalized = SUBJECT_ALIASES.get(normalized, normalized)
    return f"{class_id.strip().lower()}_{normalized}"


def lookup_pattern(
    class_id: str,
    subject: str,
    *,
    strict: bool = False,
    catalog: Optional[Mapping[str, PaperPattern]] = None,
) -> PatternResolution:
    """
    Look up the pattern for a class and subject.

    Args:
        class_id: Class like "9th"
        subject: Subject name, any case, aliases accepted
        strict: Raise instead of falling back to the default pattern
        catalog: Alternative catalog (defaults to the built-in one)

    Returns:
        PatternResolution

    Raises:
        UnsupportedPatternError: On a miss when strict is True
    """
    table = PATTERN_CATALOG if catalog is None else catalog
    key = pattern_key(class_id, subject)
    pattern = table.get(key)
    if pattern is not None:
        logger.debug(f"Resolved pattern {key} ({pattern.total_marks} marks)")
        return PatternResolution(pattern=pattern, key=key, is_fallback=False)

    if strict:
        raise UnsupportedPatternError(f"No paper pattern registered for {key!r}")

    logger.warning(f"No paper pattern for {key!r}; using generic default pattern")
    return PatternResolution(
        pattern=default_pattern(class_id, subject),
        key=key,
        is_fallback=True,
    )


def resolve_pattern(class_id: str, subject: str) -> PaperPattern:
    """Pattern for a class and subject, falling back to the generic default."""
    return lookup_pattern(class_id, subject).pattern
