"""
Module: builder.patterns

Purpose:
    Board paper pattern catalog and resolver.

Key Functions:
    - resolve_pattern(): Pattern for a (class, subject) pair
    - lookup_pattern(): Pattern plus fallback flag

Key Classes:
    - PatternResolution: Lookup result
    - UnsupportedPatternError: Strict-mode miss
"""

from .catalog import DEFAULT_PATTERN, PATTERN_CATALOG, catalog_keys, default_pattern
from .resolver import (
    PatternResolution,
    UnsupportedPatternError,
    lookup_pattern,
    pattern_key,
    resolve_pattern,
)

__all__ = [
    "DEFAULT_PATTERN",
    "PATTERN_CATALOG",
    "catalog_keys",
    "default_pattern",
    "PatternResolution",
    "UnsupportedPatternError",
    "lookup_pattern",
    "pattern_key",
    "resolve_pattern",
]
