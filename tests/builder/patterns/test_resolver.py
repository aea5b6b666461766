"""
Unit tests for the pattern resolver.
"""

import logging

import pytest

from paper_toolkit.builder.patterns import (
    PATTERN_CATALOG,
    UnsupportedPatternError,
    lookup_pattern,
    pattern_key,
    resolve_pattern,
)


class TestPatternKey:
    """Tests for pattern_key function."""

    @pytest.mark.parametrize("subject, expected", [
        ("Physics", "9th_physics"),
        (" Maths ", "9th_mathematics"),
        ("math", "9th_mathematics"),
        ("Computer Science", "9th_computer"),
    ])
    def test_pattern_key_when_alias_or_case_then_normalized(self, subject, expected):
        assert pattern_key("9th", subject) == expected


class TestLookupPattern:
    """Tests for lookup_pattern function."""

    def test_lookup_when_registered_then_not_fallback(self):
        resolution = lookup_pattern("11th", "Maths")

        assert not resolution.is_fallback
        assert resolution.pattern is PATTERN_CATALOG["11th_mathematics"]

    def test_lookup_when_unknown_then_default_with_warning(self, caplog):
        """Unknown pairs fall back and the fallback is logged."""
        # Act
        with caplog.at_level(logging.WARNING):
            resolution = lookup_pattern("8th", "Urdu")

        # Assert
        assert resolution.is_fallback
        assert resolution.key == "8th_urdu"
        assert resolution.pattern.subject == "Urdu"
        assert "generic default" in caplog.text

    def test_lookup_when_unknown_and_strict_then_raises(self):
        with pytest.raises(UnsupportedPatternError, match="8th_urdu"):
            lookup_pattern("8th", "Urdu", strict=True)

    def test_lookup_when_custom_catalog_then_used(self):
        custom = {"9th_physics": PATTERN_CATALOG["11th_physics"]}

        resolution = lookup_pattern("9th", "physics", catalog=custom)

        assert resolution.pattern.total_marks == 85

    def test_resolve_pattern_when_unknown_then_default_returned(self):
        assert resolve_pattern("1st", "Art").total_marks == 32
