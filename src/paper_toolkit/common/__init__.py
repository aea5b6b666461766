"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .logging_utils import configure_logging

__all__ = [
    "configure_logging",
]
