"""
Module: builder.output.mathtext

Purpose:
    Turn question text containing $...$, $$...$$, \\(...\\) and \\[...\\]
    formulas into safe HTML. Plain text is escaped; each formula is checked
    for structural well-formedness and either wrapped for a later
    typesetting pass or shown as an inline error marker.

Key Functions:
    - extract_math_content(): Split text into text/math segments
    - find_math_spans(): Offsets of formulas, for math-aware splitting
    - validate_latex(): Structural checks on one formula
    - process_math_in_text(): Full text → markup conversion
    - collect_math_issues(): Invalid formulas in a text, for pre-checks
    - strip_emojis(), escape_html(), escape_attr(): Text helpers

Key Classes:
    - TextSegment: One text or math span
    - MathValidation: Result of validate_latex()

Used By:
    - builder.output.renderer: Question and option text
    - builder.output.validation: INVALID_MATH warnings

Notes:
    No LaTeX is executed here. Valid formulas are emitted as
    <span class="math-inline|math-display" data-katex="..."> with the
    escaped source as fallback text.
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

# Delimiter forms in priority order for equal start positions
_MATH_PATTERNS = (
    (re.compile(r"\$\$([^$]+)\$\$"), True),
    (re.compile(r"\$([^$]+)\$"), False),
    (re.compile(r"\\\[([\s\S]+?)\\\]"), True),
    (re.compile(r"\\\(([\s\S]+?)\\\)"), False),
)

_EMOJI_RE = re.compile(
    "["
    "\U0001F600-\U0001F64F"
    "\U0001F300-\U0001F5FF"
    "\U0001F680-\U0001F6FF"
    "\U0001F1E0-\U0001F1FF"
    "\u2600-\u26FF"
    "\u2700-\u27BF"
    "]"
)

# Backslash followed by a non-letter that is still a valid LaTeX escape
_VALID_SYMBOL_ESCAPES = set(",;:!>{}%$#&_| \\'\"^~.=")

_BRACKET_PAIRS = (
    ("{", "}", "braces"),
    ("(", ")", "parentheses"),
    ("[", "]", "brackets"),
)


@dataclass(frozen=True)
class TextSegment:
    """
    One segment of question text.

    Attributes:
        is_math: True for a formula, False for plain text
        content: Segment text (formula source without delimiters)
        is_display: Display-style formula ($$...$$ or \\[...\\])
    """

    is_math: bool
    content: str
    is_display: bool = False


@dataclass(frozen=True)
class MathValidation:
    """Result of validating one formula."""

    valid: bool
    latex: str
    error: Optional[str] = None


# ─────────────────────────────────────────────────────────────────────────────
# Text Helpers
# ─────────────────────────────────────────────────────────────────────────────

def strip_emojis(text: Optional[str]) -> str:
    """Remove emoji pictographs and surrounding whitespace."""
    if not text:
        return ""
    return _EMOJI_RE.sub("", text).strip()


def escape_html(text: Optional[str]) -> str:
    """Escape & < > " ' for element content."""
    if not text:
        return ""
    return html.escape(text, quote=True)


def escape_attr(value: object) -> str:
    """Escape any value for use inside a double-quoted attribute."""
    return html.escape("" if value is None else str(value), quote=True)


# ─────────────────────────────────────────────────────────────────────────────
# Extraction
# ─────────────────────────────────────────────────────────────────────────────

def _next_math_match(text: str, pos: int) -> Optional[tuple[re.Match, bool]]:
    """Earliest formula match at or after ``pos`` with its display flag."""
    best = None
    for pattern, is_display in _MATH_PATTERNS:
        match = pattern.search(text, pos)
        if match and (best is None or match.start() < best[0].start()):
            best = (match, is_display)
    return best


def find_math_spans(text: Optional[str]) -> list[tuple[int, int]]:
    """(start, end) offsets of every formula in ``text``, delimiters included."""
    spans: list[tuple[int, int]] = []
    pos = 0
    while text and pos < len(text):
        best = _next_math_match(text, pos)
        if best is None:
            break
        spans.append(best[0].span())
        pos = best[0].end()
    return spans


def extract_math_content(text: Optional[str]) -> list[TextSegment]:
    """
    Split text into plain and math segments.

    At each step the delimiter form whose match starts earliest wins.

    Example:
        >>> extract_math_content("Solve $x^2$ now")
        [TextSegment(is_math=False, content='Solve ', is_display=False),
         TextSegment(is_math=True, content='x^2', is_display=False),
         TextSegment(is_math=False, content=' now', is_display=False)]
    """
    if not text:
        return [TextSegment(is_math=False, content="")]

    segments: list[TextSegment] = []
    pos = 0
    while pos < len(text):
        best = _next_math_match(text, pos)
        if best is None:
            segments.append(TextSegment(is_math=False, content=text[pos:]))
            break

        match, is_display = best
        if match.start() > pos:
            segments.append(TextSegment(is_math=False, content=text[pos:match.start()]))
        segments.append(TextSegment(is_math=True, content=match.group(1), is_display=is_display))
        pos = match.end()

    return segments


# ─────────────────────────────────────────────────────────────────────────────
# Validation
# ─────────────────────────────────────────────────────────────────────────────

def _unmatched(latex: str, opening: str, closing: str) -> tuple[int, int]:
    """Count unmatched opening and closing characters (escaped braces skipped)."""
    depth = 0
    stray_closing = 0
    escaped = False
    for ch in latex:
        if escaped:
            escaped = False
            if ch == "\\" or opening == "{":
                continue
        elif ch == "\\":
            escaped = True
            continue
        if ch == opening:
            depth += 1
        elif ch == closing:
            if depth:
                depth -= 1
            else:
                stray_closing += 1
    return depth, stray_closing


def _invalid_escape(latex: str) -> Optional[str]:
    """First backslash escape that is neither a command nor a known symbol."""
    idx = 0
    while idx < len(latex):
        if latex[idx] == "\\":
            nxt = latex[idx + 1] if idx + 1 < len(latex) else ""
            if nxt.isalpha():
                idx += 2
                continue
            if nxt and nxt in _VALID_SYMBOL_ESCAPES:
                idx += 2
                continue
            return latex[idx:idx + 2]
        idx += 1
    return None


def validate_latex(latex: Optional[str]) -> MathValidation:
    """
    Check a formula for structural problems.

    Checks, in order: empty formula, unmatched {}, (), [], and backslash
    escapes that are neither commands (\\frac) nor symbol escapes (\\,).

    Example:
        >>> validate_latex(r"\\frac{1}{2").error
        'Mismatched braces: 1 opening, 0 closing'
    """
    if not latex or not latex.strip():
        return MathValidation(valid=False, latex="", error="Empty formula")

    for opening, closing, name in _BRACKET_PAIRS:
        open_count, close_count = _unmatched(latex, opening, closing)
        if open_count or close_count:
            return MathValidation(
                valid=False,
                latex=latex,
                error=f"Mismatched {name}: {open_count} opening, {close_count} closing",
            )

    bad_escape = _invalid_escape(latex)
    if bad_escape is not None:
        return MathValidation(
            valid=False,
            latex=latex,
            error=f"Invalid escape sequence: {bad_escape}",
        )

    return MathValidation(valid=True, latex=latex)


# ─────────────────────────────────────────────────────────────────────────────
# Markup
# ─────────────────────────────────────────────────────────────────────────────

def render_math_segment(segment: TextSegment) -> str:
    """Markup for one math segment (valid span or error marker)."""
    validation = validate_latex(segment.content)
    if not validation.valid:
        logger.warning(f"Invalid LaTeX {segment.content!r}: {validation.error}")
        return (
            f'<span class="math-error" title="{escape_attr(validation.error)}">'
            f"[{escape_html(segment.content)}]</span>"
        )
    css_class = "math-display" if segment.is_display else "math-inline"
    return (
        f'<span class="{css_class}" data-katex="{escape_attr(segment.content)}">'
        f"{escape_html(segment.content)}</span>"
    )


def process_math_in_text(text: Optional[str]) -> str:
    """
    Convert question text to safe markup.

    Emojis are stripped, plain text is HTML-escaped and every formula is
    validated. One bad formula never affects the rest of the text.
    """
    if not text:
        return ""
    parts = []
    for segment in extract_math_content(strip_emojis(text)):
        if segment.is_math:
            parts.append(render_math_segment(segment))
        else:
            parts.append(escape_html(segment.content))
    return "".join(parts)


def collect_math_issues(text: Optional[str]) -> list[tuple[str, str]]:
    """(formula, error) for every invalid formula in ``text``."""
    issues = []
    for segment in extract_math_content(text):
        if not segment.is_math:
            continue
        validation = validate_latex(segment.content)
        if not validation.valid:
            issues.append((segment.content, validation.error or "Invalid formula"))
    return issues
