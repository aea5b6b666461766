"""
Command-line entry point.

Commands:
    build     Select questions, render the paper to HTML (and answer key PDF)
    check     Report whether the bank can satisfy a request
    patterns  List the registered board paper patterns

Examples:
    paper-toolkit build --bank content --class 9th --subject physics --chapters ch1,ch2 --seed 7
    paper-toolkit check --bank content --class 9th --subject physics --chapters ch1 --mcq 40
    paper-toolkit patterns
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Iterator, Optional, Sequence

from paper_toolkit import __version__
from paper_toolkit.builder import (
    BuildError,
    BuilderConfig,
    JsonQuestionStore,
    LoaderError,
    PaperConfig,
    RenderOptions,
    SqliteQuestionStore,
    build_paper,
)
from paper_toolkit.builder.loading import QuestionStore
from paper_toolkit.builder.patterns import PATTERN_CATALOG, catalog_keys, lookup_pattern
from paper_toolkit.builder.selection import QuestionSelector, ShuffleMode
from paper_toolkit.common import configure_logging
from paper_toolkit.core.models import Difficulty

logger = logging.getLogger("paper_toolkit.cli")


# ─────────────────────────────────────────────────────────────────────────────
# Argument Parsing
# ─────────────────────────────────────────────────────────────────────────────

def _add_request_args(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--bank", type=Path, help="Content root with <class>/<subject>.json files")
    source.add_argument("--db", type=Path, help="SQLite question database")

    parser.add_argument("--class", dest="class_id", required=True, help="Class, e.g. 9th")
    parser.add_argument("--subject", required=True, help="Subject, e.g. physics")
    parser.add_argument("--chapters", required=True, help="Comma-separated chapter ids")
    parser.add_argument("--mcq", type=int, default=None, help="MCQ count (default: fill the pattern)")
    parser.add_argument("--short", type=int, default=None, help="Short question count")
    parser.add_argument("--long", type=int, default=None, help="Long question count")
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=None,
        help="Only use questions of this difficulty",
    )
    parser.add_argument("--exclude", default="", help="Comma-separated question ids to skip")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible paper")
    parser.add_argument(
        "--legacy-shuffle",
        action="store_true",
        help="Use the older comparator shuffle instead of Fisher-Yates",
    )
    parser.add_argument("--strict-pattern", action="store_true", help="Fail when no pattern is registered")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paper-toolkit",
        description="Build board-pattern examination papers from a question bank",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    parser.add_argument("--log-file", type=Path, default=None, help="Also log to this file")

    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Build a paper")
    _add_request_args(build)
    build.add_argument("--institute", default="", help="Institute name for the header")
    build.add_argument("--address", default=None, help="Institute address")
    build.add_argument("--phone", default=None, help="Institute phone")
    build.add_argument("--email", default=None, help="Institute email")
    build.add_argument("--website", default=None, help="Institute website")
    build.add_argument("--exam-type", default=None, help="Exam label, e.g. 'Monthly Test'")
    build.add_argument("--date", default="", help="Paper date")
    build.add_argument("--time", dest="time_allowed", default=None, help="Override time allowed")
    build.add_argument("--syllabus", default=None, help="Syllabus line")
    build.add_argument("--logo", type=Path, default=None, help="Logo image file")
    build.add_argument("--output", type=Path, default=Path("paper.html"), help="HTML output file")
    build.add_argument("--answer-key", type=Path, default=None, help="Write the answer key PDF here")
    build.add_argument("--metadata", type=Path, default=None, help="Write build metadata JSON here")
    build.add_argument("--bubble-sheet", action="store_true", help="Append an OMR answer sheet")
    build.add_argument("--no-watermark", action="store_true", help="Omit the footer watermark")
    build.add_argument(
        "--require-full",
        action="store_true",
        help="Fail instead of building a short paper when the bank runs out",
    )
    build.add_argument("--key-font", type=Path, default=None, help="TrueType font for the answer key")

    check = sub.add_parser("check", help="Check question availability")
    _add_request_args(check)

    sub.add_parser("patterns", help="List registered paper patterns")
    return parser


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _split(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@contextmanager
def _open_store(args: argparse.Namespace) -> Iterator[QuestionStore]:
    """Yield the requested store; a database connection is closed on exit."""
    if args.bank is not None:
        yield JsonQuestionStore(args.bank)
        return
    if not args.db.exists():
        raise LoaderError(f"Database does not exist: {args.db}")
    with SqliteQuestionStore(args.db) as store:
        yield store


def _paper_config(args: argparse.Namespace) -> PaperConfig:
    """Counts default to filling the resolved pattern."""
    pattern = lookup_pattern(args.class_id, args.subject).pattern
    config = PaperConfig.for_pattern(
        pattern,
        _split(args.chapters),
        subject_id=args.subject,
        difficulty=Difficulty(args.difficulty) if args.difficulty else None,
        exclude_ids=frozenset(_split(args.exclude)),
        seed=args.seed,
        shuffle_mode=ShuffleMode.LEGACY if args.legacy_shuffle else ShuffleMode.UNIFORM,
    )
    config = replace(config, class_id=args.class_id)
    counts = {
        name: value
        for name, value in (
            ("mcq_count", args.mcq),
            ("short_count", args.short),
            ("long_count", args.long),
        )
        if value is not None
    }
    return replace(config, **counts) if counts else config


# ─────────────────────────────────────────────────────────────────────────────
# Commands
# ─────────────────────────────────────────────────────────────────────────────

def cmd_build(args: argparse.Namespace) -> int:
    config = BuilderConfig(
        paper=_paper_config(args),
        render=RenderOptions(
            institute_name=args.institute,
            institute_address=args.address,
            institute_phone=args.phone,
            institute_email=args.email,
            institute_website=args.website,
            exam_type=args.exam_type,
            date=args.date,
            time_allowed=args.time_allowed,
            syllabus=args.syllabus,
            logo_path=args.logo,
            include_bubble_sheet=args.bubble_sheet,
            show_watermark=not args.no_watermark,
            answer_key_font_path=args.key_font,
        ),
        strict_pattern=args.strict_pattern,
        include_answer_key=args.answer_key is not None,
        validate_availability=args.require_full,
    )
    with _open_store(args) as store:
        result = build_paper(store, config)

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(result.html, encoding="utf-8")
    logger.info(f"Wrote paper to {args.output}")

    if args.answer_key is not None and result.answer_key is not None:
        args.answer_key.parent.mkdir(parents=True, exist_ok=True)
        args.answer_key.write_bytes(result.answer_key)
        logger.info(f"Wrote answer key to {args.answer_key}")

    if args.metadata is not None:
        args.metadata.parent.mkdir(parents=True, exist_ok=True)
        with open(args.metadata, "w", encoding="utf-8") as f:
            json.dump(result.metadata, f, indent=2)
        logger.info(f"Wrote build metadata to {args.metadata}")

    for warning in result.warnings:
        print(f"Warning: {warning}")
    print(f"{result.paper.counts.to_dict()} selected, {result.total_marks} marks")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    config = _paper_config(args)
    with _open_store(args) as store:
        report = QuestionSelector(store).validate_availability(config)
    for question_type, available in report.available.to_dict().items():
        print(f"{question_type}: {available} available, {report.required.to_dict()[question_type]} required")
    if report.valid:
        print("OK")
        return 0
    for line in report.describe():
        print(line)
    return 1


def cmd_patterns(args: argparse.Namespace) -> int:
    for key in catalog_keys():
        pattern = PATTERN_CATALOG[key]
        print(f"{key:<24} {pattern.total_marks:>4} marks  {pattern.time_allowed}")
    return 0


COMMANDS = {
    "build": cmd_build,
    "check": cmd_check,
    "patterns": cmd_patterns,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    try:
        return COMMANDS[args.command](args)
    except (BuildError, LoaderError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
