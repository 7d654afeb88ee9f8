"""Command-line entry point: lesson2html INPUT OUTPUT."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from lesson2html.config import DEFAULT_SITE_TITLE, DEFAULT_WORKERS
from lesson2html.exceptions import Lesson2htmlError
from lesson2html.pipeline import BuildOptions, build_site
from lesson2html.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lesson2html",
        description="Render a directory of markdown lessons into a static HTML reference.",
    )
    parser.add_argument("input", type=Path, help="Directory containing markdown lessons")
    parser.add_argument("output", type=Path, help="Directory receiving the rendered site")
    parser.add_argument("--title", default=DEFAULT_SITE_TITLE, help="Site title")
    parser.add_argument("--no-toc", action="store_true", help="Omit per-page tables of contents")
    parser.add_argument(
        "--no-search-index", action="store_true", help="Do not write search_index.json"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_WORKERS,
        help="Threads used to parse lessons (default: %(default)s)",
    )

    filters = parser.add_mutually_exclusive_group()
    filters.add_argument(
        "--include-section",
        action="append",
        default=[],
        metavar="TITLE",
        help="Only keep sections with this title (repeatable)",
    )
    filters.add_argument(
        "--exclude-section",
        action="append",
        default=[],
        metavar="TITLE",
        help="Drop sections with this title (repeatable)",
    )

    parser.add_argument("--verbose", "-v", action="store_true", help="Enable DEBUG logs")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only log warnings and errors")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.workers < 1:
        parser.error("--workers must be at least 1")

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    configure_logging(level, json_logs=args.log_json)

    options = BuildOptions(
        site_title=args.title,
        include_toc=not args.no_toc,
        write_search_index=not args.no_search_index,
        workers=args.workers,
        section_filter_mode="include" if args.include_section else "exclude",
        sections=args.include_section or args.exclude_section,
    )

    try:
        result = build_site(args.input, args.output, options)
    except Lesson2htmlError as exc:
        logger.error("%s", exc)
        return 1

    print(result.summary)
    print()
    print(result.sections_tree)
    return 0


if __name__ == "__main__":
    sys.exit(main())
