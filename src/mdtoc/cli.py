"""Command-line interface for mdtoc."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Sequence

from mdtoc.checker import CheckOptions, check_document
from mdtoc.exceptions import MdtocError
from mdtoc.fetch import is_remote_source, load_markdown
from mdtoc.generator import generate_toc, rewrite_toc
from mdtoc.output_formatter import create_sections_tree, format_report
from mdtoc.parser import parse_markdown
from mdtoc.sections import build_section_tree
from mdtoc.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdtoc", description="Validate and generate Markdown tables of contents."
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: MDTOC_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Check that every TOC anchor resolves to one heading")
    check.add_argument("source", help="Markdown file path or http(s) URL")
    _add_level_arguments(check)
    check.add_argument("--require-toc", action="store_true", help="Fail when no TOC is found")
    check.add_argument("--no-cache", action="store_true", help="Refetch remote documents")
    check.add_argument("--json", action="store_true", help="Print the report as JSON")

    toc = subparsers.add_parser("toc", help="Print a generated TOC")
    toc.add_argument("source", help="Markdown file path or http(s) URL")
    _add_level_arguments(toc)
    toc.add_argument("--write", action="store_true", help="Rewrite the TOC section of a local file in place")

    tree = subparsers.add_parser("tree", help="Print the section tree")
    tree.add_argument("source", help="Markdown file path or http(s) URL")
    return parser


def _add_level_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--min-level", type=int, default=2, choices=range(1, 7), metavar="N")
    parser.add_argument("--max-level", type=int, default=3, choices=range(1, 7), metavar="N")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if getattr(args, "min_level", 1) > getattr(args, "max_level", 6):
        parser.error("--min-level must not exceed --max-level")

    try:
        if args.command == "check":
            return _run_check(args)
        if args.command == "toc":
            return _run_toc(args)
        return _run_tree(args)
    except MdtocError as exc:
        logger.error("mdtoc %s failed", args.command, extra={"source": args.source, "error": str(exc)})
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR


def _run_check(args: argparse.Namespace) -> int:
    options = CheckOptions(
        min_level=args.min_level,
        max_level=args.max_level,
        require_toc=args.require_toc,
        use_cache=not args.no_cache,
    )
    result = asyncio.run(check_document(args.source, options))

    if args.json:
        payload = {
            "ok": result.report.ok,
            "results": [r.model_dump(mode="json") for r in result.report.results],
            "unlisted": [h.model_dump(mode="json") for h in result.report.unlisted],
        }
        print(json.dumps(payload, indent=2))
    else:
        print(result.summary)
        report_text = format_report(result.report)
        if report_text:
            print()
            print(report_text)

    return EXIT_OK if result.report.ok else EXIT_INVALID


def _run_toc(args: argparse.Namespace) -> int:
    if args.write and is_remote_source(args.source):
        print("error: --write only works with local files", file=sys.stderr)
        return EXIT_ERROR

    text = asyncio.run(load_markdown(args.source))
    document = parse_markdown(text, source=args.source)
    toc = generate_toc(document, min_level=args.min_level, max_level=args.max_level)

    if args.write:
        Path(args.source).write_text(rewrite_toc(text, document, toc), encoding="utf-8")
        logger.info("Rewrote table of contents", extra={"source": args.source})
    else:
        print(toc)
    return EXIT_OK


def _run_tree(args: argparse.Namespace) -> int:
    text = asyncio.run(load_markdown(args.source))
    document = parse_markdown(text, source=args.source)
    print("Sections:")
    print(create_sections_tree(build_section_tree(document.headings)))
    return EXIT_OK
