#!/usr/bin/env python3
"""
exswallow CLI

Thin wrapper over the orchestrator.

Exit status:
  0  no issues
  1  usage, configuration or path error, or a file could not be analyzed
  2  issues found
  3  internal error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from exswallow.config import ConfigError, apply_overrides, load_config
from exswallow.explanation import format_explanation, format_json, format_text
from exswallow.logging_config import configure_logging
from exswallow.orchestrator import check_paths

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_ISSUES = 2
EXIT_INTERNAL = 3


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="TOML configuration file (default: nearest pyproject.toml with [tool.exswallow])",
    )
    parser.add_argument(
        "--acceptable-call",
        action="append",
        default=[],
        metavar="NAME",
        help="Additional dotted call that counts as handling, e.g. MyApp.Handler.report (repeatable)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show debug logging on stderr",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exswallow",
        description="Find except handlers that silently swallow exceptions.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  exswallow check .
  exswallow check src/ --format json
  exswallow check . --changed-since origin/main
  exswallow explain
        """,
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        metavar="{check,explain}",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Check files or directories",
    )
    check_parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Files or directories to check (default: current directory)",
    )
    _add_config_arguments(check_parser)
    check_parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)",
    )
    skip_group = check_parser.add_mutually_exclusive_group()
    skip_group.add_argument(
        "--skip-test-files",
        dest="skip_test_files",
        action="store_true",
        default=None,
        help="Do not report issues in test files (default)",
    )
    skip_group.add_argument(
        "--no-skip-test-files",
        dest="skip_test_files",
        action="store_false",
        default=None,
        help="Report issues in test files too",
    )
    check_parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help="Exclude files matching this glob (repeatable)",
    )
    check_parser.add_argument(
        "--changed-since",
        metavar="REF",
        help="Only check Python files changed since this Git revision",
    )

    explain_parser = subparsers.add_parser(
        "explain",
        help="Explain the check and list the acceptable calls in effect",
    )
    _add_config_arguments(explain_parser)

    return parser


def _run_check(args: argparse.Namespace) -> int:
    loaded = load_config(args.config, start_dir=args.paths[0])
    loaded = apply_overrides(
        loaded,
        extra_calls=args.acceptable_call,
        skip_test_files=args.skip_test_files,
        exclude=args.exclude,
    )

    report = check_paths(args.paths, loaded, changed_since=args.changed_since)

    if args.format == "json":
        print(format_json(report))
    else:
        print(format_text(report))

    if report.issues:
        return EXIT_ISSUES
    if report.errors:
        return EXIT_ERROR
    return EXIT_OK


def _run_explain(args: argparse.Namespace) -> int:
    loaded = load_config(args.config)
    loaded = apply_overrides(loaded, extra_calls=args.acceptable_call)
    print(format_explanation(list(loaded.rule.acceptable_calls)))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    if args.command == "check":
        for raw in args.paths:
            if not Path(raw).exists():
                print(f"Error: Path does not exist: {raw}", file=sys.stderr)
                return EXIT_ERROR

    try:
        if args.command == "check":
            return _run_check(args)
        if args.command == "explain":
            return _run_explain(args)
    except (ConfigError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except Exception:
        logger.debug("Internal error", exc_info=True)
        print("Internal error while checking files.", file=sys.stderr)
        print("Run with --debug for details.", file=sys.stderr)
        return EXIT_INTERNAL

    # This should never happen because argparse enforces commands
    parser.error(f"Unknown command: {args.command}")
    return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
