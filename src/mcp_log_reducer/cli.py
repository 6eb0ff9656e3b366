"""Command line entrypoint.

Usage:
    log-reducer PATTERN FILE   drop every line matching PATTERN
    log-reducer -d FILE        strip NUL/CR bytes and collapse blank runs
    log-reducer -r FILE        reuse every previously saved filter
    log-reducer -s FILE        scan for common line shapes without filtering

A PATTERN that starts with "-" is taken as a pattern unless it is one of the
mode flags; `log-reducer -- -d FILE` filters on the literal text "-d".
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence

from mcp_log_reducer.core.errors import ReducerError
from mcp_log_reducer.core.models import FilterResult, Mode
from mcp_log_reducer.core.pipeline import run
from mcp_log_reducer.core.progress import TerminalProgress
from mcp_log_reducer.core.report import filter_summary, scan_summary
from mcp_log_reducer.core.session import build_session

_OPTION_ARGS = frozenset({"-d", "-r", "-s", "-h", "--help", "--"})


def _configure_logging() -> None:
    level_name = os.getenv("LOG_REDUCER_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="log-reducer",
        description="Produce a filtered copy of a log file (filtered-<name>).",
        epilog="Use -- before a PATTERN that collides with a flag, e.g. log-reducer -- -d app.log",
    )
    modes = p.add_mutually_exclusive_group()
    modes.add_argument("-d", dest="default_file", metavar="FILE", help="Run the default filter for null characters and empty lines")
    modes.add_argument("-r", dest="reuse_file", metavar="FILE", help="Reuse all previously saved filters")
    modes.add_argument("-s", dest="scan_file", metavar="FILE", help="Scan for common lines without filtering")
    p.add_argument("pattern", nargs="?", help="Regex rule; bare text is wrapped in /.../, $ip$ matches an IPv4 address")
    p.add_argument("log_file", nargs="?", help="Log file to filter")
    return p


def _resolve_mode(p: argparse.ArgumentParser, args: argparse.Namespace) -> tuple[Mode, str, list[str]]:
    flagged = (
        (Mode.DEFAULT_FILTER, args.default_file),
        (Mode.REUSE_FILTERS, args.reuse_file),
        (Mode.SCAN, args.scan_file),
    )
    for mode, path in flagged:
        if path is not None:
            if args.pattern is not None:
                p.error("unexpected extra arguments")
            return mode, path, []

    if args.pattern is None or args.log_file is None:
        p.error("expected PATTERN FILE, or one of -d/-r/-s FILE")
    return Mode.RULE_FILTER, args.log_file, [args.pattern]


def _pattern_first(argv: Sequence[str]) -> list[str]:
    """Keep a leading dash pattern such as `-v` from being read as an option."""
    args = list(argv)
    if args and args[0].startswith("-") and args[0] not in _OPTION_ARGS:
        return ["--", *args]
    return args


def main(argv: Sequence[str] | None = None) -> None:
    _configure_logging()
    p = _build_parser()
    args = p.parse_args(_pattern_first(sys.argv[1:] if argv is None else argv))
    mode, log_file, patterns = _resolve_mode(p, args)

    try:
        session = build_session(mode, log_file, patterns)
        result = run(session, progress=TerminalProgress(sys.stderr))
    except (ReducerError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)

    if isinstance(result, FilterResult):
        print(filter_summary(result))
    else:
        print(scan_summary(result), end="")


if __name__ == "__main__":
    main()
