"""Session construction.

All validation happens here, before the source log is opened: the path must
exist and every rule must compile.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .models import (
    DefaultFilterSession,
    Mode,
    ReuseFiltersSession,
    RuleFilterSession,
    ScanSession,
    Session,
)
from .paths import canonical_path
from .rules import build_rules
from .side_files import load_saved_filters


def build_session(
    mode: Mode | str,
    log_path: str | Path,
    patterns: Sequence[str] = (),
) -> Session:
    """Create the immutable session for one run."""
    mode = Mode(mode)
    source = canonical_path(log_path)

    if mode == Mode.RULE_FILTER:
        return RuleFilterSession(source=source, rules=build_rules(patterns))
    if mode == Mode.REUSE_FILTERS:
        return ReuseFiltersSession(source=source, rules=build_rules(load_saved_filters(source)))
    if mode == Mode.SCAN:
        return ScanSession(source=source)
    return DefaultFilterSession(source=source)
