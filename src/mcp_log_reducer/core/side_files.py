"""Saved-filters file and size-reduction log kept next to the source log."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from .byte_filter import DEFAULT_FILTERS_LABEL
from .errors import EmptyInputError, NotFoundError, OpenError
from .paths import filters_used_path, size_reductions_path

LOGGER = logging.getLogger(__name__)

FILTERS_HEADER = "Filters used:"
_MARKER_LINES = frozenset({FILTERS_HEADER, DEFAULT_FILTERS_LABEL})


def _append(path: Path, text: str, *, what: str) -> bool:
    try:
        with path.open("a", encoding="utf-8") as f:
            f.write(text)
    except OSError as exc:
        LOGGER.warning("could not %s to: %s (%s)", what, path, exc)
        return False
    return True


def record_filters_used(source: Path, filters: Sequence[str]) -> bool:
    """Append a ``Filters used:`` block; failure is only a warning."""
    block = FILTERS_HEADER + "\n" + "\n".join(filters) + "\n\n"
    return _append(filters_used_path(source), block, what="add filters")


def record_size_reduction(source: Path, reduction: int) -> bool:
    """Append ``Filtered out N bytes.``; failure is only a warning."""
    return _append(
        size_reductions_path(source),
        f"Filtered out {reduction} bytes.\n",
        what="log size reduction",
    )


def parse_saved_filters(text: str) -> list[str]:
    """Return saved rule lines, skipping blanks, block markers and repeats."""
    seen: set[str] = set()
    out: list[str] = []
    for line in text.splitlines():
        if not line or line in _MARKER_LINES or line in seen:
            continue
        seen.add(line)
        out.append(line)
    return out


def load_saved_filters(source: Path) -> list[str]:
    path = filters_used_path(source)
    if not path.is_file():
        raise NotFoundError(f"Could not find saved filters: {path}")
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise OpenError(f"Could not read saved filters: {path}") from exc

    rules = parse_saved_filters(text)
    if not rules:
        raise EmptyInputError(f"No saved filters in: {path}")
    return rules
