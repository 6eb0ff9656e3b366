"""Core data models for log reduction."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar, Union


class Mode(str, Enum):
    """Selection modes understood by the reducer."""

    DEFAULT_FILTER = "default"
    REUSE_FILTERS = "reuse"
    SCAN = "scan"
    RULE_FILTER = "filter"


@dataclass(frozen=True, slots=True)
class FilterRule:
    """Normalized rule text plus the compiled matcher used on raw lines."""

    text: str
    pattern: re.Pattern[bytes] = field(compare=False, repr=False)

    def matches(self, line: bytes) -> bool:
        return self.pattern.search(line) is not None


@dataclass(frozen=True, slots=True)
class DefaultFilterSession:
    source: Path
    mode: ClassVar[Mode] = Mode.DEFAULT_FILTER


@dataclass(frozen=True, slots=True)
class ScanSession:
    source: Path
    mode: ClassVar[Mode] = Mode.SCAN


@dataclass(frozen=True, slots=True)
class RuleFilterSession:
    source: Path
    rules: tuple[FilterRule, ...]
    mode: ClassVar[Mode] = Mode.RULE_FILTER


@dataclass(frozen=True, slots=True)
class ReuseFiltersSession:
    source: Path
    rules: tuple[FilterRule, ...]
    mode: ClassVar[Mode] = Mode.REUSE_FILTERS


Session = Union[DefaultFilterSession, ScanSession, RuleFilterSession, ReuseFiltersSession]
FilterSession = Union[DefaultFilterSession, RuleFilterSession, ReuseFiltersSession]


@dataclass(frozen=True, slots=True)
class FilterResult:
    """Outcome of a committed filter pass."""

    input_path: Path
    output_path: Path
    initial_size: int
    final_size: int
    filters_used: tuple[str, ...]
    incomplete: bool = False  # reader stopped before the size seen at open

    @property
    def bytes_removed(self) -> int:
        return self.initial_size - self.final_size


@dataclass(frozen=True, slots=True)
class ScanRow:
    count: int
    example: bytes  # first literal line seen with this signature


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of a scan pass (nothing is written)."""

    source: Path
    lines_read: int
    rows: tuple[ScanRow, ...]
    empty_file: bool = False
    incomplete: bool = False
