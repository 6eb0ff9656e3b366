"""Line-level rejection by compiled filter rules."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Protocol

from .models import FilterRule


class LinePredicate(Protocol):
    """Decides whether a raw line survives filtering."""

    def keep(self, line: bytes) -> bool:
        ...


@dataclass(frozen=True, slots=True)
class KeepAll:
    def keep(self, line: bytes) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class SingleRule:
    rule: FilterRule

    def keep(self, line: bytes) -> bool:
        return not self.rule.matches(line.rstrip())


@dataclass(frozen=True, slots=True)
class MultiRule:
    rules: tuple[FilterRule, ...]

    def keep(self, line: bytes) -> bool:
        trimmed = line.rstrip()
        return not any(rule.matches(trimmed) for rule in self.rules)


def build_predicate(rules: Sequence[FilterRule]) -> LinePredicate:
    """Pick the predicate shape once, before the hot loop."""
    if not rules:
        return KeepAll()
    if len(rules) == 1:
        return SingleRule(rules[0])
    return MultiRule(tuple(rules))


def join_pieces(pieces: Iterable[bytes]) -> Iterator[bytes]:
    """Rejoin capped reads into whole lines; the last line may lack a terminator."""
    parts: list[bytes] = []
    for piece in pieces:
        if piece.endswith(b"\n"):
            if parts:
                parts.append(piece)
                piece = b"".join(parts)
                parts.clear()
            yield piece
        else:
            parts.append(piece)
    if parts:
        yield b"".join(parts)


def filter_lines(lines: Iterable[bytes], predicate: LinePredicate) -> Iterator[bytes]:
    """Yield kept lines verbatim, terminators included.

    ``lines`` may hold pieces of a line longer than the read cap; each line is
    judged once, whole, and written whole or not at all.
    """
    for line in join_pieces(lines):
        if predicate.keep(line):
            yield line
