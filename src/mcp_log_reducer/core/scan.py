"""Line-shape frequency scanning.

Lines are grouped by a structural signature (the offsets of their spaces) rather
than by literal content, so ``user 17 logged in`` and ``user 42 logged in``
count as the same shape.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .models import ScanRow

DEFAULT_TOP = 10


def line_signature(line: bytes | str) -> str:
    """Return the space offsets of ``line``, each followed by ``-``."""
    space = b" " if isinstance(line, bytes) else " "
    parts: list[str] = []
    index = line.find(space)
    while index != -1:
        parts.append(f"{index}-")
        index = line.find(space, index + 1)
    return "".join(parts)


@dataclass(slots=True)
class _Bucket:
    first: bytes
    count: int = 1


class ScanAggregator:
    def __init__(self) -> None:
        self._buckets: dict[str, _Bucket] = {}
        self.lines_read = 0

    def add(self, line: bytes) -> None:
        self.lines_read += 1
        sig = line_signature(line)
        bucket = self._buckets.get(sig)
        if bucket is None:
            self._buckets[sig] = _Bucket(first=line)
        else:
            bucket.count += 1

    def add_all(self, lines: Iterable[bytes]) -> None:
        for line in lines:
            self.add(line)

    def __len__(self) -> int:
        return len(self._buckets)

    def top(self, limit: int = DEFAULT_TOP) -> list[ScanRow]:
        """Most frequent shapes first; ties keep first-seen order."""
        ranked = sorted(self._buckets.values(), key=lambda b: b.count, reverse=True)
        return [ScanRow(count=b.count, example=b.first) for b in ranked[:limit]]


def render_summary(rows: Iterable[ScanRow], *, encoding: str = "utf-8") -> str:
    """Render rows as a right-justified count column plus the example line."""
    rows = list(rows)
    if not rows:
        return "No lines found.\n"

    width = len(str(max(row.count for row in rows)))
    out = [f"{'#':>{width}} Example line"]
    for row in rows:
        example = row.example.decode(encoding, errors="replace").rstrip("\r\n")
        out.append(f"{row.count:>{width}} {example}")
    return "\n".join(out) + "\n"
