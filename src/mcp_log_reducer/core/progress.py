"""Live progress percentage written over a single terminal line."""

from __future__ import annotations

import math
from typing import Protocol, TextIO


class ProgressSink(Protocol):
    def update(self, consumed: int, total: int) -> None: ...

    def finish(self) -> None: ...


def percent(consumed: int, total: int) -> int:
    """Return consumed/total as a percentage rounded half up."""
    if total <= 0:
        return 100
    return math.floor(100 * consumed / total + 0.5)


class TerminalProgress:
    """Writes ``NN%\\r`` so each update overwrites the previous one."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._last: int | None = None

    def update(self, consumed: int, total: int) -> None:
        pct = percent(consumed, total)
        if pct == self._last:
            return
        self._last = pct
        self._stream.write(f"{pct}%\r")
        self._stream.flush()

    def finish(self) -> None:
        if self._last is not None:
            self._stream.write("\n")
            self._stream.flush()


class NullProgress:
    """Progress sink for callers that must keep their streams clean (MCP stdio)."""

    def update(self, consumed: int, total: int) -> None:
        return None

    def finish(self) -> None:
        return None
