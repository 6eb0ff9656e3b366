"""Default byte-level filter.

Strips NUL and CR bytes and collapses redundant whitespace/newline pairs. The
only state is the last byte emitted, carried across chunk boundaries, so a run
that straddles two chunks collapses exactly as it would inside one chunk.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

DEFAULT_FILTERS_LABEL = "Default filters"

NUL = 0x00
CR = 0x0D
LF = 0x0A

# Same class as `\s` in a bytes regex.
WHITESPACE = frozenset(b" \t\n\r\x0b\x0c")

_DROPPED = bytes((NUL, CR))
_WHITESPACE_RUN = re.compile(rb"(\s)\s+")


def is_redundant_pair(last: int | None, current: int) -> bool:
    """Pairwise check equivalent to matching ``\\s\\s|\\n\\n`` on (last, current).

    The newline alternative is kept even though whitespace already covers it;
    a space followed by a newline therefore collapses like any whitespace run.
    """
    if last is None:
        return False
    if last in WHITESPACE and current in WHITESPACE:
        return True
    return last == LF and current == LF


class DefaultByteFilter:
    def __init__(self) -> None:
        self.last: int | None = None

    def transform(self, chunk: bytes) -> bytes:
        # With NUL and CR gone, every redundant pair sits inside a whitespace run:
        # a run keeps its first byte, or none when it continues the carried one.
        data = chunk.translate(None, _DROPPED)
        if data and is_redundant_pair(self.last, data[0]):
            data = data.lstrip()
        data = _WHITESPACE_RUN.sub(rb"\1", data)
        if data:
            self.last = data[-1]
        return data

    def transform_all(self, chunks: Iterable[bytes]) -> Iterator[bytes]:
        for chunk in chunks:
            out = self.transform(chunk)
            if out:
                yield out
