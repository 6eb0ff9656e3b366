from __future__ import annotations

import random

import pytest

from mcp_log_reducer.core.byte_filter import WHITESPACE, DefaultByteFilter, is_redundant_pair


def _run(data: bytes, chunk_size: int = 4096) -> bytes:
    f = DefaultByteFilter()
    chunks = [data[i : i + chunk_size] for i in range(0, len(data), chunk_size)]
    return b"".join(f.transform_all(chunks))


def test_strips_null_bytes() -> None:
    assert _run(b"foo\n\0bar\n\0\0baz\n") == b"foo\nbar\nbaz\n"


def test_strips_carriage_returns() -> None:
    assert _run(b"a\r\nb\r\n") == b"a\nb\n"


def test_collapses_blank_lines_and_space_runs() -> None:
    assert _run(b"a\n\n\n\nb   c\t\td") == b"a\nb c\td"


def test_dropped_bytes_do_not_reset_state() -> None:
    # NUL between two newlines must not let the second newline through.
    assert _run(b"a\n\0\nb") == b"a\nb"


@pytest.mark.parametrize(
    "pair, redundant",
    [
        ((ord(" "), ord("\t")), True),
        ((ord("\n"), ord("\n")), True),
        # Quirk kept on purpose: whitespace then newline collapses too.
        ((ord(" "), ord("\n")), True),
        ((ord("\n"), ord(" ")), True),
        ((ord("a"), ord(" ")), False),
        ((None, ord(" ")), False),
    ],
)
def test_redundant_pairs(pair, redundant) -> None:
    assert is_redundant_pair(*pair) is redundant


def test_space_before_newline_is_dropped() -> None:
    assert _run(b"end \nnext") == b"end next"


@pytest.mark.parametrize("chunk_size", [1, 2, 3, 7])
def test_chunk_boundaries_do_not_change_output(chunk_size: int) -> None:
    data = b"x  \n\n\0y\r\n \t z\n\n\n"
    assert _run(data, chunk_size) == _run(data)


def test_output_properties_hold_for_random_input() -> None:
    rng = random.Random(1234)
    alphabet = b"ab \t\n\r\0\x0b\x0c"
    data = bytes(rng.choice(alphabet) for _ in range(5000))

    out = _run(data, chunk_size=97)

    assert b"\0" not in out
    assert b"\r" not in out
    for a, b in zip(out, out[1:]):
        assert not (a in WHITESPACE and b in WHITESPACE)
    assert _run(out) == out


def _bytewise(data: bytes) -> bytes:
    out = bytearray()
    last = None
    for b in data:
        if b in (0, 0x0D) or is_redundant_pair(last, b):
            continue
        last = b
        out.append(b)
    return bytes(out)


@pytest.mark.parametrize("chunk_size", [1, 5, 64, 4096])
def test_chunk_transform_matches_pairwise_rule(chunk_size: int) -> None:
    rng = random.Random(chunk_size)
    alphabet = b"ab \t\n\r\0\x0b\x0c"
    data = bytes(rng.choice(alphabet) for _ in range(3000))

    assert _run(data, chunk_size) == _bytewise(data)


def test_clean_chunk_passes_through_unchanged() -> None:
    f = DefaultByteFilter()
    assert f.transform(b"a b\nc") == b"a b\nc"
    assert f.last == ord("c")
    assert f.transform(b" \n d") == b" d"
    assert f.last == ord("d")
