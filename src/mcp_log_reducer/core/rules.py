"""Filter rule normalization and compilation.

Rules are written the way operators write them in PHP/sed style tooling:
``/pattern/flags``. Bare text is wrapped in ``/`` delimiters and the
``$ip$`` token expands to an IPv4-shaped pattern. The delimited source is then
translated into a Python bytes regex so it can run against raw log lines.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from .errors import ConfigurationError
from .models import FilterRule

IP_TOKEN = "$ip$"
IP_PATTERN = r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}"

_BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}", "<": ">"}

_MODIFIER_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,  # bytes patterns have no unicode mode
}

# <delim>body<delim>[modifiers]; the delimiter is not a word, space or backslash char.
# Paths such as "/api/mix" fit this shape too and are read as "api" with flags m, i, x.
_DELIMITED_RE = re.compile(r"^(?P<d>[^\w\s\\])(?P<body>.*)(?P=d)(?P<mods>[imsxu]*)$", re.DOTALL)
_BRACKETED_RE = re.compile(
    r"^(?:\((?P<p>.*)\)|\[(?P<b>.*)\]|\{(?P<c>.*)\}|<(?P<a>.*)>)(?P<mods>[imsxu]*)$",
    re.DOTALL,
)


def _is_delimited(text: str) -> bool:
    return bool(_DELIMITED_RE.match(text) or _BRACKETED_RE.match(text))


def _should_wrap(text: str) -> bool:
    if len(text) <= 1:
        return False
    # The `$` of a leading/trailing ip token belongs to the token.
    if text.startswith(IP_TOKEN) or text.endswith(IP_TOKEN):
        return True
    if _is_delimited(text):
        return False
    return text[0] != text[-1]


def format_filter(text: str) -> str:
    """Normalize raw rule text into a delimited rule source."""
    delimited = f"/{text}/" if _should_wrap(text) else text
    return delimited.replace(IP_TOKEN, IP_PATTERN)


def _split_delimited(source: str) -> tuple[str, str]:
    """Return (body, modifiers) of a delimited rule source."""
    if not source:
        raise ConfigurationError("Empty regex")

    opener = source[0]
    if opener.isalnum() or opener == "\\" or opener.isspace():
        raise ConfigurationError(
            f'Invalid regex: "{source}" (delimiter must not be alphanumeric, backslash or whitespace)'
        )

    closer = _BRACKET_PAIRS.get(opener, opener)
    end = source.rfind(closer)
    if end < 1:
        raise ConfigurationError(f'Invalid regex: "{source}" (no ending delimiter {closer!r})')
    return source[1:end], source[end + 1 :]


def compile_rule(source: str) -> FilterRule:
    """Compile an already normalized rule source."""
    body, modifiers = _split_delimited(source)

    flags = 0
    for mod in modifiers:
        if mod not in _MODIFIER_FLAGS:
            raise ConfigurationError(f'Invalid regex: "{source}" (unknown modifier {mod!r})')
        flags |= _MODIFIER_FLAGS[mod]

    try:
        pattern = re.compile(body.encode("utf-8"), flags)
    except re.error as exc:
        raise ConfigurationError(f'Invalid regex: "{source}" ({exc})') from exc
    return FilterRule(text=source, pattern=pattern)


def build_rules(raw_rules: Iterable[str]) -> tuple[FilterRule, ...]:
    """Normalize and compile every rule, failing on the first bad one."""
    return tuple(compile_rule(format_filter(raw)) for raw in raw_rules)
