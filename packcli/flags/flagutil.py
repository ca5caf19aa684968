"""Parsing, formatting and help-text helpers shared by the flag values.

Flags follow POSIX conventions: every flag has a long ``--name`` form and may
also have a single-letter ``-n`` shorthand. Single-dash long flags are
accepted as a fallback for compatibility with other tooling.
"""

from __future__ import annotations

import itertools
import os
import re
from datetime import timedelta
from fractions import Fraction

MAX_LINE_LENGTH = 78

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_INT_LITERAL = re.compile(
    r"0[xX][0-9a-fA-F_]+|0[oO][0-7_]+|0[bB][01_]+|[0-9_]+"
)

_NS_PER_UNIT = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_DURATION_PART = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")

_WRAP_PENALTY = 100_000
_WRAP_MAX_COST = (1 << 31) - 1


def parse_bool(text: str) -> bool:
    """Parse the boolean spellings accepted on the command line."""
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise ValueError(f'strconv.ParseBool: parsing "{text}": invalid syntax')


def _parse_literal(body: str, text: str, func: str) -> int:
    if not body or not body.isascii() or not _INT_LITERAL.fullmatch(body):
        raise ValueError(f'strconv.{func}: parsing "{text}": invalid syntax')
    if len(body) > 1 and body[0] == "0" and body[1] not in "xXoObB":
        # A bare leading zero marks an octal literal.
        body = "0o" + body[1:]
    try:
        return int(body, 0)
    except ValueError:
        raise ValueError(f'strconv.{func}: parsing "{text}": invalid syntax') from None


def parse_int(text: str) -> int:
    """Parse a signed 64-bit integer, honouring 0x, 0o, 0b and leading-0 prefixes."""
    negative = text[:1] == "-"
    body = text[1:] if text[:1] in ("+", "-") else text
    magnitude = _parse_literal(body, text, "ParseInt")
    value = -magnitude if negative else magnitude
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f'strconv.ParseInt: parsing "{text}": value out of range')
    return value


def parse_uint(text: str) -> int:
    """Parse an unsigned 64-bit integer, honouring base prefixes."""
    value = _parse_literal(text, text, "ParseUint")
    if value > _UINT64_MAX:
        raise ValueError(f'strconv.ParseUint: parsing "{text}": value out of range')
    return value


def _parse_duration_ns(text: str) -> int:
    invalid = ValueError(f'time: invalid duration "{text}"')
    rest = text
    negative = False
    if rest[:1] in ("+", "-"):
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return 0
    if not rest:
        raise invalid

    total = Fraction(0)
    pos = 0
    while pos < len(rest):
        match = _DURATION_PART.match(rest, pos)
        whole, frac, unit = match.groups()
        if not whole and not frac:
            raise invalid
        if not unit:
            raise ValueError(f'time: missing unit in duration "{text}"')
        scale = _NS_PER_UNIT.get(unit)
        if scale is None:
            raise ValueError(f'time: unknown unit "{unit}" in duration "{text}"')
        amount = Fraction(int(whole or "0"))
        if frac:
            amount += Fraction(int(frac), 10 ** len(frac))
        total += amount * scale
        pos = match.end()

    nanos = int(total)
    if nanos > _INT64_MAX + (1 if negative else 0):
        raise invalid
    return -nanos if negative else nanos


def parse_duration(text: str) -> float:
    """Parse a duration such as ``"1h15m30.5s"`` and return it in seconds."""
    return _parse_duration_ns(text) / 1_000_000_000


def _to_nanoseconds(seconds: float | int | timedelta) -> int:
    if isinstance(seconds, timedelta):
        whole = seconds.days * 86_400 + seconds.seconds
        return whole * 1_000_000_000 + seconds.microseconds * 1_000
    return round(Fraction(seconds) * 1_000_000_000)


def _fraction_text(value: int, precision: int) -> str:
    whole, frac = divmod(value, 10**precision)
    if frac:
        return f"{whole}." + f"{frac:0{precision}d}".rstrip("0")
    return str(whole)


def format_duration(seconds: float | int | timedelta) -> str:
    """Format a duration given in seconds, e.g. ``90`` becomes ``"1m30s"``."""
    nanos = _to_nanoseconds(seconds)
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    magnitude = abs(nanos)

    if magnitude < 1_000_000_000:
        if magnitude < 1_000:
            return f"{sign}{magnitude}ns"
        if magnitude < 1_000_000:
            return f"{sign}{_fraction_text(magnitude, 3)}\u00b5s"
        return f"{sign}{_fraction_text(magnitude, 6)}ms"

    total_seconds, remainder = divmod(magnitude, 1_000_000_000)
    text = _fraction_text((total_seconds % 60) * 1_000_000_000 + remainder, 9) + "s"
    minutes = total_seconds // 60
    if minutes:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours:
            text = f"{hours}h{text}"
    return sign + text


def append_duration_suffix(text: str) -> str:
    """Treat a duration without a trailing unit as a number of seconds."""
    if text.endswith(("s", "m", "h")):
        return text
    return text + "s"


def env_default(key: str, default: str) -> str:
    """Return the environment variable ``key`` if set, else ``default``."""
    return os.environ.get(key, default)


def env_bool_default(key: str, default: bool) -> bool:
    """Return ``key`` parsed as a boolean if set; raise ValueError if malformed."""
    value = os.environ.get(key)
    if value is None:
        return default
    return parse_bool(value)


def env_duration_default(key: str, default: float) -> float:
    """Return ``key`` parsed as a duration in seconds if set; raise ValueError if malformed."""
    value = os.environ.get(key)
    if value is None:
        return default
    return parse_duration(value)


def _wrap_words(words: list[str], limit: int) -> list[list[str]]:
    """Break words into lines, minimising the squared slack at each line end."""
    count = len(words)
    offsets = list(itertools.accumulate((len(word) for word in words), initial=0))

    def span(first: int, last: int) -> int:
        return offsets[last + 1] - offsets[first] + (last - first)

    cost = [_WRAP_MAX_COST] * count
    next_break = [count] * count
    for start in reversed(range(count)):
        if span(start, count - 1) <= limit or start == count - 1:
            cost[start] = 0
            next_break[start] = count
            continue
        for end in range(start + 1, count):
            width = span(start, end - 1)
            candidate = (limit - width) ** 2 + cost[end]
            if width > limit:
                candidate += _WRAP_PENALTY
            if candidate < cost[start]:
                cost[start] = candidate
                next_break[start] = end

    lines = []
    start = 0
    while start < count:
        lines.append(words[start:next_break[start]])
        start = next_break[start]
    return lines


def wrap_at_length_with_padding(text: str, pad: int) -> str:
    """Wrap ``text`` to the maximum line length, indenting every line by ``pad``."""
    words = text.strip().replace("\n", " ").split(" ")
    lines = _wrap_words(words, MAX_LINE_LENGTH - pad)
    indent = " " * pad
    return "\n".join(indent + " ".join(line) for line in lines)