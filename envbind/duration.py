"""
Parser for human-readable durations such as "300ms", "1.5h" or "2h45m".
"""

import re
from datetime import timedelta

_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_MAX_NANOS = (1 << 63) - 1

# One "<number><unit>" group; the unit runs until the next digit or dot.
_GROUP = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")


def parse_duration_ns(text: str) -> int:
    """
    Parse a duration string into a signed nanosecond count.

    A duration is an optional sign followed by one or more decimal numbers,
    each with an optional fraction and a required unit suffix. "0" on its own
    needs no unit. Raises ValueError for malformed input or results that do not
    fit in 64 bits.
    """
    s = text
    negative = False
    if s[:1] in ("-", "+"):
        negative = s[0] == "-"
        s = s[1:]
    if s == "0":
        return 0
    if not s:
        raise ValueError(f"invalid duration {text!r}")

    total = 0
    pos = 0
    while pos < len(s):
        match = _GROUP.match(s, pos)
        whole, frac, unit = match.group(1), match.group(2), match.group(3)
        if not whole and not frac:
            raise ValueError(f"invalid duration {text!r}")
        if not unit:
            raise ValueError(f"missing unit in duration {text!r}")
        if unit not in _UNITS:
            raise ValueError(f"unknown unit {unit!r} in duration {text!r}")

        scale = _UNITS[unit]
        nanos = int(whole or "0") * scale
        if frac:
            nanos += int(frac) * scale // (10 ** len(frac))
        total += nanos
        if total > _MAX_NANOS + (1 if negative else 0):
            raise ValueError(f"invalid duration {text!r}: out of range")
        pos = match.end()

    return -total if negative else total


def parse_duration(text: str) -> timedelta:
    """Parse a duration string into a timedelta, truncating below one microsecond."""
    nanos = parse_duration_ns(text)
    micros = abs(nanos) // 1_000
    return timedelta(microseconds=-micros if nanos < 0 else micros)
