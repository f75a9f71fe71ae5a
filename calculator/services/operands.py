from __future__ import annotations

import math
import re

# Longest decimal prefix, the way lenient numeric parsers read "12abc" as 12.
_NUMERIC_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)


def parse_float(text: str | None) -> float:
    """Parse the leading number of ``text``; ``nan`` when there is none."""

    if text is None:
        return math.nan
    match = _NUMERIC_PREFIX.match(text.lstrip())
    if match is None:
        return math.nan
    token = match.group(0)
    if token.endswith("Infinity"):
        return -math.inf if token.startswith("-") else math.inf
    return float(token)


def parse_operand(text: str | None) -> float | None:
    """Return a finite operand parsed from ``text``, or ``None`` if it is not one."""

    value = parse_float(text)
    if not math.isfinite(value):
        return None
    return value
