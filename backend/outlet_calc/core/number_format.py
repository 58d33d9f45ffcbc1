"""Numeric Formatter — display and free-text input formatting for KRW amounts.

Invariants:
    - Unknown values (None, NaN, infinities, non-numbers) render as UNKNOWN ("-")
    - Integers of any magnitude format exactly, never through float
    - Display rounds to the nearest integer, halves toward +infinity
    - parse_input_text returns None for empty input, never 0

Design Decisions:
    - Comma grouping every three digits: identical to ko-KR locale output, no
      locale database needed
"""

import math
import re
from numbers import Integral, Real

UNKNOWN = "-"
CURRENCY_SUFFIX = "원"

_NON_DIGITS = re.compile(r"[^0-9]")


def _is_known(n: object) -> bool:
    if isinstance(n, bool) or not isinstance(n, Real):
        return False
    # ints of any size are exact; only floats can be NaN or infinite
    return isinstance(n, Integral) or math.isfinite(n)


def _round_half_up(n: Real) -> int:
    if isinstance(n, Integral):
        return int(n)
    return math.floor(n + 0.5)


def format_for_display(n: object) -> str:
    """Group thousands of a rounded number; UNKNOWN for anything non-numeric."""
    if not _is_known(n):
        return UNKNOWN
    return f"{_round_half_up(n):,}"


def format_krw(n: object) -> str:
    """Currency display: grouped integer with the won suffix."""
    text = format_for_display(n)
    return text if text == UNKNOWN else text + CURRENCY_SUFFIX


def format_percent(p: object) -> str:
    """One decimal place plus '%' (matches the margin badge)."""
    if not _is_known(p):
        return UNKNOWN
    if isinstance(p, Integral):
        return f"{int(p)}.0%"
    return f"{p:.1f}%"


def _digits(raw: str | None) -> str:
    return _NON_DIGITS.sub("", raw or "")


def format_input_text(raw: str | None) -> str:
    """Keep a free-text field grouped while the user types."""
    digits = _digits(raw)
    if not digits:
        return ""
    return f"{int(digits):,}"


def parse_input_text(raw: str | None) -> int | None:
    """Digits-only parse. Empty means 'not entered', not zero."""
    digits = _digits(raw)
    return int(digits) if digits else None
