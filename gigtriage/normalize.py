"""Tolerant coercion of booleans, amounts and percentages.

Every parser returns a typed value or ``None`` for "not provided"; none of
them raise on malformed input.
"""
from __future__ import annotations

import math
import re
from typing import Any

_TRUE_WORDS = frozenset({"yes", "true", "1", "verified"})

_LEADING_NUMBER_RE = re.compile(r"^-?\d+(?:\.\d+)?|^-?\.\d+")
_SHORTHAND_RE = re.compile(r"^(-?\d+(?:\.\d+)?)([km])$", re.IGNORECASE)
_MULTIPLIERS = {"k": 1_000.0, "m": 1_000_000.0}


def to_bool(value: Any) -> bool:
    """``True``/``"Yes"``/``"true"`` → True; anything else → False."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_WORDS


def _finite(num: float) -> float | None:
    return num if math.isfinite(num) else None


def to_number(value: Any) -> float | None:
    """Parse ``"$1,250.50"``, ``"381K"``, ``"1.2M"`` or a plain number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _finite(float(value))

    s = str(value).strip().replace("$", "").replace(",", "").replace(" ", "").rstrip("+")
    if not s:
        return None

    m = _SHORTHAND_RE.match(s)
    if m:
        return _finite(float(m.group(1)) * _MULTIPLIERS[m.group(2).lower()])

    m = _LEADING_NUMBER_RE.match(s)
    if not m:
        return None
    return _finite(float(m.group(0)))


def to_int(value: Any) -> int | None:
    num = to_number(value)
    return int(num) if num is not None else None


def to_percent(value: Any) -> float | None:
    """Convert ``"55%"``, ``0.55`` or ``55`` to a fraction clamped to [0, 1].

    Blank input stays ``None`` so that "not provided" never reads as 0%.
    """
    if value is None or isinstance(value, bool):
        return None

    s = "" if isinstance(value, (int, float)) else str(value).strip().replace(" ", "")
    if s.endswith("%"):
        num = to_number(s[:-1])
        if num is None:
            return None
        num /= 100
    else:
        num = to_number(value if isinstance(value, (int, float)) else s)
        if num is None:
            return None
        if num > 1:
            num /= 100
    return min(max(num, 0.0), 1.0)
