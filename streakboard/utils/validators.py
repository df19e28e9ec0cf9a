"""
Forgiving coercion helpers for upstream payloads

The tracks API omits fields, sends nulls and occasionally numeric strings.
These helpers map any such value onto a field default instead of failing.
"""

import math
from typing import Any, Optional


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def coerce_score(value: Any, default: float = 0.0) -> float:
    """Non-negative score, ``default`` for anything else"""
    number = _as_float(value)
    if number is None or number < 0:
        return default
    return number


def coerce_count(value: Any, default: int = 0) -> int:
    """Non-negative integer (streaks, ranks, counts)"""
    number = _as_float(value)
    if number is None or number < 0:
        return default
    return int(number)


def coerce_multiplier(value: Any, default: float = 1.0) -> float:
    """Streak multiplier, never below 1.0"""
    number = _as_float(value)
    if number is None or number < 1.0:
        return default
    return number


def coerce_optional_count(value: Any) -> Optional[int]:
    number = _as_float(value)
    if number is None or number < 0:
        return None
    return int(number)


def coerce_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def coerce_identifier(value: Any) -> str:
    """Opaque id as a non-empty string; raises ValueError when absent"""
    if isinstance(value, bool) or value is None:
        raise ValueError("identifier is required")
    if isinstance(value, (int, str)):
        text = str(value).strip()
        if text:
            return text
    raise ValueError("identifier must be a non-empty string or integer")
