"""Defensive decoding of loosely-typed Gamma fields. Nothing here raises."""

from __future__ import annotations

import json
import math
from typing import Any

DEFAULT_PRICE = 0.5


def decode_list(raw: Any, default: list[Any] | None = None) -> list[Any]:
    """Return raw as a list, decoding JSON-encoded strings. Anything else -> default (empty list)."""
    fallback = list(default) if default is not None else []
    if isinstance(raw, list):
        return raw
    if isinstance(raw, tuple):
        return list(raw)
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            return fallback
        return parsed if isinstance(parsed, list) else fallback
    return fallback


def to_float(value: Any) -> float | None:
    """Finite float or None. Bools are not numbers here."""
    if value is None or isinstance(value, bool):
        return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(f):
        return None
    return f


def clamp01(value: float) -> float:
    return min(1.0, max(0.0, value))


def price_at(prices: list[Any], index: int | None, default: float = DEFAULT_PRICE) -> float:
    """Decoded price at index clamped to [0, 1]; default when missing or malformed."""
    if index is None or index < 0 or index >= len(prices):
        return default
    f = to_float(prices[index])
    return default if f is None else clamp01(f)


def has_price_at(prices: list[Any], index: int | None) -> bool:
    return index is not None and 0 <= index < len(prices) and to_float(prices[index]) is not None


def token_at(token_ids: list[Any], index: int | None) -> str | None:
    """Token id at index as a string; None when out of range or blank."""
    if index is None or index < 0 or index >= len(token_ids):
        return None
    tid = token_ids[index]
    if tid is None or isinstance(tid, (dict, list)):
        return None
    tid = str(tid).strip()
    return tid or None


def volume_of(value: Any) -> float:
    f = to_float(value)
    if f is None or f < 0:
        return 0.0
    return f
