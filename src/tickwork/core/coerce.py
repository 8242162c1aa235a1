"""
Tolerant coercion helpers for settings read from action documents.
"""

from __future__ import annotations


def to_int(value, default: int = 0) -> int:
    try:
        return int(float(value))
    except Exception:
        return default


def to_millis(value, default: int = 0) -> int:
    """Non-negative millisecond duration; missing or bad values give `default`."""
    if value is None:
        return default
    return max(0, to_int(value, default))


def to_count(value, default: int = 0) -> int:
    if value is None:
        return default
    return max(0, to_int(value, default))


def to_name(value, fallback: str = "") -> str:
    if value is None:
        return fallback
    try:
        text = str(value).strip()
        return text or fallback
    except Exception:
        return fallback


def to_bool(value, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    return default
