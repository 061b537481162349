"""Utility helpers shared across the engine."""

from __future__ import annotations

from typing import Iterable, List


def uniq_preserve_order(items: Iterable[str]) -> List[str]:
    """Deduplicate exact values while preserving first-seen order."""
    seen = set()
    out: List[str] = []
    for it in items:
        if not it:
            continue
        if it in seen:
            continue
        seen.add(it)
        out.append(it)
    return out


def clean_str(value: object) -> str:
    """Return a stripped string for str input, "" for anything else.

    JSON ``null`` sometimes arrives as the literal text "null"; treat it as empty.
    """
    if not isinstance(value, str):
        return ""
    value = value.strip()
    if value.lower() == "null":
        return ""
    return value


def as_text(value: object) -> str:
    """Render a scalar JSON value (string or number) as stripped text."""
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return clean_str(value)
