"""Deterministic ordering for differ output."""

from __future__ import annotations

from typing import Any, Iterable


def deterministic_order(items: Iterable[Any]) -> list[Any]:
    """Sort ``items`` naturally, or by ``(type name, str)`` for mixed types."""
    materialized = list(items)
    try:
        return sorted(materialized)
    except TypeError:
        return sorted(materialized, key=lambda item: (type(item).__name__, str(item)))
