"""
Project: RankSmarter
File Created: 2026-10-19 09:18:27
File Name: ranking.py
Description:
    Descending, stable ordering of cleaned items.
    Equal scores keep their input order; this decides which of several
    tied items sits inside the boundary and which sits outside.
"""

from __future__ import annotations

from collections.abc import Iterable

from ranksmarter.models import ScoredItem


def rank_items(items: Iterable[ScoredItem]) -> tuple[ScoredItem, ...]:
    """Return items sorted by score, highest first.

    ``sorted`` is stable and ``reverse=True`` preserves that stability,
    so ties stay in input order and re-ranking a ranked list is a no-op.
    """
    return tuple(sorted(items, key=lambda it: it.score, reverse=True))
