"""
Project: RankSmarter
File Created: 2026-10-19 09:26:51
File Name: boundary.py
Description:
    Gap and required accuracy at the rank-k / rank-(k+1) boundary.
    Worst case, a ±ε error moves the inside score down by ε and the
    outside score up by ε, closing the gap by 2ε. The pair keeps its
    order for every such error iff ε < gap / 2.
"""

from __future__ import annotations

from collections.abc import Sequence

from ranksmarter.models import Boundary, ScoredItem


def analyze_boundary(ranked: Sequence[ScoredItem], k: int) -> Boundary:
    """Describe the boundary pair for an already-clamped k (1 <= k <= n-1)."""
    inside = ranked[k - 1]
    outside = ranked[k]
    gap = inside.score - outside.score
    return Boundary(
        inside_item=inside.item,
        outside_item=outside.item,
        inside_score=inside.score,
        outside_score=outside.score,
        gap=gap,
        required_eps=gap / 2,
    )


def is_stable_selection(boundary: Boundary, eps: float) -> bool:
    """True if no perturbation bounded by eps can change the top-k set."""
    return eps < boundary.required_eps
