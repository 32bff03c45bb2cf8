"""
Adjacent-gap tables for explanatory output.

Pure function of the ranked list; independent of k and eps.
"""

from __future__ import annotations

from collections.abc import Sequence

from ranksmarter.models import AdjacentThreshold, Diagnostics, ScoredItem


def build_diagnostics(ranked: Sequence[ScoredItem]) -> Diagnostics:
    """Every adjacent gap and the ε at which that pair could swap."""
    thresholds = tuple(
        AdjacentThreshold(
            upper_rank=i + 1,
            lower_rank=i + 2,
            upper_item=upper.item,
            lower_item=lower.item,
            gap=upper.score - lower.score,
            required_eps=(upper.score - lower.score) / 2,
        )
        for i, (upper, lower) in enumerate(zip(ranked, ranked[1:]))
    )
    return Diagnostics(
        gaps=tuple(t.gap for t in thresholds),
        pairwise_thresholds=thresholds,
    )
