"""
Project: RankSmarter
File Created: 2026-10-19 09:31:15
File Name: tie_band.py
Description:
    Tie band expansion around the cutoff.
    Two adjacent ranks whose gap is <= 2ε cannot be confidently ordered.
    Starting from the boundary pair, the band grows outward one adjacent
    gap at a time until it meets a gap larger than 2ε on each side.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ranksmarter.models import ScoredItem, TieBand

logger = logging.getLogger(__name__)


def _gap(ranked: Sequence[ScoredItem], upper: int) -> float:
    """Score gap between 0-indexed positions upper and upper+1."""
    return ranked[upper].score - ranked[upper + 1].score


def tie_band_around_cut(
    ranked: Sequence[ScoredItem],
    eps: float,
    k: int,
) -> TieBand | None:
    """Grow the maximal indistinguishable run containing ranks k and k+1.

    Args:
        ranked: Items sorted by score, highest first.
        eps: Clamped error bound (>= 0).
        k: Clamped selection size.

    Returns:
        The tie band, or None when no boundary pair exists or the boundary
        gap already exceeds 2ε.
    """
    n = len(ranked)
    cut = k - 1  # 0-indexed position of rank k
    if cut < 0 or cut >= n - 1:
        return None

    limit = 2 * eps
    if _gap(ranked, cut) > limit:
        return None

    lo, hi = cut, cut + 1
    while lo > 0 and _gap(ranked, lo - 1) <= limit:
        lo -= 1
    while hi < n - 1 and _gap(ranked, hi) <= limit:
        hi += 1

    band = TieBand(lo_rank=lo + 1, hi_rank=hi + 1, items=tuple(ranked[lo : hi + 1]))
    logger.debug("Tie band at k=%d, eps=%g: ranks %d..%d", k, eps, band.lo_rank, band.hi_rank)
    return band
