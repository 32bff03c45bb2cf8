"""
Project: RankSmarter
File Created: 2026-10-19 09:35:48
File Name: regions.py
Description:
    Guaranteed-in / guaranteed-out rank regions and the two alternative
    hard cutoffs derived from a tie band.
"""

from __future__ import annotations

import logging

from ranksmarter.models import RankRange, Regions, Suggestions, TieBand

logger = logging.getLogger(__name__)


def derive_regions(n: int, k: int, band: TieBand | None) -> Regions:
    """Partition ranks 1..n around the cutoff.

    With a band [L, U] spanning the boundary:
      - guaranteed in:  1..L-1 (empty when L == 1)
      - tie band:       L..U
      - guaranteed out: U+1..n (empty when U == n)
    Without one, the strict cutoff stands: 1..k in, k+1..n out.
    """
    if band is not None and not band.spans_boundary(k):
        logger.warning(
            "Discarding tie band %d..%d that does not span boundary %d/%d",
            band.lo_rank, band.hi_rank, k, k + 1,
        )
        band = None

    if band is None:
        return Regions(
            guaranteed_in=RankRange(1, k),
            tie_band=None,
            guaranteed_out=RankRange(k + 1, n),
        )

    return Regions(
        guaranteed_in=RankRange(1, max(0, band.lo_rank - 1)),
        tie_band=band,
        guaranteed_out=RankRange(min(n + 1, band.hi_rank + 1), n),
    )


def suggest_cutoffs(k: int, regions: Regions) -> Suggestions:
    """Conservative (guaranteed-in only) and inclusive (plus band) cutoffs."""
    band = regions.tie_band
    if band is None:
        return Suggestions(conservative_cutoff=k, inclusive_cutoff=k)
    return Suggestions(
        conservative_cutoff=band.lo_rank - 1,
        inclusive_cutoff=band.hi_rank,
    )
