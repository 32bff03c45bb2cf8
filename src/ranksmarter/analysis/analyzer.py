"""
Project: RankSmarter
File Created: 2026-10-19 09:44:10
File Name: analyzer.py
Description:
    Main analysis entry point.
    Takes raw (item, score) records, a requested selection size and an
    error bound, and returns the full cutoff stability analysis.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ranksmarter.analysis.boundary import analyze_boundary, is_stable_selection
from ranksmarter.analysis.diagnostics import build_diagnostics
from ranksmarter.analysis.normalize import (
    clamp_error_bound,
    clamp_selection_size,
    normalize_records,
)
from ranksmarter.analysis.ranking import rank_items
from ranksmarter.analysis.regions import derive_regions, suggest_cutoffs
from ranksmarter.analysis.tie_band import tie_band_around_cut
from ranksmarter.models import ScoredItem, StabilityResult

logger = logging.getLogger(__name__)


def analyze(records: Iterable, k, eps) -> StabilityResult:
    """Decide whether the top-k cutoff is forced by the scores.

    Args:
        records: Raw records (mappings, ScoredItem-like objects or pairs).
        k: Requested selection size; floored and clamped to [1, n-1].
        eps: Assumed maximum absolute scoring error; clamped to >= 0.

    Returns:
        StabilityResult with the boundary, tie band, regions, suggested
        cutoffs and adjacent-gap diagnostics.

    Raises:
        InsufficientDataError: If fewer than two records are valid.
    """
    return analyze_ranked(rank_items(normalize_records(records)), k, eps)


def analyze_ranked(ranked: tuple[ScoredItem, ...], k, eps) -> StabilityResult:
    """Run the analysis on an already cleaned and ranked list."""
    n = len(ranked)
    k_used = clamp_selection_size(k, n)
    eps_used = clamp_error_bound(eps)

    boundary = analyze_boundary(ranked, k_used)
    band = tie_band_around_cut(ranked, eps_used, k_used)
    regions = derive_regions(n, k_used, band)
    suggestions = suggest_cutoffs(k_used, regions)

    result = StabilityResult(
        n=n,
        k=k_used,
        eps=eps_used,
        requested_k=k,
        requested_eps=eps,
        ranked=ranked,
        boundary=boundary,
        stable_selected_set=is_stable_selection(boundary, eps_used),
        regions=regions,
        suggestions=suggestions,
        diagnostics=build_diagnostics(ranked),
    )
    _check_consistency(result)

    logger.debug(
        "n=%d k=%d eps=%g gap=%g stable=%s band=%s",
        n, k_used, eps_used, boundary.gap, result.stable_selected_set,
        None if band is None else (band.lo_rank, band.hi_rank),
    )
    return result


def _check_consistency(result: StabilityResult) -> None:
    """Fail loudly on states the algorithm can never legitimately produce."""
    k = result.k
    band = result.regions.tie_band
    assert 1 <= k <= result.n - 1, f"k={k} outside 1..{result.n - 1}"
    assert result.boundary.gap >= 0, "ranked list is not sorted descending"
    if band is not None:
        assert band.lo_rank <= k <= band.hi_rank - 1, (
            f"tie band {band.lo_rank}..{band.hi_rank} does not contain boundary {k}/{k + 1}"
        )
        assert not result.stable_selected_set, "stable selection inside a tie band"
    assert result.suggestions.conservative_cutoff <= k <= result.suggestions.inclusive_cutoff
