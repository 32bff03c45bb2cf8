"""
Project: RankSmarter
File Created: 2026-10-19 10:05:33
File Name: montecarlo.py
Description:
    Seeded Monte Carlo stress test of a top-k selection.
    Each trial adds an independent uniform error in [-ε, ε] to every
    score, re-ranks, and compares the perturbed top-k with the baseline.

    Random stream:
      - the seed is reduced to an unsigned 32-bit integer
      - trials run in fixed blocks of TRIALS_PER_BLOCK
      - block b draws from PCG64 seeded with
        SeedSequence(entropy=seed32, spawn_key=(b,))
    Output therefore depends only on (ranked, k, eps, samples, seed),
    never on how many workers process the blocks.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Protocol

import numpy as np
from scipy import stats

from ranksmarter.analysis.normalize import clamp_error_bound, clamp_selection_size
from ranksmarter.analysis.ranking import rank_items
from ranksmarter.errors import MissingBaselineError, SimulationCancelled
from ranksmarter.models import InclusionEntry, MonteCarloResult, ScoredItem, StabilityResult

logger = logging.getLogger(__name__)

TRIALS_PER_BLOCK = 256
DEFAULT_TOP_N = 20


class CancelFlag(Protocol):
    """Anything with ``is_set()``, typically a ``threading.Event``."""

    def is_set(self) -> bool: ...


@dataclass
class _BlockTally:
    """Aggregates for one block of trials. Merged by plain addition."""

    trials: int
    same_set: int
    overlap_sum: int
    inclusion: np.ndarray  # per-entry count of top-k appearances


def _block_rng(seed32: int, block: int) -> np.random.Generator:
    return np.random.default_rng(np.random.SeedSequence(entropy=seed32, spawn_key=(block,)))


def _run_block(
    scores: np.ndarray,
    k: int,
    eps: float,
    n_trials: int,
    rng: np.random.Generator,
) -> _BlockTally:
    """Run n_trials perturbation trials at once.

    Rows are trials, columns are baseline ranks. The baseline top-k is
    always columns 0..k-1 because ``scores`` is sorted descending.
    """
    n = scores.shape[0]
    u = rng.random((n_trials, n))
    perturbed = scores[np.newaxis, :] + (2.0 * u - 1.0) * eps

    order = np.argsort(-perturbed, axis=1, kind="stable")
    selected = np.zeros((n_trials, n), dtype=bool)
    np.put_along_axis(selected, order[:, :k], True, axis=1)

    overlap = selected[:, :k].sum(axis=1)
    return _BlockTally(
        trials=n_trials,
        same_set=int(np.count_nonzero(overlap == k)),
        overlap_sum=int(overlap.sum()),
        inclusion=selected.sum(axis=0, dtype=np.int64),
    )


def _block_sizes(samples: int) -> list[int]:
    full, rest = divmod(samples, TRIALS_PER_BLOCK)
    return [TRIALS_PER_BLOCK] * full + ([rest] if rest else [])


def _inclusion_top(
    ranked: Sequence[ScoredItem],
    counts: np.ndarray,
    samples: int,
    top_n: int,
) -> tuple[InclusionEntry, ...]:
    """Highest inclusion probabilities; ties go to the better baseline rank."""
    entries = [
        InclusionEntry(item=it.item, rank=i + 1, probability=int(c) / samples)
        for i, (it, c) in enumerate(zip(ranked, counts))
    ]
    entries.sort(key=lambda e: (-e.probability, e.rank))
    return tuple(entries[: max(0, top_n)])


def _wilson_ci(successes: int, trials: int) -> tuple[float, float]:
    ci = stats.binomtest(successes, trials).proportion_ci(
        confidence_level=0.95, method="wilson"
    )
    return float(ci.low), float(ci.high)


def simulate(
    ranked: Sequence[ScoredItem] | None,
    k,
    eps,
    samples: int,
    seed: int,
    *,
    workers: int = 1,
    cancel: CancelFlag | None = None,
    top_n: int = DEFAULT_TOP_N,
) -> MonteCarloResult:
    """Estimate how often the top-k set survives random ±ε errors.

    Args:
        ranked: Baseline items (re-ranked stably, so a ranked list is
            used as-is).
        k: Selection size; clamped like the deterministic analysis.
        eps: Error bound; clamped to >= 0.
        samples: Number of trials (>= 1).
        seed: Integer seed; reduced to 32 bits.
        workers: Threads used to run trial blocks. Never affects output.
        cancel: Optional flag checked before every block.
        top_n: Number of inclusion probabilities to report.

    Raises:
        MissingBaselineError: If there is no baseline of at least two
            items or samples < 1.
        SimulationCancelled: If ``cancel`` is set before all blocks ran.
    """
    if ranked is None or len(ranked) < 2:
        raise MissingBaselineError("Monte Carlo needs a ranked baseline of at least two items")
    samples = int(samples)
    if samples < 1:
        raise MissingBaselineError(f"Monte Carlo needs at least one trial, got {samples}")

    baseline = rank_items(ranked)
    n = len(baseline)
    k = clamp_selection_size(k, n)
    eps = clamp_error_bound(eps)
    seed32 = int(seed) & 0xFFFFFFFF
    scores = np.array([it.score for it in baseline], dtype=np.float64)
    sizes = _block_sizes(samples)

    logger.info(
        "Monte Carlo: n=%d k=%d eps=%g samples=%d seed=%d blocks=%d workers=%d",
        n, k, eps, samples, seed32, len(sizes), workers,
    )

    def run(block: int) -> _BlockTally:
        if cancel is not None and cancel.is_set():
            raise SimulationCancelled(block * TRIALS_PER_BLOCK, samples)
        return _run_block(scores, k, eps, sizes[block], _block_rng(seed32, block))

    if workers > 1 and len(sizes) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            tallies = list(executor.map(run, range(len(sizes))))
    else:
        tallies = [run(b) for b in range(len(sizes))]

    same_set = sum(t.same_set for t in tallies)
    overlap_sum = sum(t.overlap_sum for t in tallies)
    inclusion = np.sum([t.inclusion for t in tallies], axis=0)

    result = MonteCarloResult(
        samples=samples,
        seed=seed32,
        eps=eps,
        k=k,
        same_set_prob=same_set / samples,
        avg_overlap_frac=(overlap_sum / samples) / k,
        inclusion_top=_inclusion_top(baseline, inclusion, samples, top_n),
        same_set_ci=_wilson_ci(same_set, samples),
    )
    logger.info(
        "Monte Carlo done: same set %.4f, mean overlap %.4f",
        result.same_set_prob, result.avg_overlap_frac,
    )
    return result


def simulate_result(
    result: StabilityResult | None,
    samples: int,
    seed: int,
    **kwargs,
) -> MonteCarloResult:
    """Stress-test a finished analysis with its own clamped k and eps."""
    if result is None:
        raise MissingBaselineError("Run the analysis before the Monte Carlo stress test")
    return simulate(result.ranked, result.k, result.eps, samples, seed, **kwargs)
