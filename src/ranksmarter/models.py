"""
Project: RankSmarter
File Created: 2026-10-19 09:12:40
File Name: models.py
Description:
    Core data models for RankSmarter cutoff analysis.
    Ranks are always 1-indexed: rank 1 is the highest score.
    Every structure is a frozen value computed fresh from a
    (records, k, eps) triple; nothing here holds state between calls.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoredItem:
    """A cleaned (item, score) pair.

    Identity is the item text. Duplicate names are allowed and are
    treated as distinct entries.
    """

    item: str
    score: float


@dataclass(frozen=True)
class Boundary:
    """The adjacent pair at ranks k and k+1, the selection boundary."""

    inside_item: str
    outside_item: str
    inside_score: float
    outside_score: float
    gap: float  # inside_score - outside_score, never negative
    required_eps: float  # gap / 2


@dataclass(frozen=True)
class TieBand:
    """A contiguous run of ranks that cannot be confidently ordered.

    Every *adjacent* pair inside the band has a gap of at most 2ε.
    That does not mean every pair in the band is within 2ε.
    """

    lo_rank: int
    hi_rank: int
    items: tuple[ScoredItem, ...] = ()

    @property
    def size(self) -> int:
        return self.hi_rank - self.lo_rank + 1

    def spans_boundary(self, k: int) -> bool:
        """True if both boundary ranks k and k+1 sit inside the band."""
        return self.lo_rank <= k and self.hi_rank >= k + 1

    def contains(self, other: TieBand) -> bool:
        return self.lo_rank <= other.lo_rank and self.hi_rank >= other.hi_rank


@dataclass(frozen=True)
class RankRange:
    """Inclusive rank interval. Empty when to_rank < from_rank."""

    from_rank: int
    to_rank: int

    @property
    def is_empty(self) -> bool:
        return self.to_rank < self.from_rank

    def __len__(self) -> int:
        return max(0, self.to_rank - self.from_rank + 1)

    def __contains__(self, rank: object) -> bool:
        return isinstance(rank, int) and self.from_rank <= rank <= self.to_rank


@dataclass(frozen=True)
class Regions:
    """Guaranteed-in / tie band / guaranteed-out partition of the ranks."""

    guaranteed_in: RankRange
    tie_band: TieBand | None
    guaranteed_out: RankRange


@dataclass(frozen=True)
class Suggestions:
    """Defensible single hard cutoffs when the user insists on one number.

    conservative_cutoff keeps only guaranteed-in ranks (may be 0).
    inclusive_cutoff keeps guaranteed-in plus the whole tie band.
    """

    conservative_cutoff: int
    inclusive_cutoff: int


@dataclass(frozen=True)
class AdjacentThreshold:
    """Gap between two adjacent ranks and the ε that would let them swap."""

    upper_rank: int
    lower_rank: int
    upper_item: str
    lower_item: str
    gap: float
    required_eps: float


@dataclass(frozen=True)
class Diagnostics:
    """Explanatory tables. Only read by reporting, never by the core."""

    gaps: tuple[float, ...]
    pairwise_thresholds: tuple[AdjacentThreshold, ...]


@dataclass(frozen=True)
class StabilityResult:
    """Complete cutoff analysis for one (records, k, eps) request.

    ``k`` and ``eps`` are the clamped values actually used;
    ``requested_k`` and ``requested_eps`` echo what the caller asked for.
    """

    n: int
    k: int
    eps: float
    requested_k: object
    requested_eps: object
    ranked: tuple[ScoredItem, ...]
    boundary: Boundary
    stable_selected_set: bool
    regions: Regions
    suggestions: Suggestions
    diagnostics: Diagnostics

    @property
    def selected(self) -> tuple[ScoredItem, ...]:
        """The top-k entries under the strict cutoff."""
        return self.ranked[: self.k]

    @property
    def tie_band(self) -> TieBand | None:
        return self.regions.tie_band

    @property
    def k_was_clamped(self) -> bool:
        return self.requested_k != self.k

    @property
    def eps_was_clamped(self) -> bool:
        return self.requested_eps != self.eps


@dataclass(frozen=True)
class InclusionEntry:
    """How often one ranked entry landed in the perturbed top-k."""

    item: str
    rank: int  # baseline rank, 1-indexed
    probability: float


@dataclass(frozen=True)
class MonteCarloResult:
    """Empirical selection stability under random ±ε perturbation."""

    samples: int
    seed: int
    eps: float
    k: int
    same_set_prob: float
    avg_overlap_frac: float
    inclusion_top: tuple[InclusionEntry, ...]
    same_set_ci: tuple[float, float] = (0.0, 1.0)  # 95% Wilson interval

    @property
    def inclusion_probability(self) -> dict[str, float]:
        """item -> probability for the reported entries.

        With duplicate item names the first (higher-ranked) entry wins;
        use ``inclusion_top`` to see every entry.
        """
        probs: dict[str, float] = {}
        for entry in self.inclusion_top:
            probs.setdefault(entry.item, entry.probability)
        return probs
