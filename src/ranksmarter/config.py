"""
Project: RankSmarter
File Created: 2026-10-19 09:40:02
File Name: config.py
Description:
    Default settings for analysis runs and the command line.
    The sample/seed bounds only apply to user-facing entry points;
    the simulator itself accepts any positive sample count.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisSettings:
    """Adjustable defaults for a RankSmarter run."""

    k: int = 5
    eps: float = 0.0
    samples: int = 2000
    seed: int = 12345
    workers: int = 1
    preview_rows: int = 20
    inclusion_top_n: int = 20

    min_samples: int = 200
    max_samples: int = 20000
    max_seed: int = 999_999_999

    def default_k(self, n: int) -> int:
        """Default cutoff for a list of n items (never above n-1)."""
        return min(self.k, max(1, n - 1))

    def bounded_samples(self, samples: int | None) -> int:
        if samples is None:
            samples = self.samples
        return max(self.min_samples, min(self.max_samples, int(samples)))

    def bounded_seed(self, seed: int | None) -> int:
        if seed is None:
            seed = self.seed
        return max(0, min(self.max_seed, int(seed)))


# Default settings, used when no overrides are supplied.
DEFAULT_SETTINGS = AnalysisSettings()
