"""
Error types raised by RankSmarter.

Out-of-range selection sizes and error bounds are never errors: they are
clamped where they enter the analysis. Only conditions that leave no
defensible answer are raised.
"""

from __future__ import annotations


class RankSmarterError(Exception):
    """Base class for all RankSmarter errors."""


class InsufficientDataError(RankSmarterError, ValueError):
    """Fewer than two valid (item, score) records survived cleaning."""

    def __init__(self, n_valid: int, n_raw: int | None = None) -> None:
        self.n_valid = n_valid
        self.n_raw = n_raw
        msg = "Need at least two valid rows with item and numeric score"
        if n_raw is not None:
            msg += f" (got {n_valid} valid of {n_raw})"
        super().__init__(msg + ".")


class MissingBaselineError(RankSmarterError, ValueError):
    """A simulation was requested without a usable ranked baseline."""


class CsvFormatError(RankSmarterError, ValueError):
    """Tabular text without a usable header or data rows."""


class SimulationCancelled(RankSmarterError):
    """The caller's cancellation flag was set while trials were running."""

    def __init__(self, completed_trials: int, samples: int) -> None:
        self.completed_trials = completed_trials
        self.samples = samples
        super().__init__(
            f"Monte Carlo cancelled after {completed_trials} of {samples} trials"
        )
