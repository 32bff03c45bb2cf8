"""
RankSmarter — is a top-k cutoff forced by the scores, or fake precision?

Usage::

    from ranksmarter import analyze, simulate_result, render_markdown

    result = analyze(records, k=5, eps=0.5)
    mc = simulate_result(result, samples=2000, seed=12345)
    print(render_markdown(result, mc))
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ranksmarter")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0"

# Models
from ranksmarter.models import (
    AdjacentThreshold,
    Boundary,
    Diagnostics,
    InclusionEntry,
    MonteCarloResult,
    RankRange,
    Regions,
    ScoredItem,
    StabilityResult,
    Suggestions,
    TieBand,
)

# Errors
from ranksmarter.errors import (
    CsvFormatError,
    InsufficientDataError,
    MissingBaselineError,
    RankSmarterError,
    SimulationCancelled,
)

# Analysis
from ranksmarter.analysis.analyzer import analyze, analyze_ranked
from ranksmarter.analysis.normalize import normalize_records
from ranksmarter.analysis.ranking import rank_items

# Simulation
from ranksmarter.simulation.montecarlo import simulate, simulate_result

# Data loading & reporting
from ranksmarter.config import DEFAULT_SETTINGS, AnalysisSettings
from ranksmarter.data.csv_loader import load_csv, parse_csv
from ranksmarter.report import render_json, render_markdown, verdict

__all__ = [
    # Models
    "AdjacentThreshold",
    "Boundary",
    "Diagnostics",
    "InclusionEntry",
    "MonteCarloResult",
    "RankRange",
    "Regions",
    "ScoredItem",
    "StabilityResult",
    "Suggestions",
    "TieBand",
    # Errors
    "CsvFormatError",
    "InsufficientDataError",
    "MissingBaselineError",
    "RankSmarterError",
    "SimulationCancelled",
    # Analysis
    "analyze",
    "analyze_ranked",
    "normalize_records",
    "rank_items",
    # Simulation
    "simulate",
    "simulate_result",
    # Config / data / report
    "AnalysisSettings",
    "DEFAULT_SETTINGS",
    "load_csv",
    "parse_csv",
    "render_json",
    "render_markdown",
    "verdict",
]
