"""
RankSmarter — command-line entry point.

Checks whether a top-k cutoff over a CSV of scored items is forced by the
data or could flip under the stated scoring error, and optionally
stress-tests the selection with a seeded Monte Carlo run.

Usage:
    ranksmarter scores.csv -k 5 --eps 0.5
    ranksmarter scores.csv -k 5 --eps 0.5 --monte-carlo --samples 5000
    ranksmarter --demo -k 3 --eps 0.4 --markdown report.md --json result.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tabulate import tabulate

from ranksmarter.analysis.analyzer import analyze
from ranksmarter.config import DEFAULT_SETTINGS, AnalysisSettings
from ranksmarter.data.csv_loader import load_csv, load_example
from ranksmarter.errors import RankSmarterError
from ranksmarter.models import MonteCarloResult, StabilityResult
from ranksmarter.report import (
    format_number,
    format_percent,
    inclusion_rows,
    preview_rows,
    render_json,
    render_markdown,
    tie_band_note,
    verdict,
)
from ranksmarter.simulation.montecarlo import simulate_result

logger = logging.getLogger("ranksmarter")


# ── Pretty-printing helpers ──────────────────────────────────────────────────


def _header(title: str) -> str:
    width = 60
    return f"\n{'═' * width}\n  {title}\n{'═' * width}"


def _kv(key: str, value, indent: int = 4) -> str:
    pad = " " * indent
    return f"{pad}{key}: {value}"


# ── Report sections ──────────────────────────────────────────────────────────


def print_verdict(result: StabilityResult) -> None:
    v = verdict(result)
    print(_header(v.label.upper()))
    print(_kv("Verdict", v.headline))
    print(_kv("Action", v.action))
    print(_kv("Why", v.why))
    if result.k_was_clamped:
        print(_kv("Note", f"cutoff {result.requested_k!r} clamped to {result.k} (valid 1..{result.n - 1})"))


def print_boundary(result: StabilityResult) -> None:
    b = result.boundary
    print(_header("BOUNDARY"))
    rows = [
        [f"Inside (rank {result.k})", f"{b.inside_item} = {b.inside_score}"],
        [f"Outside (rank {result.k + 1})", f"{b.outside_item} = {b.outside_score}"],
        ["Gap", format_number(b.gap)],
        ["Forced accuracy required", f"±{format_number(b.required_eps)}"],
    ]
    print(tabulate(rows, headers=["Field", "Value"], tablefmt="simple"))
    print()
    print(f"  {tie_band_note(result)}")

    s = result.suggestions
    r = result.regions
    print(_kv("Guaranteed in", "none" if r.guaranteed_in.is_empty else
              f"ranks {r.guaranteed_in.from_rank}..{r.guaranteed_in.to_rank}"))
    print(_kv("Guaranteed out", "none" if r.guaranteed_out.is_empty else
              f"ranks {r.guaranteed_out.from_rank}..{r.guaranteed_out.to_rank}"))
    print(_kv("Suggested cutoffs", f"conservative {s.conservative_cutoff}, inclusive {s.inclusive_cutoff}"))


def print_preview(result: StabilityResult, limit: int) -> None:
    print(_header(f"TOP {min(limit, result.n)} OF {result.n}"))
    rows = []
    for rank, item, score in preview_rows(result, limit):
        marker = " ◀" if rank in (result.k, result.k + 1) else ""
        rows.append([rank, f"{item}{marker}", score])
    print(tabulate(rows, headers=["Rank", "Item", "Score"], tablefmt="simple",
                   disable_numparse=True))


def print_monte_carlo(mc: MonteCarloResult) -> None:
    print(_header("STRESS TEST (MONTE CARLO)"))
    lo, hi = mc.same_set_ci
    print(_kv("Samples", f"{mc.samples} (seed {mc.seed})"))
    print(_kv("Same selected set", f"{format_percent(mc.same_set_prob)} "
              f"(95% CI {format_percent(lo)}–{format_percent(hi)})"))
    print(_kv("Average overlap", format_percent(mc.avg_overlap_frac)))
    print()
    print(tabulate(inclusion_rows(mc), headers=["Rank", "Item", "P(in selected set)"],
                   tablefmt="simple"))


# ── Main ─────────────────────────────────────────────────────────────────────


def build_parser(settings: AnalysisSettings = DEFAULT_SETTINGS) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ranksmarter",
        description="Is a top-k cutoff forced by the scores, or fake precision?",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "csv", nargs="?", type=str, default=None,
        help="CSV with item (or name) and score (or value) columns",
    )
    parser.add_argument(
        "--demo", action="store_true",
        help="Use the bundled example list instead of a CSV file",
    )
    parser.add_argument(
        "-k", "--top", dest="k", type=float, default=None,
        help=f"Selection size; clamped to 1..n-1 (default: {settings.k})",
    )
    parser.add_argument(
        "--eps", type=float, default=settings.eps,
        help=f"Assumed maximum absolute scoring error (default: {settings.eps})",
    )
    parser.add_argument(
        "--monte-carlo", action="store_true",
        help="Also run the seeded Monte Carlo stress test",
    )
    parser.add_argument(
        "--samples", type=int, default=settings.samples,
        help=f"Monte Carlo trials, {settings.min_samples}..{settings.max_samples} "
             f"(default: {settings.samples})",
    )
    parser.add_argument(
        "--seed", type=int, default=settings.seed,
        help=f"Monte Carlo seed (default: {settings.seed})",
    )
    parser.add_argument(
        "--workers", type=int, default=settings.workers,
        help="Threads for the Monte Carlo run; results do not depend on it",
    )
    parser.add_argument(
        "--preview", type=int, default=settings.preview_rows,
        help=f"Ranked rows to print (default: {settings.preview_rows})",
    )
    parser.add_argument("--json", type=str, default=None, help="Write the JSON payload here")
    parser.add_argument("--markdown", type=str, default=None, help="Write a Markdown report here")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None, settings: AnalysisSettings = DEFAULT_SETTINGS) -> int:
    parser = build_parser(settings)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    logger.debug("Arguments: %s", vars(args))

    if args.csv is None and not args.demo:
        parser.error("a CSV path or --demo is required")

    try:
        items = load_example() if args.demo else load_csv(args.csv)
        k = args.k if args.k is not None else settings.default_k(len(items))
        result = analyze(items, k, args.eps)

        mc = None
        if args.monte_carlo:
            mc = simulate_result(
                result,
                samples=settings.bounded_samples(args.samples),
                seed=settings.bounded_seed(args.seed),
                workers=max(1, args.workers),
                top_n=settings.inclusion_top_n,
            )
    except (OSError, RankSmarterError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print(_kv("Loaded", f"{result.n} valid rows", indent=2))
    print_verdict(result)
    print_boundary(result)
    print_preview(result, args.preview)
    if mc is not None:
        print_monte_carlo(mc)

    try:
        if args.json:
            Path(args.json).write_text(render_json(result, mc), encoding="utf-8")
            print(f"\n  JSON written to {args.json}", file=sys.stderr)
        if args.markdown:
            Path(args.markdown).write_text(
                render_markdown(result, mc, preview_limit=args.preview), encoding="utf-8"
            )
            print(f"\n  Markdown written to {args.markdown}", file=sys.stderr)
    except OSError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
