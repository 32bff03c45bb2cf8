"""
Project: RankSmarter
File Created: 2026-10-19 11:02:44
File Name: report.py
Description:
    Verdict wording and export of analysis results.
    The core keeps every number unformatted; all rounding happens here.
      - render_json:     lossless structured payload
      - render_markdown: human-readable report
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

from tabulate import tabulate

from ranksmarter.models import MonteCarloResult, StabilityResult

TOOL_NAME = "RankSmarter"


@dataclass(frozen=True)
class Verdict:
    """Plain-language verdict for one analysis."""

    label: str
    headline: str
    action: str
    why: str

    @property
    def defensible(self) -> bool:
        return self.label == "Defensible cutoff"


def format_number(x: float) -> str:
    """Magnitude-aware formatting: 1 decimal >= 100, 3 decimals >= 1, else 4."""
    if not isinstance(x, (int, float)) or not math.isfinite(x):
        return "n/a"
    ax = abs(x)
    if ax >= 100:
        return f"{x:.1f}"
    if ax >= 1:
        return f"{x:.3f}"
    return f"{x:.4f}"


def format_percent(p: float) -> str:
    return f"{p * 100:.1f}%"


def verdict(result: StabilityResult) -> Verdict:
    """Summarize whether a strict top-k cutoff is defensible at eps."""
    k = result.k
    why = (
        f"Forced accuracy required to prevent a flip at the boundary is "
        f"±{format_number(result.boundary.required_eps)}. "
        f"Your wiggle room is ±{format_number(result.eps)}."
    )
    if result.stable_selected_set:
        return Verdict(
            label="Defensible cutoff",
            headline=f"Selecting top {k} is defensible at the stated wiggle room.",
            action=f"Proceed with a strict cutoff at {k}.",
            why=why,
        )

    band = result.tie_band
    if band is not None:
        action = f"Treat ranks {band.lo_rank} to {band.hi_rank} as a tie band."
    else:
        action = "Treat the boundary as a tie band or improve scoring precision before cutting."
    return Verdict(
        label="Likely fake precision",
        headline=f"A strict cutoff at {k} is not defensible at the stated wiggle room.",
        action=action,
        why=why,
    )


def tie_band_note(result: StabilityResult) -> str:
    band = result.tie_band
    if band is None:
        return (
            "No tie band around the cutoff at this wiggle room. "
            "The boundary gap is larger than the error bound."
        )
    return (
        f"At this wiggle room, the cutoff sits inside a near-tie. Treat ranks "
        f"{band.lo_rank} to {band.hi_rank} as a tie band, then use a secondary "
        f"criterion or additional evaluation."
    )


# ── Structured export ───────────────────────────────────────────────────────


def _json_value(value):
    """NaN and infinities have no JSON spelling; keep them as text."""
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    return value


def result_to_dict(result: StabilityResult) -> dict:
    """Plain-dict view of a StabilityResult, with derived flags added."""
    d = asdict(result)
    d["requested_k"] = _json_value(result.requested_k)
    d["requested_eps"] = _json_value(result.requested_eps)
    d["selected"] = [asdict(it) for it in result.selected]
    d["k_was_clamped"] = result.k_was_clamped
    d["eps_was_clamped"] = result.eps_was_clamped
    return d


def monte_carlo_to_dict(mc: MonteCarloResult) -> dict:
    d = asdict(mc)
    d["same_set_ci"] = list(mc.same_set_ci)
    return d


def _timestamp(generated_at: datetime | None) -> datetime:
    return generated_at or datetime.now(timezone.utc)


def render_json(
    result: StabilityResult,
    mc: MonteCarloResult | None = None,
    generated_at: datetime | None = None,
) -> str:
    payload = {
        "generated_at": _timestamp(generated_at).isoformat(),
        "tool": TOOL_NAME,
        "result": result_to_dict(result),
        "monte_carlo": monte_carlo_to_dict(mc) if mc is not None else None,
    }
    # requested_k / requested_eps echo caller input and may be any type
    return json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False, default=str)


# ── Markdown report ─────────────────────────────────────────────────────────


def _md_cell(text) -> str:
    return str(text).replace("|", "\\|")


def _md_rows(rows: list[list]) -> list[list]:
    """Escape pipes so item names cannot split a GitHub table cell."""
    return [[_md_cell(c) if isinstance(c, str) else c for c in row] for row in rows]


def preview_rows(result: StabilityResult, limit: int = 20) -> list[list]:
    """[rank, item, score] rows for the top of the ranked list."""
    return [[i + 1, it.item, it.score] for i, it in enumerate(result.ranked[:limit])]


def inclusion_rows(mc: MonteCarloResult) -> list[list]:
    return [[e.rank, e.item, format_percent(e.probability)] for e in mc.inclusion_top]


def render_markdown(
    result: StabilityResult,
    mc: MonteCarloResult | None = None,
    generated_at: datetime | None = None,
    preview_limit: int = 20,
) -> str:
    b = result.boundary
    v = verdict(result)
    k = result.k
    when = _timestamp(generated_at).strftime("%Y-%m-%d %H:%M:%S %Z").strip()

    lines = [
        f"# {TOOL_NAME} report",
        "",
        f"Generated: {when}",
        "",
        "## Inputs",
        f"- Items: {result.n}",
        f"- Selection size (cutoff): Top {k}",
        f"- Wiggle room (ε): ±{format_number(result.eps)}",
    ]
    if result.k_was_clamped:
        lines.append(f"- Requested cutoff {result.requested_k!r} was clamped to {k}")

    lines += [
        "",
        "## Verdict",
        f"- {v.label}: {v.headline}",
        "",
        "## Boundary evidence",
        f"- Inside (rank {k}): {b.inside_item} = {b.inside_score}",
        f"- Outside (rank {k + 1}): {b.outside_item} = {b.outside_score}",
        f"- Gap: {format_number(b.gap)}",
        f"- Forced accuracy required to prevent a flip: ±{format_number(b.required_eps)}",
        "",
        "## Recommendation",
        v.action,
    ]

    band = result.tie_band
    if band is not None:
        s = result.suggestions
        lines += [
            f"- Conservative cutoff: top {s.conservative_cutoff} (guaranteed in only)",
            f"- Inclusive cutoff: top {s.inclusive_cutoff} (guaranteed in plus the tie band)",
        ]

    if mc is not None:
        lo, hi = mc.same_set_ci
        lines += [
            "",
            "## Stress test (Monte Carlo)",
            f"- Samples: {mc.samples} (seed {mc.seed})",
            f"- Same selected set: {format_percent(mc.same_set_prob)} "
            f"(95% CI {format_percent(lo)} to {format_percent(hi)})",
            f"- Average overlap: {format_percent(mc.avg_overlap_frac)}",
            "",
            tabulate(_md_rows(inclusion_rows(mc)), headers=["Rank", "Item", "P(in selected set)"],
                     tablefmt="github"),
        ]

    lines += [
        "",
        "## Top items (preview)",
        "",
        tabulate(_md_rows(preview_rows(result, preview_limit)), headers=["Rank", "Item", "Score"],
                 tablefmt="github", disable_numparse=True),
        "",
        "Note: This checks precision (stability under bounded error), not validity or fairness.",
        "",
    ]
    return "\n".join(lines)
