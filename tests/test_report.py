"""
Project: RankSmarter
File Created: 2026-10-19 13:48:12
File Name: test_report.py
Description:
    Tests for verdicts, JSON payloads and Markdown reports.
"""

import json
from datetime import datetime, timezone

from ranksmarter.analysis.analyzer import analyze
from ranksmarter.report import (
    format_number,
    render_json,
    render_markdown,
    result_to_dict,
    verdict,
)
from ranksmarter.simulation.montecarlo import simulate_result

GENERATED = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def _records() -> list[tuple[str, float]]:
    return [("A", 10), ("B", 9), ("C", 9), ("D", 5)]


class TestFormatNumber:
    def test_magnitudes(self):
        assert format_number(123.456) == "123.5"
        assert format_number(1.23456) == "1.235"
        assert format_number(-2.5) == "-2.500"
        assert format_number(0.5) == "0.5000"
        assert format_number(0) == "0.0000"

    def test_non_finite(self):
        assert format_number(float("nan")) == "n/a"
        assert format_number(float("inf")) == "n/a"


class TestVerdict:
    def test_tie_band_verdict(self):
        v = verdict(analyze(_records(), k=2, eps=1))
        assert v.label == "Likely fake precision"
        assert not v.defensible
        assert v.action == "Treat ranks 1 to 3 as a tie band."
        assert "±0.0000" in v.why
        assert "±1.000" in v.why

    def test_defensible_verdict(self):
        v = verdict(analyze(_records(), k=3, eps=0.1))
        assert v.defensible
        assert v.action == "Proceed with a strict cutoff at 3."
        assert "±2.000" in v.why


class TestRenderJson:
    def test_payload_shape(self):
        payload = json.loads(render_json(analyze(_records(), k=2, eps=1), generated_at=GENERATED))
        assert payload["tool"] == "RankSmarter"
        assert payload["generated_at"] == "2026-01-02T03:04:05+00:00"
        assert payload["monte_carlo"] is None

        result = payload["result"]
        assert result["n"] == 4
        assert result["k"] == 2
        assert result["boundary"]["gap"] == 0.0
        assert result["regions"]["tie_band"]["lo_rank"] == 1
        assert result["regions"]["guaranteed_out"] == {"from_rank": 4, "to_rank": 4}
        assert result["suggestions"] == {"conservative_cutoff": 0, "inclusive_cutoff": 3}
        assert result["diagnostics"]["gaps"] == [1.0, 0.0, 4.0]
        assert [r["item"] for r in result["ranked"]] == ["A", "B", "C", "D"]

    def test_numbers_stay_numbers(self):
        d = result_to_dict(analyze(_records(), k=3, eps=0.1))
        assert isinstance(d["boundary"]["required_eps"], float)
        assert isinstance(d["eps"], float)
        assert d["regions"]["tie_band"] is None

    def test_with_monte_carlo(self):
        result = analyze(_records(), k=2, eps=1)
        mc = simulate_result(result, samples=200, seed=1)
        payload = json.loads(render_json(result, mc, generated_at=GENERATED))
        assert payload["monte_carlo"]["samples"] == 200
        assert payload["monte_carlo"]["same_set_prob"] == mc.same_set_prob
        assert len(payload["monte_carlo"]["same_set_ci"]) == 2
        assert payload["monte_carlo"]["inclusion_top"][0]["rank"] >= 1


class TestRenderMarkdown:
    def test_sections(self):
        md = render_markdown(analyze(_records(), k=2, eps=1), generated_at=GENERATED)
        assert md.startswith("# RankSmarter report")
        assert "Generated: 2026-01-02 03:04:05 UTC" in md
        assert "- Selection size (cutoff): Top 2" in md
        assert "- Inside (rank 2): B = 9.0" in md
        assert "- Outside (rank 3): C = 9.0" in md
        assert "Treat ranks 1 to 3 as a tie band." in md
        assert "Conservative cutoff: top 0" in md
        assert "## Top items (preview)" in md
        assert "Stress test" not in md
        assert md.rstrip().endswith("not validity or fairness.")

    def test_monte_carlo_section(self):
        result = analyze(_records(), k=2, eps=1)
        mc = simulate_result(result, samples=200, seed=1)
        md = render_markdown(result, mc, generated_at=GENERATED)
        assert "## Stress test (Monte Carlo)" in md
        assert "- Samples: 200 (seed 1)" in md
        assert "P(in selected set)" in md

    def test_clamped_cutoff_is_reported(self):
        md = render_markdown(analyze(_records(), k=9, eps=0), generated_at=GENERATED)
        assert "Requested cutoff 9 was clamped to 3" in md

    def test_preview_limit(self):
        records = [(f"item{i:02d}", 100 - i) for i in range(30)]
        md = render_markdown(analyze(records, k=5, eps=0), generated_at=GENERATED, preview_limit=20)
        assert "item19" in md
        assert "item20" not in md

    def test_pipes_in_item_names_are_escaped(self):
        records = [("Plan A|B", 10), ("C", 9), ("D", 5)]
        result = analyze(records, k=1, eps=0.1)
        mc = simulate_result(result, samples=200, seed=1)
        md = render_markdown(result, mc, generated_at=GENERATED)
        table_lines = [line for line in md.splitlines() if "Plan A" in line and line.startswith("|")]
        assert len(table_lines) == 2
        for line in table_lines:
            assert "Plan A\\|B" in line
            assert line.replace("\\|", "").count("|") == 4


def _reject_constant(name):
    raise ValueError(f"non-standard JSON constant {name}")


class TestStrictJson:
    def test_nan_eps_exports_valid_json(self):
        result = analyze(_records(), k=2, eps=float("nan"))
        payload = json.loads(render_json(result, generated_at=GENERATED), parse_constant=_reject_constant)
        assert payload["result"]["eps"] == 0.0
        assert payload["result"]["requested_eps"] == "nan"
        assert payload["result"]["eps_was_clamped"] is True

    def test_infinite_inputs_export_valid_json(self):
        result = analyze(_records(), k=float("inf"), eps=float("inf"))
        payload = json.loads(render_json(result, generated_at=GENERATED), parse_constant=_reject_constant)
        assert payload["result"]["requested_eps"] == "inf"
        assert payload["result"]["requested_k"] == "inf"
        assert payload["result"]["k"] == 1
