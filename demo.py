"""RankSmarter Demo — check a top-5 cutoff over the bundled proposal scores.

Usage:
    uv run python demo.py
"""

from ranksmarter.analysis.analyzer import analyze
from ranksmarter.data.csv_loader import load_example
from ranksmarter.report import render_markdown, verdict
from ranksmarter.simulation.montecarlo import simulate_result


def main():
    items = load_example()
    print(f"Loaded {len(items)} scored proposals\n")

    # Reviewers agree scores can be off by about half a point either way
    for eps in (0.1, 0.5, 1.5):
        result = analyze(items, k=5, eps=eps)
        v = verdict(result)
        band = result.tie_band
        band_text = f"tie band {band.lo_rank}-{band.hi_rank}" if band else "no tie band"
        print(f"  eps=±{eps:<4} {v.label:<22} {band_text}")
        print(f"     {v.why}")

    result = analyze(items, k=5, eps=0.5)
    mc = simulate_result(result, samples=5000, seed=12345)

    print("\n" + "=" * 60)
    print("INCLUSION PROBABILITY (eps=±0.5, 5000 trials)")
    print("=" * 60)
    for entry in mc.inclusion_top:
        marker = " <-- selected" if entry.rank <= result.k else ""
        print(f"  {entry.rank:>2}. {entry.item:<26} {entry.probability:6.1%}{marker}")
    print(f"\n  Same selected set in {mc.same_set_prob:.1%} of trials")

    with open("demo_report.md", "w", encoding="utf-8") as f:
        f.write(render_markdown(result, mc))
    print("\nReport saved to demo_report.md")


if __name__ == "__main__":
    main()
