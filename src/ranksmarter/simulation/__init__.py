"""
Project: RankSmarter
File Created: 2026-10-19 10:05:33
File Name: __init__.py
Description:
    Monte Carlo stress testing of a selection.
"""

from ranksmarter.simulation.montecarlo import TRIALS_PER_BLOCK, simulate, simulate_result

__all__ = ["TRIALS_PER_BLOCK", "simulate", "simulate_result"]
