"""
Project: RankSmarter
File Created: 2026-10-19 09:44:10
File Name: __init__.py
Description:
    Cutoff stability analysis.
"""

from ranksmarter.analysis.analyzer import analyze, analyze_ranked

__all__ = ["analyze", "analyze_ranked"]
