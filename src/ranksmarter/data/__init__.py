"""
Project: RankSmarter
File Created: 2026-10-19 10:31:07
File Name: __init__.py
Description:
    Record loading (CSV text and the bundled example list).
"""

from ranksmarter.data.csv_loader import load_csv, load_example, parse_csv

__all__ = ["load_csv", "load_example", "parse_csv"]
