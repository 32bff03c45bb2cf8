"""
Project: RankSmarter
File Created: 2026-10-19 10:31:07
File Name: csv_loader.py
Description:
    Item/score loading from lightly quoted comma-separated text.
    Header names are matched case-insensitively:
      - item column:  "item", else "name"
      - score column: "score", else "value"
    A doubled quote inside a quoted field is a literal quote.
"""

from __future__ import annotations

import csv
import logging
from importlib import resources
from pathlib import Path

from ranksmarter.analysis.normalize import normalize_records
from ranksmarter.errors import CsvFormatError
from ranksmarter.models import ScoredItem

logger = logging.getLogger(__name__)

ITEM_COLUMNS = ("item", "name")
SCORE_COLUMNS = ("score", "value")


def _column_index(header: list[str], names: tuple[str, ...]) -> int | None:
    for name in names:
        if name in header:
            return header.index(name)
    return None


def read_rows(text: str) -> list[dict[str, str]]:
    """Split CSV text into raw {"item", "score"} records.

    Blank lines are skipped. Rows shorter than the header yield empty
    fields, which the normalizer later drops.

    Raises:
        CsvFormatError: If there is no header plus data row, or the header
            lacks an item-like or score-like column.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) < 2:
        raise CsvFormatError("CSV must include a header row and at least one data row.")

    rows = list(csv.reader(lines))
    header = [cell.strip().lower() for cell in rows[0]]
    item_idx = _column_index(header, ITEM_COLUMNS)
    score_idx = _column_index(header, SCORE_COLUMNS)
    if item_idx is None or score_idx is None:
        raise CsvFormatError(
            "CSV must have columns named item (or name) and score (or value)."
        )

    def cell(row: list[str], idx: int) -> str:
        return row[idx] if idx < len(row) else ""

    return [{"item": cell(row, item_idx), "score": cell(row, score_idx)} for row in rows[1:]]


def parse_csv(text: str) -> list[ScoredItem]:
    """Parse CSV text into cleaned items (input order kept)."""
    records = read_rows(text)
    items = normalize_records(records)
    logger.debug("Parsed %d valid rows from %d CSV data rows", len(items), len(records))
    return items


def load_csv(csv_path: str | Path) -> list[ScoredItem]:
    """Load and clean an item/score CSV file."""
    path = Path(csv_path)
    with path.open("r", encoding="utf-8-sig") as f:
        text = f.read()
    logger.info("Loading scores from %s", path)
    return parse_csv(text)


def load_example() -> list[ScoredItem]:
    """The bundled demo list of twelve scored proposals."""
    text = resources.files("ranksmarter.data").joinpath("example.csv").read_text(encoding="utf-8")
    return parse_csv(text)
