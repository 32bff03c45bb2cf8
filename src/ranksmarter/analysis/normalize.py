"""
Project: RankSmarter
File Created: 2026-10-19 09:18:27
File Name: normalize.py
Description:
    Record cleaning and request clamping.
    Raw records are validated here once; everything downstream works on
    ScoredItem values and clamped (k, eps).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping

from ranksmarter.errors import InsufficientDataError
from ranksmarter.models import ScoredItem

logger = logging.getLogger(__name__)

ITEM_KEYS = ("item", "name")
SCORE_KEYS = ("score", "value")


def _field(record: Mapping, keys: tuple[str, ...]):
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None


def _unpack(record) -> tuple[object, object]:
    """Pull the item-like and score-like fields out of one raw record."""
    if isinstance(record, Mapping):
        return _field(record, ITEM_KEYS), _field(record, SCORE_KEYS)
    if hasattr(record, "item") and hasattr(record, "score"):
        return record.item, record.score
    if isinstance(record, (tuple, list)) and len(record) == 2:
        return record[0], record[1]
    return None, None


def coerce_score(value) -> float | None:
    """Convert a score-like value to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        score = float(value)
    except (TypeError, ValueError):
        return None
    return score if math.isfinite(score) else None


def normalize_records(records: Iterable | None) -> list[ScoredItem]:
    """Clean raw records into a list of ScoredItem.

    Accepts mappings (``item``/``name`` and ``score``/``value`` keys),
    ScoredItem-like objects and ``(item, score)`` pairs. Records with an
    empty item or a non-finite score are dropped.

    Raises:
        InsufficientDataError: If fewer than two valid records remain.
    """
    raw = list(records or [])
    cleaned: list[ScoredItem] = []

    for record in raw:
        item, score = _unpack(record)
        text = "" if item is None else str(item).strip()
        if not text:
            continue
        value = coerce_score(score)
        if value is None:
            continue
        cleaned.append(ScoredItem(item=text, score=value))

    dropped = len(raw) - len(cleaned)
    if dropped:
        logger.info("Dropped %d of %d records without item or finite score", dropped, len(raw))

    if len(cleaned) < 2:
        raise InsufficientDataError(len(cleaned), len(raw))
    return cleaned


def clamp_selection_size(k, n: int) -> int:
    """Floor k and clamp it to [1, n-1]. Non-numeric input falls back to 1."""
    lo, hi = 1, max(1, n - 1)
    try:
        value = float(k)
    except (TypeError, ValueError):
        value = math.nan

    clamped = lo if not math.isfinite(value) else max(lo, min(hi, math.floor(value)))
    if clamped != k:
        logger.warning("Selection size %r clamped to %d (valid range 1..%d)", k, clamped, hi)
    return clamped


def clamp_error_bound(eps) -> float:
    """Clamp eps to >= 0. Missing or non-finite input becomes 0."""
    value = coerce_score(eps)
    clamped = 0.0 if value is None else max(0.0, value)
    if clamped != eps:
        logger.warning("Error bound %r clamped to %g", eps, clamped)
    return clamped
