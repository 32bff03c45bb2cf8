"""
Project: RankSmarter
File Created: 2026-10-19 12:14:02
File Name: test_ranking.py
Description:
    Tests for the stable descending ranker.
"""

from ranksmarter.analysis.ranking import rank_items
from ranksmarter.models import ScoredItem


def _items(*pairs) -> list[ScoredItem]:
    return [ScoredItem(item, float(score)) for item, score in pairs]


class TestRankItems:
    def test_descending(self):
        ranked = rank_items(_items(("a", 1), ("b", 3), ("c", 2)))
        assert [it.item for it in ranked] == ["b", "c", "a"]

    def test_ties_keep_input_order(self):
        ranked = rank_items(_items(("x", 5), ("top", 9), ("y", 5), ("z", 5)))
        assert [it.item for it in ranked] == ["top", "x", "y", "z"]

    def test_reranking_is_a_no_op(self):
        once = rank_items(_items(("p", 2), ("q", 2), ("r", 7), ("s", 2)))
        assert rank_items(once) == once

    def test_returns_tuple_and_does_not_mutate_input(self):
        items = _items(("a", 1), ("b", 2))
        ranked = rank_items(items)
        assert isinstance(ranked, tuple)
        assert [it.item for it in items] == ["a", "b"]

    def test_preserves_length_and_items(self):
        items = _items(("a", 1), ("a", 1), ("b", 0))
        ranked = rank_items(items)
        assert sorted(ranked, key=id) == sorted(items, key=id)
