"""
Project: RankSmarter
File Created: 2026-10-19 13:25:40
File Name: test_csv_loader.py
Description:
    Tests for CSV item/score loading.
"""

import pytest

from ranksmarter.data.csv_loader import load_csv, load_example, parse_csv, read_rows
from ranksmarter.errors import CsvFormatError, InsufficientDataError
from ranksmarter.models import ScoredItem


class TestParseCsv:
    def test_basic(self):
        items = parse_csv("item,score\nA,3\nB,2.5\n")
        assert items == [ScoredItem("A", 3.0), ScoredItem("B", 2.5)]

    def test_synonym_columns_and_case(self):
        items = parse_csv(" Name , VALUE \nA,1\nB,2\n")
        assert [it.item for it in items] == ["A", "B"]

    def test_item_preferred_over_name(self):
        items = parse_csv("name,item,score\nwrong,right,1\nwrong2,right2,2\n")
        assert [it.item for it in items] == ["right", "right2"]

    def test_extra_columns_and_order(self):
        items = parse_csv("score,notes,item\n1,x,A\n2,y,B\n")
        assert items == [ScoredItem("A", 1.0), ScoredItem("B", 2.0)]

    def test_quoted_fields(self):
        text = 'item,score\n"Iris, revised",4\n"say ""hi""",3\n'
        items = parse_csv(text)
        assert [it.item for it in items] == ["Iris, revised", 'say "hi"']

    def test_blank_lines_and_crlf(self):
        items = parse_csv("item,score\r\n\r\nA,1\r\n   \r\nB,2\r\n")
        assert len(items) == 2

    def test_invalid_rows_are_skipped(self):
        items = parse_csv("item,score\nA,1\n,5\nC,abc\nD,\nE\nF,2\n")
        assert [it.item for it in items] == ["A", "F"]

    def test_missing_columns(self):
        with pytest.raises(CsvFormatError):
            parse_csv("label,points\nA,1\nB,2\n")

    def test_header_only(self):
        with pytest.raises(CsvFormatError):
            parse_csv("item,score\n\n")

    def test_one_valid_row_is_insufficient(self):
        with pytest.raises(InsufficientDataError):
            parse_csv("item,score\nA,1\nB,n/a\n")


class TestReadRows:
    def test_raw_records_are_not_cleaned(self):
        rows = read_rows("item,score\n  A ,x\n")
        assert rows == [{"item": "  A ", "score": "x"}]


class TestLoadCsv:
    def test_load_from_file(self, tmp_path):
        path = tmp_path / "scores.csv"
        path.write_text("\ufeffitem,score\nA,1\nB,2\n", encoding="utf-8")
        items = load_csv(path)
        assert [it.item for it in items] == ["A", "B"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_csv(tmp_path / "nope.csv")

    def test_bundled_example(self):
        items = load_example()
        assert len(items) == 12
        assert items[0] == ScoredItem("Proposal Aurora", 91.5)
        assert "Proposal Iris, revised" in [it.item for it in items]
