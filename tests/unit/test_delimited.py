from __future__ import annotations

from xlmd.parser.delimited import parse_delimited


def test_tab_delimited_paste() -> None:
    sheet = parse_delimited("Name\tScore\nAnn\t\nBob\t7\n")

    assert sheet.name == "Sheet1"
    assert sheet.rows == [["Name", "Score"], ["Ann", ""], ["Bob", "7"]]


def test_comma_fallback_and_blank_line_terminates() -> None:
    sheet = parse_delimited("a,b,c\n1,2\n\nignored\tafter blank\n", name="Paste")

    assert sheet.name == "Paste"
    assert sheet.rows == [["a", "b", "c"], ["1", "2"]]


def test_empty_input() -> None:
    assert parse_delimited("").rows == []
