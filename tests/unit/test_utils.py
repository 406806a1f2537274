from __future__ import annotations

import pytest

from xlmd.parser.utils import (
    cell_reference,
    cell_reference_to_column_index,
    column_index_to_letters,
    decode_ooxml_escapes,
    encode_ooxml_escapes,
    resolve_target,
)


def test_column_letters() -> None:
    assert column_index_to_letters(0) == "A"
    assert column_index_to_letters(25) == "Z"
    assert column_index_to_letters(26) == "AA"
    assert column_index_to_letters(51) == "AZ"
    assert column_index_to_letters(701) == "ZZ"
    assert column_index_to_letters(702) == "AAA"


def test_column_letters_rejects_negative() -> None:
    with pytest.raises(ValueError):
        column_index_to_letters(-1)


def test_reference_to_column_index() -> None:
    assert cell_reference_to_column_index("A1") == 0
    assert cell_reference_to_column_index("Z9") == 25
    assert cell_reference_to_column_index("AA1") == 26
    assert cell_reference_to_column_index("AB12") == 27
    assert cell_reference_to_column_index("ZZ100") == 701
    assert cell_reference_to_column_index("$C$3") == 2
    assert cell_reference_to_column_index("c3") == 2


def test_reference_without_letters_is_invalid() -> None:
    with pytest.raises(ValueError):
        cell_reference_to_column_index("12")


def test_column_codec_bijection() -> None:
    for idx in range(1001):
        assert cell_reference_to_column_index(column_index_to_letters(idx) + "1") == idx


def test_cell_reference() -> None:
    assert cell_reference(11, 27) == "AB12"
    assert cell_reference(0, 0) == "A1"
    with pytest.raises(ValueError):
        cell_reference(-1, 0)


def test_resolve_target() -> None:
    assert resolve_target("xl/workbook.xml", "worksheets/sheet1.xml") == "xl/worksheets/sheet1.xml"
    assert resolve_target("xl/workbook.xml", "/xl/worksheets/sheet2.xml") == "xl/worksheets/sheet2.xml"
    assert resolve_target("xl/workbook.xml", "../xl/sharedStrings.xml") == "xl/sharedStrings.xml"


def test_ooxml_escapes() -> None:
    assert decode_ooxml_escapes("line_x000D_") == "line\r"
    assert decode_ooxml_escapes("_x005F_x0041_") == "_x0041_"
    assert encode_ooxml_escapes("a\rb") == "a_x000D_b"
    assert encode_ooxml_escapes("_x0041_") == "_x005F_x0041_"
    assert decode_ooxml_escapes(encode_ooxml_escapes("tab\tand\x01ctl")) == "tab\tand\x01ctl"
