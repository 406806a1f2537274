from __future__ import annotations

from pathlib import Path

from xlmd.api import load_xlsx
from xlmd.model import SharedStringTable, SheetData

from tests.helpers import SPREADSHEET_NS, XML_HEADER, workbook_rels_xml, workbook_xml, worksheet_xml, write_package


def test_parse_shared_strings_with_rich_text(tmp_path: Path) -> None:
    shared_xml = f"""{XML_HEADER}<sst xmlns="{SPREADSHEET_NS}" count="2" uniqueCount="2">
  <si><t>plain</t></si>
  <si>
    <r><t>rich</t></r>
    <r><t>Text</t></r>
  </si>
</sst>
"""
    path = write_package(
        tmp_path / "rich.xlsx",
        {
            "xl/workbook.xml": workbook_xml([("Sheet1", "rId1")]),
            "xl/_rels/workbook.xml.rels": workbook_rels_xml({"rId1": "worksheets/sheet1.xml"}),
            "xl/sharedStrings.xml": shared_xml,
            "xl/worksheets/sheet1.xml": worksheet_xml(
                '<row r="1"><c r="A1" t="s"><v>0</v></c><c r="B1" t="s"><v>1</v></c></row>'
            ),
        },
    )

    doc = load_xlsx(path)

    assert doc.sheets[0].rows == [["plain", "richText"]]


def test_table_keeps_first_seen_order_and_skips_empty() -> None:
    sheets = [
        SheetData(name="A", rows=[["b", "", "a"], ["b", "c"]]),
        SheetData(name="B", rows=[["a", "d"]]),
    ]

    table = SharedStringTable.from_sheets(sheets)

    assert table.values == ["b", "a", "c", "d"]
    assert table.index_of("c") == 2
    assert "" not in table.lookup
    assert len(table) == 4


def test_table_construction_is_idempotent(sample_sheets) -> None:
    first = SharedStringTable.from_sheets(sample_sheets)
    second = SharedStringTable.from_sheets(sample_sheets)

    assert first.values == second.values
    assert first.lookup == second.lookup
