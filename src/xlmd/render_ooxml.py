from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Sequence
from xml.etree import ElementTree as ET
from zipfile import ZIP_DEFLATED, ZipFile

from .errors import WriteIOError
from .model import SharedStringTable, SheetData
from .parser.namespaces import (
    CONTENT_TYPES_NS,
    CT_RELATIONSHIPS,
    CT_SHARED_STRINGS,
    CT_STYLES,
    CT_WORKBOOK,
    CT_WORKSHEET,
    CT_XML,
    DOCUMENT_REL_NS,
    PACKAGE_REL_NS,
    REL_TYPE_OFFICE_DOCUMENT,
    REL_TYPE_SHARED_STRINGS,
    REL_TYPE_STYLES,
    REL_TYPE_WORKSHEET,
    SPREADSHEET_NS,
)
from .parser.utils import cell_reference, encode_ooxml_escapes

logger = logging.getLogger(__name__)


def render_workbook_xlsx(sheets: Sequence[SheetData]) -> bytes:
    shared_strings = SharedStringTable.from_sheets(sheets)
    names = _sheet_names(sheets)

    buffer = io.BytesIO()
    with ZipFile(buffer, "w", compression=ZIP_DEFLATED) as zip_file:
        zip_file.writestr("[Content_Types].xml", _content_types_xml(len(sheets)))
        zip_file.writestr("_rels/.rels", _root_rels_xml())
        zip_file.writestr("xl/workbook.xml", _workbook_xml(names))
        zip_file.writestr("xl/_rels/workbook.xml.rels", _workbook_rels_xml(len(sheets)))
        zip_file.writestr("xl/styles.xml", _styles_xml())
        zip_file.writestr("xl/sharedStrings.xml", _shared_strings_xml(shared_strings))
        for idx, sheet in enumerate(sheets, start=1):
            zip_file.writestr(f"xl/worksheets/sheet{idx}.xml", _worksheet_xml(sheet, shared_strings))

    logger.debug("Encoded %d sheet(s) with %d shared string(s)", len(sheets), len(shared_strings))
    return buffer.getvalue()


def write_workbook_xlsx(sheets: Sequence[SheetData], destination: str | Path | BinaryIO) -> None:
    payload = render_workbook_xlsx(sheets)

    if not isinstance(destination, (str, Path)):
        try:
            destination.write(payload)
        except OSError as exc:
            raise WriteIOError(f"Failed to write package: {exc}") from exc
        return

    path = Path(destination)
    created = not path.exists()
    try:
        path.write_bytes(payload)
    except OSError as exc:
        # only a file this call created is removed; an existing destination is left alone
        if created and path.is_file():
            try:
                path.unlink()
            except OSError as cleanup_exc:
                logger.warning("Could not remove partial package %s: %s", path, cleanup_exc)
        raise WriteIOError(f"Failed to write package {path}: {exc}") from exc


def _sheet_names(sheets: Sequence[SheetData]) -> list[str]:
    return [sheet.name or f"Sheet{idx}" for idx, sheet in enumerate(sheets, start=1)]


def _serialize(root: ET.Element) -> bytes:
    return ET.tostring(root, encoding="UTF-8", xml_declaration=True)


def _content_types_xml(sheet_count: int) -> bytes:
    root = ET.Element("Types", {"xmlns": CONTENT_TYPES_NS})
    ET.SubElement(root, "Default", {"Extension": "rels", "ContentType": CT_RELATIONSHIPS})
    ET.SubElement(root, "Default", {"Extension": "xml", "ContentType": CT_XML})
    overrides = [
        ("/xl/workbook.xml", CT_WORKBOOK),
        ("/xl/styles.xml", CT_STYLES),
        ("/xl/sharedStrings.xml", CT_SHARED_STRINGS),
    ]
    overrides.extend((f"/xl/worksheets/sheet{idx}.xml", CT_WORKSHEET) for idx in range(1, sheet_count + 1))
    for part_name, content_type in overrides:
        ET.SubElement(root, "Override", {"PartName": part_name, "ContentType": content_type})
    return _serialize(root)


def _relationships_xml(rels: list[tuple[str, str, str]]) -> bytes:
    root = ET.Element("Relationships", {"xmlns": PACKAGE_REL_NS})
    for rel_id, rel_type, target in rels:
        ET.SubElement(root, "Relationship", {"Id": rel_id, "Type": rel_type, "Target": target})
    return _serialize(root)


def _root_rels_xml() -> bytes:
    return _relationships_xml([("rId1", REL_TYPE_OFFICE_DOCUMENT, "xl/workbook.xml")])


def _workbook_rels_xml(sheet_count: int) -> bytes:
    # worksheets take rId1..rIdN; styles and shared strings follow them
    rels = [(f"rId{idx}", REL_TYPE_WORKSHEET, f"worksheets/sheet{idx}.xml") for idx in range(1, sheet_count + 1)]
    rels.append((f"rId{sheet_count + 1}", REL_TYPE_STYLES, "styles.xml"))
    rels.append((f"rId{sheet_count + 2}", REL_TYPE_SHARED_STRINGS, "sharedStrings.xml"))
    return _relationships_xml(rels)


def _workbook_xml(names: list[str]) -> bytes:
    root = ET.Element("workbook", {"xmlns": SPREADSHEET_NS, "xmlns:r": DOCUMENT_REL_NS})
    sheets_elem = ET.SubElement(root, "sheets")
    for idx, name in enumerate(names, start=1):
        ET.SubElement(sheets_elem, "sheet", {"name": name, "sheetId": str(idx), "r:id": f"rId{idx}"})
    return _serialize(root)


def _styles_xml() -> bytes:
    root = ET.Element("styleSheet", {"xmlns": SPREADSHEET_NS})

    fonts = ET.SubElement(root, "fonts", {"count": "1"})
    font = ET.SubElement(fonts, "font")
    ET.SubElement(font, "sz", {"val": "11"})
    ET.SubElement(font, "name", {"val": "Calibri"})

    fills = ET.SubElement(root, "fills", {"count": "2"})
    for pattern in ("none", "gray125"):
        fill = ET.SubElement(fills, "fill")
        ET.SubElement(fill, "patternFill", {"patternType": pattern})

    borders = ET.SubElement(root, "borders", {"count": "1"})
    border = ET.SubElement(borders, "border")
    for side in ("left", "right", "top", "bottom", "diagonal"):
        ET.SubElement(border, side)

    xf_attrs = {"numFmtId": "0", "fontId": "0", "fillId": "0", "borderId": "0"}
    cell_style_xfs = ET.SubElement(root, "cellStyleXfs", {"count": "1"})
    ET.SubElement(cell_style_xfs, "xf", xf_attrs)
    cell_xfs = ET.SubElement(root, "cellXfs", {"count": "1"})
    ET.SubElement(cell_xfs, "xf", {**xf_attrs, "xfId": "0"})
    cell_styles = ET.SubElement(root, "cellStyles", {"count": "1"})
    ET.SubElement(cell_styles, "cellStyle", {"name": "Normal", "xfId": "0", "builtinId": "0"})
    return _serialize(root)


def _shared_strings_xml(shared_strings: SharedStringTable) -> bytes:
    # values are already unique, so count and uniqueCount are the same number
    total = str(len(shared_strings))
    root = ET.Element("sst", {"xmlns": SPREADSHEET_NS, "count": total, "uniqueCount": total})
    for value in shared_strings.values:
        si = ET.SubElement(root, "si")
        text = ET.SubElement(si, "t")
        if value != value.strip():
            text.set("xml:space", "preserve")
        text.text = encode_ooxml_escapes(value)
    return _serialize(root)


def _worksheet_xml(sheet: SheetData, shared_strings: SharedStringTable) -> bytes:
    root = ET.Element("worksheet", {"xmlns": SPREADSHEET_NS, "xmlns:r": DOCUMENT_REL_NS})
    sheet_data = ET.SubElement(root, "sheetData")

    for row_idx, row in enumerate(sheet.rows):
        last_col = _last_filled_column(row)
        if last_col < 0:
            continue
        row_elem = ET.SubElement(sheet_data, "row", {"r": str(row_idx + 1)})
        for col_idx in range(last_col + 1):
            value = row[col_idx]
            if not value:
                continue
            cell = ET.SubElement(row_elem, "c", {"r": cell_reference(row_idx, col_idx), "t": "s"})
            ET.SubElement(cell, "v").text = str(shared_strings.index_of(value))
    return _serialize(root)


def _last_filled_column(row: Sequence[str]) -> int:
    for col_idx in range(len(row) - 1, -1, -1):
        if row[col_idx]:
            return col_idx
    return -1
