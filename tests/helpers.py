from __future__ import annotations

from pathlib import Path
from xml.etree import ElementTree as ET
from zipfile import ZipFile

SPREADSHEET_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
DOCUMENT_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
PACKAGE_REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"

XML_HEADER = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'


def workbook_xml(sheets: list[tuple[str, str]]) -> str:
    entries = "".join(
        f'<sheet name="{name}" sheetId="{idx}" r:id="{rid}"/>' for idx, (name, rid) in enumerate(sheets, start=1)
    )
    return (
        XML_HEADER
        + f'<workbook xmlns="{SPREADSHEET_NS}" xmlns:r="{DOCUMENT_REL_NS}"><sheets>{entries}</sheets></workbook>'
    )


def workbook_rels_xml(targets: dict[str, str]) -> str:
    entries = "".join(
        f'<Relationship Id="{rid}" Type="{DOCUMENT_REL_NS}/worksheet" Target="{target}"/>'
        for rid, target in targets.items()
    )
    return XML_HEADER + f'<Relationships xmlns="{PACKAGE_REL_NS}">{entries}</Relationships>'


def shared_strings_xml(values: list[str]) -> str:
    items = "".join(f"<si><t>{value}</t></si>" for value in values)
    return (
        XML_HEADER
        + f'<sst xmlns="{SPREADSHEET_NS}" count="{len(values)}" uniqueCount="{len(values)}">{items}</sst>'
    )


def worksheet_xml(rows_xml: str) -> str:
    return XML_HEADER + f'<worksheet xmlns="{SPREADSHEET_NS}"><sheetData>{rows_xml}</sheetData></worksheet>'


def write_package(path: Path, parts: dict[str, str | bytes]) -> Path:
    with ZipFile(path, "w") as zf:
        for name, payload in parts.items():
            zf.writestr(name, payload)
    return path


def single_sheet_package(path: Path, rows_xml: str, shared: list[str] | None = None, name: str = "Data") -> Path:
    parts: dict[str, str | bytes] = {
        "xl/workbook.xml": workbook_xml([(name, "rId1")]),
        "xl/_rels/workbook.xml.rels": workbook_rels_xml({"rId1": "worksheets/sheet1.xml"}),
        "xl/worksheets/sheet1.xml": worksheet_xml(rows_xml),
    }
    if shared is not None:
        parts["xl/sharedStrings.xml"] = shared_strings_xml(shared)
    return write_package(path, parts)


def read_part(path: Path, name: str) -> ET.Element:
    with ZipFile(path) as zf:
        return ET.fromstring(zf.read(name))


def find_all(root: ET.Element, path: str) -> list[ET.Element]:
    qualified = "/".join(f"{{{SPREADSHEET_NS}}}{step}" for step in path.split("/"))
    return root.findall(qualified)
