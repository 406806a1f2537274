from __future__ import annotations

import logging
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO
from xml.etree import ElementTree as ET
from zipfile import BadZipFile, ZipFile

from ..errors import PackageOpenError, PartParseError, WorksheetPartError
from ..model import (
    CellPayload,
    ConvertOptions,
    InlineValue,
    SharedStringRef,
    SheetData,
    WorkbookData,
)
from .namespaces import (
    DOCUMENT_REL_NS,
    NS,
    PACKAGE_REL_NS,
    REL_TYPE_OFFICE_DOCUMENT,
    REL_TYPE_SHARED_STRINGS,
    SPREADSHEET_NS,
)
from .utils import cell_reference_to_column_index, decode_ooxml_escapes, resolve_target

logger = logging.getLogger(__name__)

ROOT_RELS_PATH = "_rels/.rels"
DEFAULT_WORKBOOK_PATH = "xl/workbook.xml"
DEFAULT_SHARED_STRINGS_PATH = "xl/sharedStrings.xml"


@dataclass(slots=True)
class _Relationship:
    rid: str
    rel_type: str
    target: str


@dataclass(slots=True)
class _SheetRef:
    index: int
    rid: str
    name: str
    path: str | None


class OOXMLWorkbookReader:
    """Decode the string grid of every worksheet in an OOXML package.

    Worksheets are located through the workbook's sheet list joined with the
    workbook relationships on relationship ID, so sheet names always travel
    with the content they declare. A worksheet that cannot be resolved or
    parsed is skipped with a warning; a broken workbook or shared-strings part
    aborts the read.
    """

    def __init__(self, source: str | Path | BinaryIO, options: ConvertOptions | None = None) -> None:
        self.source = source
        self.options = options or ConvertOptions()

    def read(self) -> WorkbookData:
        source_path = Path(self.source) if isinstance(self.source, (str, Path)) else None
        try:
            zip_file = ZipFile(self.source)
        except (OSError, BadZipFile) as exc:
            raise PackageOpenError(f"Cannot open package {self._label()}: {exc}") from exc

        with zip_file:
            names = set(zip_file.namelist())
            workbook = WorkbookData(source_path=source_path)

            workbook_path = self._locate_workbook(zip_file, names)
            wb_rels = self._load_relationships(zip_file, names, self._rels_path_for(workbook_path))
            shared_strings = self._parse_shared_strings(zip_file, names, workbook_path, wb_rels)
            sheet_refs = self._parse_sheet_refs(zip_file, names, workbook_path, wb_rels)
            logger.debug(
                "Package %s: %d sheet(s) declared, %d shared string(s)",
                self._label(),
                len(sheet_refs),
                len(shared_strings),
            )

            for sheet_ref in sheet_refs:
                try:
                    rows = self._parse_sheet(zip_file, names, workbook_path, sheet_ref, shared_strings)
                except WorksheetPartError as exc:
                    if self.options.strict_worksheets:
                        raise
                    message = f"Skipped sheet '{sheet_ref.name}': {exc}"
                    logger.warning(message)
                    workbook.warnings.append(message)
                    continue
                workbook.sheets.append(SheetData(name=sheet_ref.name, rows=rows))

            return workbook

    def _label(self) -> str:
        if isinstance(self.source, (str, Path)):
            return str(self.source)
        return getattr(self.source, "name", "<stream>")

    def _read_xml(self, zip_file: ZipFile, names: set[str], path: str, error_cls=PartParseError) -> ET.Element:
        if path not in names:
            raise error_cls(path, "part not found in package")
        try:
            return ET.fromstring(zip_file.read(path))
        except ET.ParseError as exc:
            raise error_cls(path, f"malformed XML ({exc})") from exc
        except (BadZipFile, OSError, zlib.error) as exc:
            raise error_cls(path, f"unreadable part ({exc})") from exc

    def _rels_path_for(self, part_path: str) -> str:
        if "/" not in part_path:
            return f"_rels/{part_path}.rels"
        parent, file_name = part_path.rsplit("/", 1)
        return f"{parent}/_rels/{file_name}.rels"

    def _locate_workbook(self, zip_file: ZipFile, names: set[str]) -> str:
        root_rels = self._load_relationships(zip_file, names, ROOT_RELS_PATH)
        for rel in root_rels.values():
            if rel.rel_type == REL_TYPE_OFFICE_DOCUMENT:
                return resolve_target("", rel.target)
        return DEFAULT_WORKBOOK_PATH

    def _load_relationships(self, zip_file: ZipFile, names: set[str], path: str) -> dict[str, _Relationship]:
        if path not in names:
            return {}
        root = self._read_xml(zip_file, names, path)
        rels: dict[str, _Relationship] = {}
        for rel in root.findall(f"{{{PACKAGE_REL_NS}}}Relationship"):
            rel_id = rel.attrib.get("Id")
            target = rel.attrib.get("Target")
            if rel_id and target:
                rels[rel_id] = _Relationship(rid=rel_id, rel_type=rel.attrib.get("Type", ""), target=target)
        return rels

    def _parse_shared_strings(
        self,
        zip_file: ZipFile,
        names: set[str],
        workbook_path: str,
        wb_rels: dict[str, _Relationship],
    ) -> list[str]:
        path = DEFAULT_SHARED_STRINGS_PATH
        for rel in wb_rels.values():
            if rel.rel_type == REL_TYPE_SHARED_STRINGS:
                path = resolve_target(workbook_path, rel.target)
                break
        if path not in names:
            return []

        root = self._read_xml(zip_file, names, path)
        values: list[str] = []
        for si in root.findall(f"{{{SPREADSHEET_NS}}}si"):
            direct = si.find(f"{{{SPREADSHEET_NS}}}t")
            if direct is not None:
                values.append(decode_ooxml_escapes(direct.text or ""))
                continue
            texts: list[str] = []
            for run in si.findall(f"{{{SPREADSHEET_NS}}}r"):
                for txt in run.findall(f"{{{SPREADSHEET_NS}}}t"):
                    texts.append(txt.text or "")
            values.append(decode_ooxml_escapes("".join(texts)))
        return values

    def _parse_sheet_refs(
        self,
        zip_file: ZipFile,
        names: set[str],
        workbook_path: str,
        wb_rels: dict[str, _Relationship],
    ) -> list[_SheetRef]:
        wb_root = self._read_xml(zip_file, names, workbook_path)
        sheet_refs: list[_SheetRef] = []
        for idx, sheet in enumerate(wb_root.findall("a:sheets/a:sheet", NS)):
            rid = sheet.attrib.get(f"{{{DOCUMENT_REL_NS}}}id", "")
            rel = wb_rels.get(rid)
            sheet_refs.append(
                _SheetRef(
                    index=idx,
                    rid=rid,
                    name=sheet.attrib.get("name") or f"Sheet{idx + 1}",
                    path=resolve_target(workbook_path, rel.target) if rel else None,
                )
            )
        return sheet_refs

    def _parse_sheet(
        self,
        zip_file: ZipFile,
        names: set[str],
        workbook_path: str,
        sheet_ref: _SheetRef,
        shared_strings: list[str],
    ) -> list[list[str]]:
        if sheet_ref.path is None:
            raise WorksheetPartError(
                f"{workbook_path}#{sheet_ref.rid or '?'}",
                "relationship ID does not resolve to a worksheet part",
            )
        root = self._read_xml(zip_file, names, sheet_ref.path, error_cls=WorksheetPartError)
        return self._parse_rows(root, shared_strings)

    def _parse_rows(self, root: ET.Element, shared_strings: list[str]) -> list[list[str]]:
        rows: list[list[str]] = []
        for row_elem in root.findall("a:sheetData/a:row", NS):
            placed: list[tuple[int, str]] = []
            next_col = 0
            for cell_elem in row_elem.findall("a:c", NS):
                col = next_col
                coord = cell_elem.attrib.get("r")
                if coord:
                    try:
                        col = cell_reference_to_column_index(coord)
                    except ValueError:
                        col = next_col
                placed.append((col, self._resolve_payload(self._cell_payload(cell_elem), shared_strings)))
                next_col = col + 1

            if not placed:
                continue
            dense = [""] * (max(col for col, _ in placed) + 1)
            for col, value in placed:
                dense[col] = value
            rows.append(dense)
        return rows

    def _cell_payload(self, cell_elem: ET.Element) -> CellPayload:
        cell_type = cell_elem.attrib.get("t", "n")
        value_elem = cell_elem.find("a:v", NS)
        raw = value_elem.text if value_elem is not None else None

        if cell_type == "s":
            try:
                return SharedStringRef(int((raw or "").strip()))
            except ValueError:
                return InlineValue("")

        if cell_type == "inlineStr":
            inline = cell_elem.find("a:is", NS)
            if inline is None:
                return InlineValue("")
            direct = inline.find("a:t", NS)
            if direct is not None:
                return InlineValue(decode_ooxml_escapes(direct.text or ""))
            text = "".join((node.text or "") for node in inline.findall(".//a:t", NS))
            return InlineValue(decode_ooxml_escapes(text))

        return InlineValue(raw or "")

    def _resolve_payload(self, payload: CellPayload, shared_strings: list[str]) -> str:
        if isinstance(payload, SharedStringRef):
            idx = payload.index
            return shared_strings[idx] if 0 <= idx < len(shared_strings) else ""
        return payload.text
