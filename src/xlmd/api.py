from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Sequence

from .errors import UnsupportedConversionError
from .model import ConvertOptions, SheetData, WorkbookData
from .parser.markdown import MarkdownWorkbookReader, parse_markdown
from .parser.ooxml import OOXMLWorkbookReader
from .render_markdown import render_workbook_markdown, write_workbook_markdown
from .render_ooxml import write_workbook_xlsx

XLSX_SUFFIX = ".xlsx"
MARKDOWN_SUFFIXES = {".md", ".markdown"}


def load_xlsx(source: str | Path | BinaryIO, *, options: ConvertOptions | None = None) -> WorkbookData:
    return OOXMLWorkbookReader(source, options or ConvertOptions()).read()


def save_xlsx(sheets: Sequence[SheetData], destination: str | Path | BinaryIO) -> None:
    write_workbook_xlsx(sheets, destination)


def load_markdown(path: str | Path, *, options: ConvertOptions | None = None) -> WorkbookData:
    return MarkdownWorkbookReader(path, options or ConvertOptions()).read()


def parse_markdown_text(text: str, *, options: ConvertOptions | None = None) -> list[SheetData]:
    return parse_markdown(text, options or ConvertOptions())


def render_markdown(sheets: Sequence[SheetData]) -> str:
    return render_workbook_markdown(sheets)


def save_markdown(sheets: Sequence[SheetData], path: str | Path) -> None:
    write_workbook_markdown(sheets, path)


def convert_xlsx_to_markdown(path: str | Path, *, options: ConvertOptions | None = None) -> str:
    workbook = load_xlsx(path, options=options)
    return render_workbook_markdown(workbook.sheets)


def convert_markdown_to_xlsx(
    markdown_path: str | Path,
    xlsx_path: str | Path,
    *,
    options: ConvertOptions | None = None,
) -> WorkbookData:
    workbook = load_markdown(markdown_path, options=options)
    write_workbook_xlsx(workbook.sheets, xlsx_path)
    return workbook


def convert_file(
    input_path: str | Path,
    output_path: str | Path,
    *,
    options: ConvertOptions | None = None,
) -> WorkbookData:
    """Convert in the direction implied by the two file suffixes."""
    src = Path(input_path)
    dst = Path(output_path)
    src_suffix = src.suffix.lower()
    dst_suffix = dst.suffix.lower()

    if src_suffix == XLSX_SUFFIX and dst_suffix in MARKDOWN_SUFFIXES:
        workbook = load_xlsx(src, options=options)
        write_workbook_markdown(workbook.sheets, dst)
        return workbook
    if src_suffix in MARKDOWN_SUFFIXES and dst_suffix == XLSX_SUFFIX:
        return convert_markdown_to_xlsx(src, dst, options=options)

    raise UnsupportedConversionError(
        f"Cannot convert {src.name} to {dst.name}: expected .xlsx -> .md or .md -> .xlsx"
    )
