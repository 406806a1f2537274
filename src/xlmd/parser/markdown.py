from __future__ import annotations

import logging
import re
from pathlib import Path

from ..errors import InputReadError
from ..model import ConvertOptions, SheetData, WorkbookData

logger = logging.getLogger(__name__)

HEADING_RE = re.compile(r"^## ([^\n]+)\n\n", re.MULTILINE)
SEPARATOR_CELL_RE = re.compile(r"^[:\s-]*$")
UNESCAPED_PIPE_RE = re.compile(r"(?<!\\)\|")
BR_RE = re.compile(r"(?<!\\)<br\s*/?>", re.IGNORECASE)
ESCAPED_BR_RE = re.compile(r"\\(<br\s*/?>)", re.IGNORECASE)


def parse_markdown(text: str, options: ConvertOptions | None = None) -> list[SheetData]:
    """Split Markdown into sheets at level-2 headings and parse one table per block.

    Text before the first heading is ignored. Without any heading the whole
    document is a single sheet named after ``options.default_sheet_name``.
    Blocks whose table yields no rows produce no sheet.
    """
    opts = options or ConvertOptions()
    text = text.replace("\r\n", "\n")
    matches = list(HEADING_RE.finditer(text))

    if not matches:
        rows = parse_table(text)
        return [SheetData(name=opts.default_sheet_name, rows=rows)] if rows else []

    sheets: list[SheetData] = []
    for idx, match in enumerate(matches):
        end = matches[idx + 1].start() if idx + 1 < len(matches) else len(text)
        block = text[match.end() : end].strip()
        if not block:
            continue
        rows = parse_table(block)
        if not rows:
            logger.debug("No table rows under heading %r", match.group(1))
            continue
        name = match.group(1).strip().replace("/", opts.sheet_name_replacement)
        sheets.append(SheetData(name=name, rows=rows))
    return sheets


def parse_table(block: str) -> list[list[str]]:
    rows: list[list[str]] = []
    expected_cols = 0

    for raw_line in block.split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        if not (len(line) >= 2 and line.startswith("|") and line.endswith("|")):
            if rows:
                break
            continue

        raw_cells = [cell.strip() for cell in split_row(line)]
        if is_separator_row(raw_cells):
            continue

        values = [_unescape_cell(cell) for cell in raw_cells]
        if expected_cols == 0:
            expected_cols = len(values)
        rows.append(normalize_width(values, expected_cols))

    return rows


def split_row(line: str) -> list[str]:
    return UNESCAPED_PIPE_RE.split(line[1:-1])


def is_separator_row(cells: list[str]) -> bool:
    return all(SEPARATOR_CELL_RE.match(cell) and "-" in cell for cell in cells)


def normalize_width(values: list[str], width: int) -> list[str]:
    if len(values) < width:
        return values + [""] * (width - len(values))
    return values[:width]


def _unescape_cell(cell: str) -> str:
    # "\<br>" is a literal tag written by the renderer; a bare one is a line break
    unescaped = BR_RE.sub("\n", cell.replace("\\|", "|"))
    return ESCAPED_BR_RE.sub(r"\1", unescaped)


class MarkdownWorkbookReader:
    def __init__(self, source: str | Path, options: ConvertOptions | None = None) -> None:
        self.source = Path(source)
        self.options = options or ConvertOptions()

    def read(self) -> WorkbookData:
        try:
            text = self.source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise InputReadError(f"Cannot read Markdown file {self.source}: {exc}") from exc
        sheets = parse_markdown(text, self.options)
        logger.debug("Markdown %s: %d sheet(s)", self.source, len(sheets))
        return WorkbookData(sheets=sheets, source_path=self.source)
