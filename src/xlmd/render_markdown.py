from __future__ import annotations

import re
from pathlib import Path
from typing import Sequence

from .errors import WriteIOError
from .model import SheetData

LITERAL_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)


def render_workbook_markdown(sheets: Sequence[SheetData]) -> str:
    lines: list[str] = []
    for sheet in sheets:
        if not sheet.rows:
            continue
        lines.append(f"## {sheet.name}")
        lines.append("")
        lines.extend(render_table(sheet.rows))
        lines.append("")
    return "".join(line + "\n" for line in lines)


def render_table(rows: Sequence[Sequence[str]]) -> list[str]:
    """Header, separator and body lines for one sheet.

    Every row is padded to the longest row of the sheet, unlike the package
    writer which sizes each row on its own.
    """
    col_count = max(len(row) for row in rows)
    padded = [list(row) + [""] * (col_count - len(row)) for row in rows]

    lines = [_table_row(padded[0])]
    lines.append("|" + " --- |" * col_count)
    lines.extend(_table_row(row) for row in padded[1:])
    return lines


def write_workbook_markdown(sheets: Sequence[SheetData], destination: str | Path) -> None:
    path = Path(destination)
    try:
        path.write_text(render_workbook_markdown(sheets), encoding="utf-8")
    except OSError as exc:
        raise WriteIOError(f"Failed to write Markdown {path}: {exc}") from exc


def _table_row(values: Sequence[str]) -> str:
    return "| " + " | ".join(_esc(value) for value in values) + " |"


def _esc(value: str) -> str:
    value = LITERAL_BR_RE.sub(lambda m: "\\" + m.group(0), value)
    return value.replace("|", "\\|").replace("\r\n", "\n").replace("\n", "<br>")
