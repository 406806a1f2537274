from __future__ import annotations

from ..model import SheetData


def parse_delimited(text: str, name: str = "Sheet1") -> SheetData:
    """Rows copied out of a spreadsheet: tab-separated, or comma-separated as a fallback.

    Reading stops at the first blank line, so a paste can be terminated by
    pressing enter twice.
    """
    rows: list[list[str]] = []
    for line in text.replace("\r\n", "\n").split("\n"):
        if not line.strip():
            break
        cells = line.split("\t")
        if len(cells) == 1:
            cells = line.split(",")
        rows.append(cells)
    return SheetData(name=name, rows=rows)
