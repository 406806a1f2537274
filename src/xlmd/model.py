from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Union


@dataclass(slots=True)
class ConvertOptions:
    strict_worksheets: bool = False
    default_sheet_name: str = "Sheet1"
    sheet_name_replacement: str = "-"


@dataclass(slots=True)
class SheetData:
    name: str
    rows: list[list[str]] = field(default_factory=list)


@dataclass(slots=True)
class WorkbookData:
    sheets: list[SheetData] = field(default_factory=list)
    source_path: Path | None = None
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class SharedStringRef:
    index: int


@dataclass(frozen=True, slots=True)
class InlineValue:
    text: str


CellPayload = Union[SharedStringRef, InlineValue]


@dataclass(slots=True)
class SharedStringTable:
    """Unique non-empty cell strings in first-seen order.

    A table is built for a single write call and handed to every part that
    needs it; nothing keeps it afterwards.
    """

    values: list[str] = field(default_factory=list)
    lookup: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_sheets(cls, sheets: Iterable[SheetData]) -> SharedStringTable:
        table = cls()
        for sheet in sheets:
            for row in sheet.rows:
                for value in row:
                    if value:
                        table.add(value)
        return table

    def add(self, value: str) -> int:
        idx = self.lookup.get(value)
        if idx is None:
            idx = len(self.values)
            self.lookup[value] = idx
            self.values.append(value)
        return idx

    def index_of(self, value: str) -> int:
        return self.lookup[value]

    def __len__(self) -> int:
        return len(self.values)
