from __future__ import annotations

import posixpath
import re

CELL_RE = re.compile(r"^\$?([A-Za-z]*)")
ESCAPE_RE = re.compile(r"_x([0-9A-Fa-f]{4})_")
ILLEGAL_XML_RE = re.compile(r"[\x00-\x08\x0b\x0c\r\x0e-\x1f\ufffe\uffff]")


def column_index_to_letters(index: int) -> str:
    if index < 0:
        raise ValueError("Column index must be >= 0")
    letters: list[str] = []
    value = index
    while value >= 0:
        letters.append(chr(65 + value % 26))
        value = value // 26 - 1
    return "".join(reversed(letters))


def cell_reference_to_column_index(ref: str) -> int:
    match = CELL_RE.match(ref.strip())
    letters = match.group(1).upper() if match else ""
    if not letters:
        raise ValueError(f"Invalid cell reference: {ref}")
    value = 0
    for char in letters:
        value = value * 26 + (ord(char) - 64)
    return value - 1


def cell_reference(row_index: int, col_index: int) -> str:
    if row_index < 0:
        raise ValueError("Row index must be >= 0")
    return f"{column_index_to_letters(col_index)}{row_index + 1}"


def resolve_target(base_path: str, target: str) -> str:
    if target.startswith("/"):
        return posixpath.normpath(target)[1:]
    joined = posixpath.normpath(posixpath.join(posixpath.dirname(base_path), target))
    if joined.startswith("/"):
        joined = joined[1:]
    return joined


def decode_ooxml_escapes(text: str) -> str:
    return ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), text)


def encode_ooxml_escapes(text: str) -> str:
    escaped = ESCAPE_RE.sub(lambda m: "_x005F" + m.group(0), text)
    return ILLEGAL_XML_RE.sub(lambda m: f"_x{ord(m.group(0)):04X}_", escaped)
