from .api import (
    convert_file,
    convert_markdown_to_xlsx,
    convert_xlsx_to_markdown,
    load_markdown,
    load_xlsx,
    parse_markdown_text,
    render_markdown,
    save_markdown,
    save_xlsx,
)
from .errors import (
    ContainerOpenError,
    InputReadError,
    PackageOpenError,
    PartParseError,
    UnsupportedConversionError,
    WorksheetPartError,
    WriteIOError,
    XlmdError,
)
from .model import ConvertOptions, SheetData, WorkbookData

__all__ = [
    "ConvertOptions",
    "SheetData",
    "WorkbookData",
    "load_xlsx",
    "save_xlsx",
    "load_markdown",
    "parse_markdown_text",
    "render_markdown",
    "save_markdown",
    "convert_xlsx_to_markdown",
    "convert_markdown_to_xlsx",
    "convert_file",
    "XlmdError",
    "PackageOpenError",
    "ContainerOpenError",
    "PartParseError",
    "WorksheetPartError",
    "WriteIOError",
    "InputReadError",
    "UnsupportedConversionError",
]
