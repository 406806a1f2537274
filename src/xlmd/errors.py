from __future__ import annotations


class XlmdError(Exception):
    """Base class for every conversion failure raised by xlmd."""


class PackageOpenError(XlmdError):
    """The source is missing or is not a zip container."""


ContainerOpenError = PackageOpenError


class PartParseError(XlmdError):
    def __init__(self, part: str, message: str) -> None:
        super().__init__(f"{part}: {message}")
        self.part = part


class WorksheetPartError(PartParseError):
    """A single worksheet part is missing or malformed.

    The package reader downgrades this to a warning and skips the sheet
    unless strict worksheet handling is requested.
    """


class WriteIOError(XlmdError):
    pass


class InputReadError(XlmdError):
    pass


class UnsupportedConversionError(XlmdError):
    pass
