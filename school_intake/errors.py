"""Error taxonomy surfaced by ingestion.

Format errors (``UnsupportedFormat``) and structural errors
(``MalformedSource``, ``EmptyResult``) are always fatal to the call.
Anything unexpected raised while reading or normalizing a source is wrapped
into ``InternalParseError`` with the original message kept.
"""

from __future__ import annotations


class IngestError(Exception):
    code = "ingest_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnsupportedFormat(IngestError):
    code = "unsupported_format"

    def __init__(self, extension: str) -> None:
        shown = f".{extension}" if extension else "[missing extension]"
        super().__init__(
            f"Unsupported file type '{shown}'. Upload a CSV or Excel file "
            "(.csv, .txt, .xlsx, .xls)."
        )
        self.extension = extension


class MalformedSource(IngestError):
    code = "malformed_source"

    def __init__(self, reason: str) -> None:
        super().__init__(f"Malformed source: {reason}")
        self.reason = reason


class EmptyResult(IngestError):
    code = "empty_result"

    def __init__(self) -> None:
        super().__init__("No data rows were found in the file.")


class InternalParseError(IngestError):
    code = "internal_parse_error"

    def __init__(self, message: str) -> None:
        super().__init__(f"An error occurred while parsing the file: {message}")
        self.detail = message
