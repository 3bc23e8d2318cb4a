"""
ingest.py — end-to-end ingestion of a school spreadsheet export

Public API:
    result = ingest_file("path/to/schools.xlsx")
    result = ingest_bytes(content, "schools.csv")

Both return a ``ParsedResult`` or raise one of the ``school_intake.errors``
kinds; no lower-level exception escapes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Optional, Union

from school_intake.config import ALL_FORMATS, MIME_TYPES, TEXT_FORMATS
from school_intake.errors import EmptyResult, IngestError, InternalParseError, UnsupportedFormat
from school_intake.mapper import ColumnAssignment, map_headers
from school_intake.normalizer import CanonicalRecord, normalize_rows, passthrough_labels
from school_intake.readers import TabularSource, decode_text, read_delimited_text, read_workbook

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceMetadata:
    file_name: str
    file_type: str
    source_format: str
    columns: tuple[str, ...]
    mapped_fields: tuple[str, ...] = ()
    unmapped_columns: tuple[str, ...] = ()
    encoding: Optional[str] = None
    delimiter: Optional[str] = None
    sheet_name: Optional[str] = None
    warnings: tuple[str, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        return {
            "file_name": self.file_name,
            "file_type": self.file_type,
            "source_format": self.source_format,
            "columns": list(self.columns),
            "mapped_fields": list(self.mapped_fields),
            "unmapped_columns": list(self.unmapped_columns),
            "encoding": self.encoding,
            "delimiter": self.delimiter,
            "sheet_name": self.sheet_name,
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class ParsedResult:
    records: tuple[CanonicalRecord, ...]
    metadata: SourceMetadata

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[CanonicalRecord]:
        return iter(self.records)

    def to_payload(self) -> dict[str, Any]:
        return {
            "records": [record.to_payload() for record in self.records],
            "metadata": self.metadata.to_payload(),
        }


def resolve_format(file_name: str) -> str:
    """Lower-cased extension of ``file_name``; raises UnsupportedFormat when unknown."""
    suffix = Path(file_name).suffix.lower().lstrip(".")
    if suffix not in ALL_FORMATS:
        raise UnsupportedFormat(suffix)
    return suffix


def _read_source(content: bytes, source_format: str) -> TabularSource:
    if source_format in TEXT_FORMATS:
        text, encoding = decode_text(content)
        source = read_delimited_text(text)
        source.encoding = encoding
        return source
    return read_workbook(content, source_format)


def _build_result(
    file_name: str,
    source_format: str,
    source: TabularSource,
    assignments: list[ColumnAssignment],
) -> ParsedResult:
    normalized, cell_warnings = normalize_rows(source.rows, assignments)
    if not normalized:
        raise EmptyResult()

    records = tuple(row.to_record(index + 1) for index, row in enumerate(normalized))
    metadata = SourceMetadata(
        file_name=file_name,
        file_type=MIME_TYPES.get(source_format, "N/A"),
        source_format=source_format,
        columns=tuple(assignment.label for assignment in assignments),
        mapped_fields=tuple(assignment.field for assignment in assignments if assignment.is_mapped),
        unmapped_columns=tuple(passthrough_labels(assignments).values()),
        encoding=source.encoding,
        delimiter=source.delimiter,
        sheet_name=source.sheet_name,
        warnings=tuple(source.warnings + cell_warnings),
    )
    return ParsedResult(records=records, metadata=metadata)


def ingest_bytes(content: bytes, file_name: str) -> ParsedResult:
    source_format = resolve_format(file_name)
    try:
        source = _read_source(content, source_format)
        assignments = map_headers(source.headers)
        result = _build_result(file_name, source_format, source, assignments)
    except IngestError:
        raise
    except Exception as exc:
        logger.exception("Internal parsing error for %s", file_name)
        raise InternalParseError(str(exc) or type(exc).__name__) from exc

    mapped = sum(1 for assignment in assignments if assignment.is_mapped)
    logger.info(
        "Ingested %s: %d record(s), %d/%d column(s) mapped",
        file_name,
        len(result),
        mapped,
        len(assignments),
    )
    return result


def ingest_file(path: Union[str, Path]) -> ParsedResult:
    path = Path(path)
    resolve_format(path.name)
    try:
        content = path.read_bytes()
    except OSError as exc:
        logger.exception("Could not read %s", path)
        raise InternalParseError(f"Could not read file {path}: {exc}") from exc
    return ingest_bytes(content, path.name)
