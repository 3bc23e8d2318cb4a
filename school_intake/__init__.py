"""Header-to-schema reconciliation for school spreadsheet exports."""

from school_intake.catalog import CANONICAL_FIELDS, FIELD_CATALOG, SCORE_FIELDS, FieldDefinition
from school_intake.errors import (
    EmptyResult,
    IngestError,
    InternalParseError,
    MalformedSource,
    UnsupportedFormat,
)
from school_intake.ingest import ParsedResult, SourceMetadata, ingest_bytes, ingest_file
from school_intake.mapper import ColumnAssignment, map_headers
from school_intake.normalizer import CanonicalRecord
from school_intake.similarity import similarity

__version__ = "0.1.0"

__all__ = [
    "CANONICAL_FIELDS",
    "FIELD_CATALOG",
    "SCORE_FIELDS",
    "CanonicalRecord",
    "ColumnAssignment",
    "EmptyResult",
    "FieldDefinition",
    "IngestError",
    "InternalParseError",
    "MalformedSource",
    "ParsedResult",
    "SourceMetadata",
    "UnsupportedFormat",
    "ingest_bytes",
    "ingest_file",
    "map_headers",
    "similarity",
]
