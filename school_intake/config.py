"""Shared constants for school-intake ingestion."""

from __future__ import annotations

import os

SIMILARITY_THRESHOLD = 0.7

# Tie-break order: comma, then semicolon, then tab.
DELIMITER_CANDIDATES = (",", ";", "\t")

TEXT_FORMATS = {"csv", "txt"}
WORKBOOK_FORMATS = {"xlsx", "xls"}
ALL_FORMATS = TEXT_FORMATS | WORKBOOK_FORMATS

MIME_TYPES = {
    "csv": "text/csv",
    "txt": "text/plain",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "xls": "application/vnd.ms-excel",
}

WORKBOOK_DATE_FORMAT = "%d/%m/%Y"

PLACEHOLDER_NAME_TEMPLATE = "בית ספר {position}"

VALID_SCORES = ("1", "2", "3", "4")

LOG_LEVEL_ENV = "SCHOOL_INTAKE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def default_log_level() -> str:
    return os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
