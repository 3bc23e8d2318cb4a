"""
readers.py — turn raw file content into a header row plus raw data rows

Two variants share one output shape (``TabularSource``):
    read_delimited_text(text)      — CSV / TXT, delimiter auto-detected
    read_workbook(content, suffix) — XLSX / XLS, first sheet only

Cells are classified once at the boundary (``to_cell_value``) and rendered to
display text (``cell_text``) before anything downstream sees them.
"""

from __future__ import annotations

import codecs
import csv
import io
import logging
import math
import numbers
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional, Union

import pandas as pd

from school_intake.config import DELIMITER_CANDIDATES, WORKBOOK_DATE_FORMAT
from school_intake.errors import MalformedSource

logger = logging.getLogger(__name__)

LINE_BREAK_RE = re.compile(r"\r?\n")
QUOTE_CHARS = '"'


# ══════════════════════════════════════════════════════════════════════════════
# CELL VALUES
# ══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TextCell:
    value: str


@dataclass(frozen=True)
class NumberCell:
    value: Union[int, float]


@dataclass(frozen=True)
class DateCell:
    value: date


@dataclass(frozen=True)
class EmptyCell:
    pass


CellValue = Union[TextCell, NumberCell, DateCell, EmptyCell]


def to_cell_value(raw: Any) -> CellValue:
    if raw is None:
        return EmptyCell()
    if isinstance(raw, str):
        return TextCell(raw.replace("\x00", ""))
    if isinstance(raw, bool):
        return TextCell("TRUE" if raw else "FALSE")
    if isinstance(raw, (datetime, date)):
        if pd.isna(raw):
            return EmptyCell()
        return DateCell(raw)
    if isinstance(raw, numbers.Real):
        if pd.isna(raw):
            return EmptyCell()
        return NumberCell(raw)
    try:
        if pd.isna(raw):
            return EmptyCell()
    except (TypeError, ValueError):
        pass
    return TextCell(str(raw).replace("\x00", ""))


def cell_text(cell: CellValue) -> str:
    if isinstance(cell, EmptyCell):
        return ""
    if isinstance(cell, DateCell):
        return cell.value.strftime(WORKBOOK_DATE_FORMAT)
    if isinstance(cell, NumberCell):
        number = float(cell.value)
        if math.isfinite(number) and number.is_integer():
            return str(int(number))
        return str(cell.value)
    return cell.value


# ══════════════════════════════════════════════════════════════════════════════
# SOURCE SHAPE
# ══════════════════════════════════════════════════════════════════════════════

@dataclass
class TabularSource:
    headers: list[str]
    rows: list[list[str]]
    encoding: Optional[str] = None
    delimiter: Optional[str] = None
    sheet_name: Optional[str] = None
    warnings: list[str] = field(default_factory=list)


# ══════════════════════════════════════════════════════════════════════════════
# TEXT DECODING
# ══════════════════════════════════════════════════════════════════════════════

def detect_encoding(raw: bytes) -> str:
    """Best-guess encoding name from chardet; 'utf-8' when it cannot tell."""
    import chardet

    result = chardet.detect(raw)
    return result.get("encoding") or "utf-8"


def decode_text(raw: bytes) -> tuple[str, str]:
    """
    Decode raw bytes line-by-line.

    Strategy per line:
      1. Try UTF-8
      2. Try the chardet guess
      3. Try latin-1
      4. CP1252 with replace (never crashes)

    A UTF-8 byte-order mark is removed first and NUL bytes are dropped.
    Returns (text, encoding_name).
    """
    if raw.startswith(codecs.BOM_UTF8):
        raw = raw[len(codecs.BOM_UTF8):]
        encoding = "utf-8-sig"
    else:
        encoding = detect_encoding(raw)
    logger.debug("Detected text encoding %s", encoding)

    # Wide encodings cannot be split on a single newline byte.
    if encoding.upper().replace("-", "").startswith(("UTF16", "UTF32")):
        return raw.decode(encoding, errors="replace").replace("\x00", ""), encoding

    decoded_lines: list[str] = []
    for raw_line in raw.split(b"\n"):
        decoded: Optional[str] = None
        for enc in ("utf-8", encoding, "latin-1"):
            try:
                decoded = raw_line.decode(enc)
                break
            except (LookupError, UnicodeDecodeError):
                continue
        if decoded is None:
            decoded = raw_line.decode("cp1252", errors="replace")
        decoded_lines.append(decoded.replace("\x00", ""))
    return "\n".join(decoded_lines), encoding


# ══════════════════════════════════════════════════════════════════════════════
# DELIMITED TEXT
# ══════════════════════════════════════════════════════════════════════════════

def detect_delimiter(header_line: str) -> str:
    """Pick the candidate that splits the header line into the most segments."""
    best = DELIMITER_CANDIDATES[0]
    best_count = len(header_line.split(best))
    for candidate in DELIMITER_CANDIDATES[1:]:
        count = len(header_line.split(candidate))
        if count > best_count:
            best, best_count = candidate, count
    return best


def _clean_cell(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] in QUOTE_CHARS and value[-1] == value[0]:
        value = value[1:-1].strip()
    return value


def split_line(line: str, delimiter: str) -> list[str]:
    try:
        fields = next(csv.reader([line], delimiter=delimiter), [])
    except csv.Error as exc:
        # A lone carriage return inside a cell is content, not a row break.
        logger.debug("Falling back to a plain split for %r: %s", line, exc)
        fields = line.split(delimiter)
    return [_clean_cell(value) for value in fields]


def read_delimited_text(text: str) -> TabularSource:
    if text.startswith("\ufeff"):
        text = text[1:]

    lines = [line for line in LINE_BREAK_RE.split(text) if line.strip()]
    if len(lines) < 2:
        raise MalformedSource(
            "a CSV file needs a header row and at least one data row "
            f"(found {len(lines)} non-blank line{'s' if len(lines) != 1 else ''})"
        )

    delimiter = detect_delimiter(lines[0])
    logger.debug("Detected delimiter %r", delimiter)
    headers = split_line(lines[0], delimiter)
    rows = [split_line(line, delimiter) for line in lines[1:]]
    return TabularSource(headers=headers, rows=rows, delimiter=delimiter)


# ══════════════════════════════════════════════════════════════════════════════
# WORKBOOKS
# ══════════════════════════════════════════════════════════════════════════════

def _workbook_handle(content: Union[bytes, str, Path]):
    if isinstance(content, (bytes, bytearray)):
        return io.BytesIO(content)
    return content


def read_workbook(content: Union[bytes, str, Path], suffix: str) -> TabularSource:
    """
    Read the first sheet of an .xlsx/.xls workbook.

    Every cell is rendered to its display text (dates as day/month/year,
    integral numbers without a decimal part). Wholly blank rows are dropped
    before the header row is chosen.
    """
    suffix = suffix.lower().lstrip(".")

    # .xls requires xlrd; give a clear error if missing.
    if suffix == "xls":
        try:
            import xlrd  # noqa: F401
        except ImportError:
            raise ImportError(
                ".xls files require xlrd — run: pip install xlrd"
            )

    try:
        with pd.ExcelFile(_workbook_handle(content)) as xf:
            sheet_names = list(xf.sheet_names)
            if not sheet_names:
                raise MalformedSource("the workbook contains no sheets")
            sheet_name = sheet_names[0]
            frame = xf.parse(
                sheet_name,
                header=None,
                dtype=object,
                keep_default_na=False,
                na_filter=False,
            )
    except MalformedSource:
        raise
    except Exception as exc:
        raise ValueError(f"Could not read workbook: {exc}") from exc

    rendered: list[list[str]] = []
    blank_rows = 0
    for raw_row in frame.itertuples(index=False, name=None):
        cells = [cell_text(to_cell_value(value)).strip() for value in raw_row]
        if not any(cells):
            blank_rows += 1
            continue
        rendered.append(cells)
    if blank_rows:
        logger.debug("Dropped %d blank row(s) from sheet %r", blank_rows, sheet_name)

    if len(rendered) < 2:
        raise MalformedSource(
            "an Excel file needs a header row and at least one data row "
            f"(found {len(rendered)} non-blank row{'s' if len(rendered) != 1 else ''} "
            f"in sheet '{sheet_name}')"
        )

    warnings: list[str] = []
    if len(sheet_names) > 1:
        warnings.append(
            f"Multiple sheets found ({len(sheet_names)} total); "
            f"used '{sheet_name}'. Ignored: {sheet_names[1:]}"
        )

    return TabularSource(
        headers=rendered[0],
        rows=rendered[1:],
        sheet_name=str(sheet_name),
        warnings=warnings,
    )
