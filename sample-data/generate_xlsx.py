#!/usr/bin/env python3
"""
Generates sample-data/schools_sample.xlsx, a workbook with the kind of noise
school exports usually carry, for exercising workbook ingestion.

Run from the repo root:
    python sample-data/generate_xlsx.py

Problems baked in:
  Sheet "בתי ספר"
    - Misspelled / reworded headers ("שם ביה״ס", "Principal Name", "students ")
    - A column with no catalog match ("קוד מוסד")
    - Numeric scores stored as numbers, one out-of-range score (7)
    - A date cell ("תאריך ביקור") rendered as day/month/year
    - A wholly blank row between data rows
    - A row with an empty school name
  Sheet "ארכיון"
    - Second sheet that must be ignored
"""

from datetime import datetime
from pathlib import Path

import openpyxl

OUTPUT = Path(__file__).parent / "schools_sample.xlsx"

HEADERS = [
    'שם ביה"ס',
    "Principal Name",
    "students ",
    "קוד מוסד",
    "חזון ברור - החזון ברור ומוסכם",
    "יעדים מדידים",
    "תאריך ביקור",
]

ROWS = [
    ["תיכון אופק", "דנה לוי", 420, 512345, 3, 2, datetime(2024, 3, 5)],
    [None, None, None, None, None, None, None],
    ["יסודי הדר", "רונית אברהם", 280, 498765, 4, 7, None],
    [None, "יוסי כהן", 310, 487654, 1, 1, datetime(2024, 11, 20)],
]


def build_workbook(output: Path = OUTPUT) -> Path:
    wb = openpyxl.Workbook()

    ws = wb.active
    ws.title = "בתי ספר"
    ws.append(HEADERS)
    for row in ROWS:
        ws.append(row)

    archive = wb.create_sheet("ארכיון")
    archive.append(["שם בית הספר", "מנהל/ת"])
    archive.append(["בית ספר ישן", "מנהל קודם"])

    output.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output)
    return output


if __name__ == "__main__":
    print(f"Created: {build_workbook()}")
