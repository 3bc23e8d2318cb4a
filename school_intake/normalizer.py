"""Project raw data rows onto the canonical school-record schema."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

from school_intake.catalog import CANONICAL_FIELDS, SCORE_FIELDS
from school_intake.config import PLACEHOLDER_NAME_TEMPLATE, VALID_SCORES
from school_intake.mapper import ColumnAssignment

logger = logging.getLogger(__name__)

_SCORE_FIELD_SET = frozenset(SCORE_FIELDS)


@dataclass(frozen=True)
class CanonicalRecord:
    """
    One school row. Every canonical field is present in ``values`` (empty string
    when the source had nothing for it); unmapped source columns live in
    ``passthrough`` and never leak into ``values``.

    Both mappings are read-only views. ``copy``, ``deepcopy`` and ``pickle``
    rebuild them as fresh read-only views; use ``as_dict()`` for a mutable copy.
    """

    id: int
    values: Mapping[str, str]
    passthrough: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __getattr__(self, item: str) -> str:
        values = self.__dict__.get("values")
        if values is not None and item in values:
            return values[item]
        raise AttributeError(f"{type(self).__name__!s} has no field {item!r}")

    def get(self, field_name: str, default: str = "") -> str:
        return self.values.get(field_name, default)

    def as_dict(self) -> dict[str, Any]:
        """Fresh, mutable copy: ``id`` plus every canonical field."""
        return {"id": self.id, **self.values}

    def to_payload(self) -> dict[str, Any]:
        return {"id": self.id, "values": dict(self.values), "passthrough": dict(self.passthrough)}

    def __reduce__(self):
        return _restore_record, (self.id, dict(self.values), dict(self.passthrough))


def _restore_record(record_id: int, values: dict[str, str], passthrough: dict[str, str]) -> CanonicalRecord:
    return CanonicalRecord(
        id=record_id,
        values=MappingProxyType(values),
        passthrough=MappingProxyType(passthrough),
    )


@dataclass
class NormalizedRow:
    position: int
    values: dict[str, str]
    passthrough: dict[str, str]

    def to_record(self, record_id: int) -> CanonicalRecord:
        return CanonicalRecord(
            id=record_id,
            values=MappingProxyType(dict(self.values)),
            passthrough=MappingProxyType(dict(self.passthrough)),
        )


def empty_values() -> dict[str, str]:
    return {name: "" for name in CANONICAL_FIELDS}


def placeholder_name(position: int) -> str:
    return PLACEHOLDER_NAME_TEMPLATE.format(position=position)


def coerce_score(text: str) -> Optional[str]:
    """Return the canonical score digit, ``""`` for blank, or None when unusable."""
    if not text or text in VALID_SCORES:
        return text
    try:
        number = float(text)
    except ValueError:
        return None
    if number.is_integer() and 1 <= number <= 4:
        return str(int(number))
    return None


def passthrough_labels(assignments: Sequence[ColumnAssignment]) -> dict[int, str]:
    """Side-table keys for unmapped columns; a repeated label gets its column number."""
    labels: dict[int, str] = {}
    used: set[str] = set()
    for assignment in assignments:
        if assignment.is_mapped:
            continue
        label = assignment.label.strip()
        if not label:
            continue
        if label in used:
            label = f"{label} [{assignment.position + 1}]"
        used.add(label)
        labels[assignment.position] = label
    return labels


def normalize_row(
    row: Sequence[Any],
    assignments: Sequence[ColumnAssignment],
    position: int,
    warnings: Optional[list[str]] = None,
    extra_labels: Optional[Mapping[int, str]] = None,
) -> NormalizedRow:
    if extra_labels is None:
        extra_labels = passthrough_labels(assignments)

    values = empty_values()
    passthrough: dict[str, str] = {}
    for assignment in assignments:
        index = assignment.position
        raw = row[index] if index < len(row) else ""
        text = "" if raw is None else str(raw).strip()

        if not assignment.is_mapped:
            if index in extra_labels:
                passthrough[extra_labels[index]] = text
            continue

        if assignment.field in _SCORE_FIELD_SET:
            score = coerce_score(text)
            if score is None:
                message = (
                    f"Row {position}: value {text!r} in '{assignment.header}' "
                    f"is not a score between 1 and 4; left empty"
                )
                logger.warning(message)
                if warnings is not None:
                    warnings.append(message)
                score = ""
            text = score
        values[assignment.field] = text

    if not values["name"]:
        values["name"] = placeholder_name(position)
    return NormalizedRow(position=position, values=values, passthrough=passthrough)


def normalize_rows(
    rows: Sequence[Sequence[Any]],
    assignments: Sequence[ColumnAssignment],
) -> tuple[list[NormalizedRow], list[str]]:
    """Normalize every row in order; positions are 1-based. Returns (rows, warnings)."""
    warnings: list[str] = []
    labels = passthrough_labels(assignments)
    normalized = [
        normalize_row(row, assignments, position, warnings, labels)
        for position, row in enumerate(rows, start=1)
    ]
    return normalized, warnings
