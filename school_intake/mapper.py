"""Greedy header-to-field reconciliation against the field catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from school_intake.catalog import FIELD_CATALOG, FieldDefinition
from school_intake.config import SIMILARITY_THRESHOLD
from school_intake.similarity import similarity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnAssignment:
    position: int
    header: Any
    field: Optional[str] = None
    score: float = 0.0

    @property
    def is_mapped(self) -> bool:
        return self.field is not None

    @property
    def label(self) -> str:
        """Canonical field when mapped, otherwise the original header text."""
        if self.field is not None:
            return self.field
        return "" if self.header is None else str(self.header)


def map_headers(
    headers: Iterable[Any],
    catalog: tuple[FieldDefinition, ...] = FIELD_CATALOG,
    threshold: float = SIMILARITY_THRESHOLD,
) -> list[ColumnAssignment]:
    """
    Assign at most one header to each canonical field, in header order.

    A header claims the best-scoring field that no earlier header has claimed,
    provided the score reaches ``threshold``. Ties go to the earlier catalog
    entry; contention between headers goes to the earlier column, even when a
    later column would score higher.
    """
    claimed: set[str] = set()
    assignments: list[ColumnAssignment] = []

    for position, header in enumerate(headers):
        if not isinstance(header, str) or not header.strip():
            assignments.append(ColumnAssignment(position, header))
            continue

        best_field: Optional[str] = None
        best_score = 0.0
        for definition in catalog:
            if definition.field in claimed:
                continue
            for variation in definition.variations:
                score = similarity(header, variation)
                if score > best_score:
                    best_field, best_score = definition.field, score

        if best_field is not None and best_score >= threshold:
            claimed.add(best_field)
            logger.debug("Column %d %r -> %s (score %.3f)", position, header, best_field, best_score)
            assignments.append(ColumnAssignment(position, header, best_field, best_score))
        else:
            logger.info("Column %d %r left unmapped (best score %.3f)", position, header, best_score)
            assignments.append(ColumnAssignment(position, header, None, best_score))

    return assignments
