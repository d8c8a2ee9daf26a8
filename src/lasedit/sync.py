"""Keeps per-curve data and the row-major table in step.

Two entry points, both idempotent:

- ``sync_after_load`` distributes parsed rows into the curves;
- ``sync_after_mutation`` resizes the table to the curves after an edit,
  filling only cells the resize created.
"""

from __future__ import annotations

import logging
import warnings

from .models import CurveDefinition, LogDocument
from .numbers import Cell

logger = logging.getLogger(__name__)


def _cell_at(data: list[Cell], row: int) -> Cell:
    return data[row] if row < len(data) else None


def sync_after_load(doc: LogDocument) -> None:
    """Fit every row to the curve count and copy columns into curve data.

    Without a ~C section, curves are synthesized as CURVE1, CURVE2, ...
    from the width of the first row.
    """
    rows = doc.table
    if not doc.curves and rows:
        doc.curves = [CurveDefinition(mnemonic=f"CURVE{i + 1}") for i in range(len(rows[0]))]

    curve_count = len(doc.curves)
    truncated = 0
    for row in rows:
        if len(row) < curve_count:
            row.extend([None] * (curve_count - len(row)))
        elif len(row) > curve_count:
            del row[curve_count:]
            truncated += 1

    if truncated:
        warnings.warn(
            f"{truncated} data rows had more values than the {curve_count} defined curves. "
            "Extra values were dropped.",
            stacklevel=3,
        )

    for ci, curve in enumerate(doc.curves):
        curve.data = [row[ci] for row in rows]

    doc.reindex()


def sync_after_mutation(doc: LogDocument) -> None:
    """Resize the table to ``max(len(curve.data))`` rows of ``len(curves)`` cells.

    Cells that already exist are never overwritten, including assigned
    nulls. Cells created by the resize are filled from the curve data.
    Curve data shorter than the row count is null-padded.
    """
    curves = doc.curves
    curve_count = len(curves)
    row_count = max((len(c.data) for c in curves), default=0)
    table = doc.table

    if len(table) > row_count:
        del table[row_count:]

    for r in range(row_count):
        if r == len(table):
            table.append([])
        row = table[r]
        if len(row) > curve_count:
            del row[curve_count:]
        for ci in range(len(row), curve_count):
            row.append(_cell_at(curves[ci].data, r))

    for curve in curves:
        if len(curve.data) < row_count:
            curve.data.extend([None] * (row_count - len(curve.data)))

    doc.reindex()
    logger.debug("Synchronized %d curves over %d rows", curve_count, row_count)


def rebuild_rows(curves: list[CurveDefinition]) -> list[list[Cell]]:
    """Build a fresh row table from curve data alone (used for export)."""
    if not curves:
        return []
    row_count = max(len(c.data) for c in curves)
    return [[_cell_at(c.data, r) for c in curves] for r in range(row_count)]
