"""Conversions between LAS number text, cells and numpy arrays."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

Cell = float | None


def parse_cell(token: str) -> Cell:
    """Parse a table token; anything unparsable or non-finite is null."""
    try:
        value = float(token)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_number(text: str) -> float | None:
    """Parse a header value as a finite float, or return None."""
    if not text or not text.strip():
        return None
    return parse_cell(text.strip())


def decimal_text(value: float) -> str:
    """Shortest text that reads back as ``value``.

    Integral values are written without a fractional part (``100``, not
    ``100.0``).
    """
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(float(value))


def format_cell(value: Cell, null_value: float | None, precision: int | None = None) -> str:
    """Format one table cell for output.

    Null and non-finite cells become the null sentinel, or ``NaN`` when the
    document has none.
    """
    if value is None or not math.isfinite(value):
        return decimal_text(null_value) if null_value is not None else "NaN"
    if precision is None:
        return decimal_text(value)
    text = f"{value:.{precision}f}"
    if text.startswith("-") and float(text) == 0.0:
        text = text[1:]
    return text


def cells_to_array(values: Iterable[Cell]) -> NDArray[np.float64]:
    return np.array([np.nan if v is None else v for v in values], dtype=np.float64)


def array_to_cells(values: Sequence[float] | NDArray[np.float64]) -> list[Cell]:
    """Convert an array back to cells, mapping NaN and infinities to null."""
    return [float(v) if math.isfinite(v) else None for v in values]
