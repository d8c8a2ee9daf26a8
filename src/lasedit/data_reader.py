"""ASCII data section reader for LAS files.

Handles both normal and wrapped modes. Rows are lists of floats with None
for cells that fail to parse; sentinel conversion is a separate pass that
runs once the null value is known. A trailing ``# ...`` on a data line is
a comment and is dropped before splitting.
"""

from __future__ import annotations

import logging
import re
import warnings

from .models import Delimiter, WrapMode
from .numbers import Cell, parse_cell
from .sections import is_blank_or_comment, strip_inline_comment

logger = logging.getLogger(__name__)

# Repeated separators collapse into one
SPLIT_PATTERNS: dict[Delimiter, re.Pattern[str]] = {
    Delimiter.SPACE: re.compile(r"\s+"),
    Delimiter.TAB: re.compile(r"\t+"),
    Delimiter.COMMA: re.compile(r",+"),
}


def split_data_line(line: str, delimiter: Delimiter) -> list[str]:
    """Split a trimmed data line into non-empty tokens."""
    return [token for token in SPLIT_PATTERNS[delimiter].split(line.strip()) if token]


def _data_tokens(lines: list[str], delimiter: Delimiter) -> list[list[str]]:
    tokens = []
    for line in lines:
        if is_blank_or_comment(line):
            continue
        parts = split_data_line(strip_inline_comment(line), delimiter)
        if parts:
            tokens.append(parts)
    return tokens


def read_ascii_rows(
    lines: list[str],
    delimiter: Delimiter,
    wrap_mode: WrapMode = WrapMode.ONE_LINE_PER_STEP,
    curve_count: int = 0,
) -> list[list[Cell]]:
    """Parse ~A section lines into rows of cells.

    Args:
        lines: Raw lines of the ~A section (comments allowed).
        delimiter: Resolved column delimiter.
        wrap_mode: WRAP flag from the ~V section.
        curve_count: Number of curves in ~C; needed to rejoin wrapped steps.

    Returns:
        One row per depth step. Rows may be ragged; the synchronizer pads
        or truncates them to the curve count.
    """
    token_lines = _data_tokens(lines, delimiter)

    if wrap_mode is WrapMode.WRAPPED and curve_count > 1 and _is_actually_wrapped(token_lines, curve_count):
        return _read_wrapped(token_lines, curve_count)

    return [[parse_cell(token) for token in parts] for parts in token_lines]


def _is_actually_wrapped(token_lines: list[list[str]], curve_count: int) -> bool:
    """Detect whether WRAP=YES data really spans several lines per step.

    Some exporters write WRAP=YES over one-line-per-step data. If the first
    data line already holds a value for every curve, the data is not wrapped.
    """
    if not token_lines:
        return False
    return len(token_lines[0]) < curve_count


def _read_wrapped(token_lines: list[list[str]], curve_count: int) -> list[list[Cell]]:
    """Rejoin wrapped data: every ``curve_count`` tokens make one row."""
    rows: list[list[Cell]] = []
    pending: list[Cell] = []
    for parts in token_lines:
        for token in parts:
            pending.append(parse_cell(token))
            if len(pending) == curve_count:
                rows.append(pending)
                pending = []

    if pending:
        warnings.warn(
            f"Wrapped mode: last depth step has {len(pending)} values "
            f"but expected {curve_count}. Missing values are treated as null.",
            stacklevel=3,
        )
        rows.append(pending)
    return rows


def convert_null_sentinels(rows: list[list[Cell]], null_value: float | None) -> int:
    """Replace cells strictly equal to the null sentinel with None.

    Returns:
        Number of cells replaced.
    """
    if null_value is None:
        return 0

    replaced = 0
    for row in rows:
        for i, value in enumerate(row):
            if value is not None and value == null_value:
                row[i] = None
                replaced += 1
    logger.debug("Converted %d null sentinel cells (%r)", replaced, null_value)
    return replaced
