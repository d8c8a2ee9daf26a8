"""Curve mutations: rename, delete, arithmetic derive and per-value edits.

Every operation validates its inputs before touching the document, so a
raised ``CurveEditError`` leaves the document unchanged. Structural changes
finish with a synchronizer pass.

Protected mnemonics (depth curves and curves other derivations depend on)
cannot be renamed, deleted, edited or overwritten as a derive destination.
They can still be used as a derive source.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Iterable

from .exceptions import (
    CurveCollisionError,
    CurveNotFoundError,
    InvalidMnemonicError,
    ProtectedCurveError,
)
from .models import CurveDefinition, DeriveOutcome, LogDocument
from .numbers import Cell
from .operators import Operator, apply_operator, parse_operator_expr
from .sync import sync_after_mutation

logger = logging.getLogger(__name__)

DEFAULT_PROTECTED: frozenset[str] = frozenset({"DEPT", "DEPTH", "DPHIX"})


def sanitize_mnemonic(text: str) -> str:
    """Normalise a user-supplied name: upper-case, spaces to ``_``, [A-Z0-9_] only."""
    name = re.sub(r"\s+", "_", text.strip().upper())
    return re.sub(r"[^A-Z0-9_]", "", name)


def is_protected(mnemonic: str, protected: Iterable[str]) -> bool:
    key = mnemonic.upper()
    return any(p.upper() == key for p in protected)


def _require_mnemonic(text: str) -> str:
    name = sanitize_mnemonic(text)
    if not name:
        raise InvalidMnemonicError(f"Invalid curve name: {text!r}")
    return name


def _require_curve(doc: LogDocument, mnemonic: str) -> int:
    idx = doc.curve_index(mnemonic)
    if idx is None:
        raise CurveNotFoundError(f"Curve not found: {mnemonic}")
    return idx


def _write_column(doc: LogDocument, idx: int) -> None:
    data = doc.curves[idx].data
    for r, row in enumerate(doc.table):
        row[idx] = data[r]


def rename_curve(
    doc: LogDocument,
    old_mnemonic: str,
    new_mnemonic: str,
    protected: Iterable[str] = DEFAULT_PROTECTED,
) -> None:
    """Rename a curve; its data and column position are untouched.

    Renaming to the same name (ignoring case) is a no-op.

    Raises:
        CurveNotFoundError: ``old_mnemonic`` matches no curve.
        ProtectedCurveError: ``old_mnemonic`` is protected.
        InvalidMnemonicError: ``new_mnemonic`` is empty after sanitising.
        CurveCollisionError: another curve already uses ``new_mnemonic``.
    """
    idx = _require_curve(doc, old_mnemonic)
    if is_protected(old_mnemonic, protected):
        raise ProtectedCurveError(f"Cannot rename protected curve: {old_mnemonic}")

    new_name = _require_mnemonic(new_mnemonic)
    curve = doc.curves[idx]
    if new_name.upper() == curve.mnemonic.upper():
        return

    other = doc.curve_index(new_name)
    if other is not None and other != idx:
        raise CurveCollisionError(f'A curve named "{new_name}" already exists')

    old_name = curve.mnemonic
    curve.mnemonic = new_name
    doc.reindex()
    logger.info("Renamed curve %s to %s", old_name, new_name)


def delete_curve(
    doc: LogDocument,
    mnemonic: str,
    protected: Iterable[str] = DEFAULT_PROTECTED,
) -> bool:
    """Remove a curve and its column from every row.

    Returns:
        True if a curve was removed, False if ``mnemonic`` matched nothing.

    Raises:
        ProtectedCurveError: ``mnemonic`` is protected.
    """
    if is_protected(mnemonic, protected):
        raise ProtectedCurveError(f"Cannot delete protected curve: {mnemonic}")

    idx = doc.curve_index(mnemonic)
    if idx is None:
        return False

    removed = doc.curves.pop(idx)
    for row in doc.table:
        if len(row) > idx:
            del row[idx]
    sync_after_mutation(doc)
    logger.info("Deleted curve %s (column %d)", removed.mnemonic, idx)
    return True


def delete_curves(
    doc: LogDocument,
    mnemonics: Iterable[str],
    protected: Iterable[str] = DEFAULT_PROTECTED,
) -> list[str]:
    """Delete several curves, skipping protected and unknown names.

    Returns:
        The names that were deleted, in request order.
    """
    protected = tuple(protected)
    deleted = []
    for mnemonic in mnemonics:
        if is_protected(mnemonic, protected):
            logger.debug("Skipping protected curve %s", mnemonic)
            continue
        if delete_curve(doc, mnemonic, protected):
            deleted.append(mnemonic)
    return deleted


def upsert_curve(
    doc: LogDocument,
    mnemonic: str,
    values: list[Cell],
    template: CurveDefinition,
    description: str,
    unit: str | None = None,
    keep_metadata: bool = False,
) -> DeriveOutcome:
    """Overwrite the data of curve ``mnemonic`` in place, or append it.

    A new curve takes api/code (and the unit, unless given) from
    ``template``. An existing curve keeps its identity and column; it takes
    the new description, and a unit only when it has none. With
    ``keep_metadata`` an existing curve gets new data and nothing else. The
    destination column is then written into every row.
    """
    idx = doc.curve_index(mnemonic)
    if idx is None:
        doc.curves.append(
            CurveDefinition(
                mnemonic=mnemonic,
                unit=template.unit if unit is None else unit,
                api_code=template.api_code,
                code=template.code,
                description=description,
                data=values,
            )
        )
        idx = len(doc.curves) - 1
        outcome = DeriveOutcome.CREATED
    else:
        curve = doc.curves[idx]
        curve.data = values
        if not keep_metadata:
            curve.unit = curve.unit or (template.unit if unit is None else unit)
            curve.description = description
        outcome = DeriveOutcome.OVERWRITTEN

    sync_after_mutation(doc)
    _write_column(doc, idx)
    return outcome


def derive_curve(
    doc: LogDocument,
    source_mnemonic: str,
    destination_mnemonic: str | None,
    operator: Operator | str,
    protected: Iterable[str] = DEFAULT_PROTECTED,
) -> DeriveOutcome:
    """Create or overwrite a curve as ``source <op> constant``.

    Args:
        doc: Document to edit in place.
        source_mnemonic: Curve to read from.
        destination_mnemonic: Name of the result; ``None`` means
            ``NEW_<source>``. An existing curve of that name is overwritten
            in place, otherwise the curve is appended.
        operator: An ``Operator`` or expression text such as ``"*2"``.
        protected: Names that may not be overwritten.

    Returns:
        ``DeriveOutcome.CREATED`` or ``DeriveOutcome.OVERWRITTEN``.

    Raises:
        InvalidOperandError: Malformed expression or division by zero.
        CurveNotFoundError: ``source_mnemonic`` matches no curve.
        InvalidMnemonicError: The destination name is empty after sanitising.
        ProtectedCurveError: The destination exists and is protected.
    """
    if not isinstance(operator, Operator):
        operator = parse_operator_expr(operator)

    source = doc.curves[_require_curve(doc, source_mnemonic)]
    if destination_mnemonic is None:
        destination_mnemonic = f"NEW_{source.mnemonic}"
    destination = _require_mnemonic(destination_mnemonic)

    existing = doc.get_curve(destination)
    if existing is not None and is_protected(existing.mnemonic, protected):
        raise ProtectedCurveError(f"Cannot overwrite protected curve: {existing.mnemonic}")

    values = apply_operator(source.data, operator)
    outcome = upsert_curve(
        doc,
        destination,
        values,
        template=source,
        description=f"Derived from {source.mnemonic} by {operator}",
    )
    logger.info("Derived %s from %s by %s (%s)", destination, source.mnemonic, operator, outcome.value)
    return outcome


def _edited_cell(value: float | None) -> Cell:
    if value is None:
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def apply_curve_edit(
    doc: LogDocument,
    mnemonic: str,
    fn: Callable[[Cell, int, list[Cell] | None], float | None],
    protected: Iterable[str] = DEFAULT_PROTECTED,
) -> None:
    """Edit a curve in place by mapping ``fn`` over its values.

    ``fn`` is called as ``fn(value, index, row)`` where ``row`` is a copy of
    the table row at ``index`` (None past the end of the table). Results
    that are None, NaN or infinite become null cells. All results are
    computed before the document is touched, so an exception raised by
    ``fn`` leaves it unchanged.

    Raises:
        CurveNotFoundError: ``mnemonic`` matches no curve.
        ProtectedCurveError: ``mnemonic`` is protected.
    """
    idx = _require_curve(doc, mnemonic)
    curve = doc.curves[idx]
    if is_protected(curve.mnemonic, protected):
        raise ProtectedCurveError(f"Cannot edit protected curve: {curve.mnemonic}")

    table = doc.table
    values = [
        _edited_cell(fn(value, i, list(table[i]) if i < len(table) else None))
        for i, value in enumerate(curve.data)
    ]

    curve.data = values
    sync_after_mutation(doc)
    _write_column(doc, idx)
    logger.info("Edited %d values of curve %s", len(values), curve.mnemonic)
