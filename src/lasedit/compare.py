"""Document comparison, mainly for checking write/read round trips."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from .models import LogDocument

logger = logging.getLogger(__name__)


def compare_documents(
    doc1: LogDocument,
    doc2: LogDocument,
    rtol: float = 1e-7,
    atol: float = 0.0,
) -> bool:
    """Compare the curves of two documents.

    Curves are matched by position. Mnemonics and units must agree exactly
    (mnemonics ignoring case); data is compared with tolerance and nulls
    compare equal to each other.

    Args:
        doc1: First document.
        doc2: Second document.
        rtol: Relative tolerance for numpy array comparison.
        atol: Absolute tolerance for numpy array comparison.

    Returns:
        True if the curves are equivalent, False otherwise. The first
        difference found is logged at WARNING.
    """
    if len(doc1.curves) != len(doc2.curves):
        logger.warning("Curve count mismatch: %d vs %d", len(doc1.curves), len(doc2.curves))
        return False

    for c1, c2 in zip(doc1.curves, doc2.curves):
        if c1.mnemonic.upper() != c2.mnemonic.upper():
            logger.warning("Curve mnemonic mismatch: %r vs %r", c1.mnemonic, c2.mnemonic)
            return False
        if c1.unit != c2.unit:
            logger.warning("Unit mismatch at '%s': %r vs %r", c1.mnemonic, c1.unit, c2.unit)
            return False
        if not _compare_arrays(c1.to_array(), c2.to_array(), c1.mnemonic, rtol, atol):
            return False

    return True


def _compare_arrays(
    arr1: NDArray[np.float64],
    arr2: NDArray[np.float64],
    label: str,
    rtol: float,
    atol: float,
) -> bool:
    """Compare two numpy arrays with tolerance."""
    if arr1.size != arr2.size:
        logger.warning("Array size mismatch at '%s': %d vs %d", label, arr1.size, arr2.size)
        return False

    if not np.allclose(arr1, arr2, rtol=rtol, atol=atol, equal_nan=True):
        logger.warning("Array values mismatch at '%s'", label)
        return False

    return True
