"""Custom exceptions for lasedit."""

from __future__ import annotations


class LaseditError(Exception):
    """Base exception for all lasedit errors."""


class LASReadError(LaseditError):
    """Raised when a LAS file cannot be read (file not found, permissions)."""


class LASWriteError(LaseditError):
    """Raised when a LAS file cannot be written."""


class CurveEditError(LaseditError):
    """Base exception for rejected curve mutations.

    A mutation that raises leaves the document exactly as it was.
    """


class CurveNotFoundError(CurveEditError):
    """Raised when a mutation references a mnemonic absent from the document."""


class ProtectedCurveError(CurveEditError):
    """Raised when a mutation targets a protected mnemonic."""


class CurveCollisionError(CurveEditError):
    """Raised when a new name is already used by a different curve."""


class InvalidOperandError(CurveEditError):
    """Raised for malformed operator expressions or a zero divisor."""


class InvalidMnemonicError(CurveEditError):
    """Raised when a requested mnemonic is empty after sanitising."""
