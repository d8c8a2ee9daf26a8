"""lasedit — read, edit and write LAS (Log ASCII Standard) well log files.

Public API:
    load_document()        — Parse LAS text into a LogDocument
    read_las_document()    — Read a LAS file from disk
    serialize_document()   — Render a LogDocument as LAS text
    write_las_document()   — Write a LogDocument to disk
    rename_curve()         — Rename a curve in place
    delete_curve()         — Remove a curve and its data column
    derive_curve()         — Create or overwrite a curve as source <op> constant
    apply_curve_edit()     — Edit a curve in place with a per-value function
    compute_petrophysical_curves() — Density porosity and Archie saturation
    compare_documents()    — Compare the curves of two documents
"""

from .compare import compare_documents
from .editing import (
    DEFAULT_PROTECTED,
    apply_curve_edit,
    delete_curve,
    delete_curves,
    derive_curve,
    rename_curve,
    sanitize_mnemonic,
)
from .exceptions import (
    CurveCollisionError,
    CurveEditError,
    CurveNotFoundError,
    InvalidMnemonicError,
    InvalidOperandError,
    LASReadError,
    LASWriteError,
    LaseditError,
    ProtectedCurveError,
)
from .models import (
    CurveDefinition,
    CurveSummary,
    Delimiter,
    DeriveOutcome,
    HeaderEntry,
    HeaderSection,
    LogDocument,
    RawSection,
    WrapMode,
)
from .operators import Operator, parse_operator_expr
from .petro import PetrophysicalParams, PetrophysicalResult, compute_petrophysical_curves
from .reader import load_document, read_las_document
from .writer import WriterOptions, serialize_document, write_las_document

__all__ = [
    # Loading and saving
    "load_document",
    "read_las_document",
    "serialize_document",
    "write_las_document",
    "WriterOptions",
    # Mutations
    "rename_curve",
    "delete_curve",
    "delete_curves",
    "derive_curve",
    "apply_curve_edit",
    "sanitize_mnemonic",
    "parse_operator_expr",
    "compute_petrophysical_curves",
    "DEFAULT_PROTECTED",
    "Operator",
    "PetrophysicalParams",
    "PetrophysicalResult",
    # Comparison
    "compare_documents",
    # Data models
    "LogDocument",
    "CurveDefinition",
    "CurveSummary",
    "HeaderEntry",
    "HeaderSection",
    "RawSection",
    "Delimiter",
    "WrapMode",
    "DeriveOutcome",
    # Exceptions
    "LaseditError",
    "LASReadError",
    "LASWriteError",
    "CurveEditError",
    "CurveNotFoundError",
    "ProtectedCurveError",
    "CurveCollisionError",
    "InvalidOperandError",
    "InvalidMnemonicError",
]
