"""Data models for the in-memory LAS log document.

A ``LogDocument`` keeps two views of the numeric table: the per-curve
``data`` columns and the row-major ``table``. ``lasedit.sync`` is the only
code that reconciles them after a resize.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple

import numpy as np
from numpy.typing import NDArray

from .numbers import Cell, cells_to_array


class Delimiter(Enum):
    """Column delimiter of the ~A section."""

    SPACE = "SPACE"
    TAB = "TAB"
    COMMA = "COMMA"

    @property
    def char(self) -> str:
        """Character used to join cells on output."""
        return {"SPACE": " ", "TAB": "\t", "COMMA": ","}[self.value]

    @classmethod
    def from_name(cls, text: str | None) -> Delimiter | None:
        """Map a DLM value such as ``comma`` to a delimiter, or None."""
        if not text:
            return None
        try:
            return cls(text.strip().upper())
        except ValueError:
            return None


class WrapMode(Enum):
    """WRAP flag of the ~V section."""

    ONE_LINE_PER_STEP = "NO"
    WRAPPED = "YES"

    @classmethod
    def from_flag(cls, text: str) -> WrapMode:
        if text.strip().upper() == "YES":
            return cls.WRAPPED
        return cls.ONE_LINE_PER_STEP


class DeriveOutcome(Enum):
    """Which branch a derive operation took for its destination curve."""

    CREATED = "created"
    OVERWRITTEN = "overwritten"


@dataclass
class HeaderEntry:
    """Single ``MNEM.UNIT VALUE : DESCRIPTION`` line of a header section."""

    mnemonic: str
    unit: str = ""
    value: str = ""
    description: str = ""


@dataclass
class HeaderSection:
    """Ordered key-value section (~W or ~P) with case-insensitive keys.

    Values are kept as the raw strings found in the file.
    """

    entries: dict[str, HeaderEntry] = field(default_factory=dict)

    def add(self, entry: HeaderEntry) -> None:
        self.entries[entry.mnemonic.upper()] = entry

    def __getitem__(self, key: str) -> HeaderEntry:
        return self.entries[key.upper()]

    def __contains__(self, key: str) -> bool:
        return key.upper() in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key: str) -> HeaderEntry | None:
        return self.entries.get(key.upper())

    def get_value(self, key: str, default: str = "") -> str:
        entry = self.get(key)
        return entry.value if entry is not None else default

    def to_dict(self) -> dict[str, str]:
        """Convert to a plain mnemonic -> value dict."""
        return {entry.mnemonic: entry.value for entry in self.entries.values()}


@dataclass
class RawSection:
    """A ``~`` section exactly as it appeared in the source text."""

    name: str
    header_line: str = ""
    lines: list[str] = field(default_factory=list)


@dataclass
class CurveDefinition:
    """One curve: ~C metadata plus its column of values.

    ``data[i]`` is None where the log has no measurement.
    """

    mnemonic: str
    unit: str = ""
    api_code: str = ""
    code: str = ""
    description: str = ""
    data: list[Cell] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.data)

    def to_array(self) -> NDArray[np.float64]:
        """Return the data as a float64 array with NaN for null."""
        return cells_to_array(self.data)

    def to_dict(self) -> dict[str, Any]:
        return {
            "mnemonic": self.mnemonic,
            "unit": self.unit,
            "api_code": self.api_code,
            "code": self.code,
            "description": self.description,
        }


class CurveSummary(NamedTuple):
    """Read-only view of a curve for selector lists."""

    mnemonic: str
    unit: str
    length: int


@dataclass
class LogDocument:
    """Complete editable LAS document.

    Invariants kept by the parser, ``lasedit.sync`` and ``lasedit.editing``:

    - every row of ``table`` has ``len(curves)`` cells;
    - every curve's ``data`` has ``len(table)`` values;
    - no cell equals ``null_value``; missing measurements are None.
    """

    version: str = "2.0"
    wrap_mode: WrapMode = WrapMode.ONE_LINE_PER_STEP
    delimiter: Delimiter = Delimiter.SPACE
    null_value: float | None = None
    sections: dict[str, RawSection] = field(default_factory=dict)
    well: HeaderSection = field(default_factory=HeaderSection)
    parameters: HeaderSection = field(default_factory=HeaderSection)
    curves: list[CurveDefinition] = field(default_factory=list)
    table: list[list[Cell]] = field(default_factory=list)
    line_ending: str = "\n"
    source_file: str = ""
    encoding: str = "utf-8"

    _index: dict[str, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.reindex()

    def reindex(self) -> None:
        """Rebuild the upper-cased mnemonic -> index lookup.

        Duplicate mnemonics resolve to the first curve carrying them.
        """
        index: dict[str, int] = {}
        for i, curve in enumerate(self.curves):
            index.setdefault(curve.mnemonic.upper(), i)
        self._index = index

    def curve_index(self, mnemonic: str) -> int | None:
        """Return the column index of a curve (case-insensitive), or None."""
        key = mnemonic.upper()
        idx = self._index.get(key)
        # Curves edited outside lasedit.editing leave the lookup stale.
        if idx is None or idx >= len(self.curves) or self.curves[idx].mnemonic.upper() != key:
            self.reindex()
            idx = self._index.get(key)
        return idx

    def get_curve(self, mnemonic: str) -> CurveDefinition | None:
        idx = self.curve_index(mnemonic)
        return self.curves[idx] if idx is not None else None

    def has_curve(self, mnemonic: str) -> bool:
        return self.curve_index(mnemonic) is not None

    def __contains__(self, mnemonic: str) -> bool:
        return self.has_curve(mnemonic)

    @property
    def curves_order(self) -> list[str]:
        return [c.mnemonic for c in self.curves]

    @property
    def row_count(self) -> int:
        return len(self.table)

    def curve_summaries(self) -> list[CurveSummary]:
        """List curves in column order for populating selectors."""
        return [CurveSummary(c.mnemonic, c.unit, len(c.data)) for c in self.curves]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict with numpy arrays for the logs."""
        logs: dict[str, NDArray[np.float64]] = {}
        for curve in self.curves:
            logs.setdefault(curve.mnemonic, curve.to_array())
        return {
            "version": {
                "VERS": self.version,
                "WRAP": self.wrap_mode.value,
                "DLM": self.delimiter.value,
            },
            "well": self.well.to_dict(),
            "parameters": self.parameters.to_dict(),
            "logs": logs,
            "curves_order": self.curves_order,
        }
