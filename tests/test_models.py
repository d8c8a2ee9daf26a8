"""Tests for data models."""

from __future__ import annotations

import numpy as np

from lasedit.models import (
    CurveDefinition,
    CurveSummary,
    Delimiter,
    HeaderEntry,
    HeaderSection,
    LogDocument,
    WrapMode,
)
from lasedit.numbers import decimal_text, format_cell, parse_cell, parse_number


class TestDelimiter:
    """Tests for Delimiter."""

    def test_from_name(self) -> None:
        """Test mapping DLM values to delimiters."""
        assert Delimiter.from_name(" comma ") is Delimiter.COMMA
        assert Delimiter.from_name("TAB") is Delimiter.TAB
        assert Delimiter.from_name("PIPE") is None
        assert Delimiter.from_name("") is None
        assert Delimiter.from_name(None) is None

    def test_char(self) -> None:
        """Test output characters."""
        assert [d.char for d in Delimiter] == [" ", "\t", ","]


class TestWrapMode:
    """Tests for WrapMode."""

    def test_from_flag(self) -> None:
        """Test that only YES means wrapped."""
        assert WrapMode.from_flag("yes") is WrapMode.WRAPPED
        assert WrapMode.from_flag("NO") is WrapMode.ONE_LINE_PER_STEP
        assert WrapMode.from_flag("") is WrapMode.ONE_LINE_PER_STEP


class TestHeaderSection:
    """Tests for HeaderSection."""

    def test_case_insensitive_keys(self) -> None:
        """Test lookups ignoring case."""
        section = HeaderSection()
        section.add(HeaderEntry("Comp", value="ACME"))
        assert "COMP" in section
        assert section["comp"].value == "ACME"
        assert section.get_value("COMP") == "ACME"
        assert section.get_value("UWI", "n/a") == "n/a"
        assert section.to_dict() == {"Comp": "ACME"}
        assert len(section) == 1


class TestCurveDefinition:
    """Tests for CurveDefinition."""

    def test_to_array(self) -> None:
        """Test that nulls become NaN in arrays."""
        curve = CurveDefinition("GR", data=[None, 55.2])
        arr = curve.to_array()
        assert arr.dtype == np.float64
        assert np.isnan(arr[0])
        assert arr[1] == 55.2
        assert len(curve) == 2


class TestLogDocument:
    """Tests for LogDocument lookups."""

    def test_first_match_wins(self) -> None:
        """Test that duplicate mnemonics resolve to the first curve."""
        first = CurveDefinition("GR", description="first")
        doc = LogDocument(curves=[CurveDefinition("DEPT"), first, CurveDefinition("gr")])
        assert doc.curve_index("GR") == 1
        assert doc.get_curve("gr") is first
        assert doc.has_curve("Dept")
        assert "NPHI" not in doc

    def test_stale_index_rebuilt(self) -> None:
        """Test that lookups still work after direct edits to curves."""
        doc = LogDocument(curves=[CurveDefinition("A"), CurveDefinition("B")])
        doc.curves.insert(0, CurveDefinition("C"))
        assert doc.curve_index("B") == 2
        assert doc.curve_index("C") == 0

    def test_curve_summaries(self, minimal_doc: LogDocument) -> None:
        """Test the read surface for selector lists."""
        assert minimal_doc.curve_summaries() == [
            CurveSummary("DEPT", "M", 2),
            CurveSummary("GR", "GAPI", 2),
        ]

    def test_to_dict(self, minimal_doc: LogDocument) -> None:
        """Test conversion to a plain dict."""
        data = minimal_doc.to_dict()
        assert data["version"] == {"VERS": "2.0", "WRAP": "NO", "DLM": "SPACE"}
        assert data["well"] == {"NULL": "-999.25"}
        assert data["curves_order"] == ["DEPT", "GR"]
        assert isinstance(data["logs"]["GR"], np.ndarray)


class TestNumbers:
    """Tests for number parsing and formatting."""

    def test_parse_cell(self) -> None:
        """Test table token parsing."""
        assert parse_cell("1.5") == 1.5
        assert parse_cell("-999.25") == -999.25
        assert parse_cell("abc") is None
        assert parse_cell("inf") is None

    def test_parse_number(self) -> None:
        """Test header value parsing."""
        assert parse_number(" 2.0 ") == 2.0
        assert parse_number("") is None
        assert parse_number("NaN") is None

    def test_decimal_text(self) -> None:
        """Test the default number text form."""
        assert decimal_text(100.0) == "100"
        assert decimal_text(-999.25) == "-999.25"
        assert decimal_text(0.1) == "0.1"
        assert decimal_text(1e20) == "1e+20"

    def test_format_cell(self) -> None:
        """Test cell formatting for nulls, precision and negative zero."""
        assert format_cell(None, -999.25) == "-999.25"
        assert format_cell(None, None) == "NaN"
        assert format_cell(float("nan"), -9999.0) == "-9999"
        assert format_cell(1.23456, None, 3) == "1.235"
        assert format_cell(-0.0004, None, 3) == "0.000"
        assert format_cell(-0.0, None) == "0"
