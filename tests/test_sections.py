"""Tests for section splitting."""

from __future__ import annotations

from lasedit.sections import (
    PRE_SECTION,
    detect_line_ending,
    find_section,
    index_sections,
    is_blank_or_comment,
    section_kind,
    split_sections,
)


class TestSplitSections:
    """Tests for split_sections."""

    def test_sections_in_file_order(self) -> None:
        """Test that each ~ header opens a section named by its first token."""
        sections = split_sections("~Version Information\nVERS. 2.0 :\n~Well\nWELL. A :\n~A\n1 2\n")
        assert [s.name for s in sections] == ["VERSION", "WELL", "A"]
        assert sections[0].header_line == "~Version Information"
        assert sections[0].lines == ["VERS. 2.0 :"]
        assert sections[2].lines == ["1 2"]

    def test_lines_before_first_header_form_pre_section(self) -> None:
        """Test that a preamble is kept as the synthetic PRE section."""
        sections = split_sections("# exported\n\n~V\nVERS. 2.0 :\n")
        assert sections[0].name == PRE_SECTION
        assert sections[0].lines == ["# exported", ""]
        assert sections[1].name == "V"

    def test_comments_are_kept_verbatim(self) -> None:
        """Test that comment lines stay in the raw section lines."""
        sections = split_sections("~W\n#MNEM.UNIT  DATA\n STRT.M 10 : START\n")
        assert sections[0].lines == ["#MNEM.UNIT  DATA", " STRT.M 10 : START"]

    def test_unknown_section_is_preserved(self) -> None:
        """Test that unrecognised section names are not rejected."""
        sections = split_sections("~Tops_Definition\nTOP1. 1200 :\n")
        assert sections[0].name == "TOPS_DEFINITION"
        assert sections[0].lines == ["TOP1. 1200 :"]

    def test_crlf_is_normalised(self) -> None:
        """Test that CRLF text splits the same as LF text."""
        assert split_sections("~V\r\nVERS. 2.0 :\r\n") == split_sections("~V\nVERS. 2.0 :\n")

    def test_byte_order_mark_is_stripped(self) -> None:
        """Test that a leading BOM does not hide the first header."""
        sections = split_sections("\ufeff~V\nVERS. 2.0 :\n")
        assert sections[0].name == "V"

    def test_empty_text(self) -> None:
        """Test that empty text gives no sections."""
        assert split_sections("") == []


class TestSectionLookup:
    """Tests for section indexing and alias lookup."""

    def test_find_section_by_alias(self) -> None:
        """Test that long and short section names resolve to the same kind."""
        sections = index_sections(split_sections("~CURVE INFORMATION\nDEPT.M :\n~ASCII\n1\n"))
        assert find_section(sections, "C") is sections["CURVE"]
        assert find_section(sections, "A") is sections["ASCII"]
        assert find_section(sections, "P") is None

    def test_repeated_section_keeps_last(self) -> None:
        """Test that a second section of the same name replaces the first."""
        sections = index_sections(split_sections("~O\nfirst\n~O\nsecond\n"))
        assert sections["O"].lines == ["second"]

    def test_section_kind(self) -> None:
        """Test mapping section names to kind letters."""
        assert section_kind("VERSION") == "V"
        assert section_kind("DATA") == "A"
        assert section_kind("TOPS") is None


class TestLineHelpers:
    """Tests for line classification helpers."""

    def test_detect_line_ending(self) -> None:
        """Test line ending detection."""
        assert detect_line_ending("a\r\nb") == "\r\n"
        assert detect_line_ending("a\rb") == "\r"
        assert detect_line_ending("a\nb") == "\n"
        assert detect_line_ending("") == "\n"

    def test_blank_or_comment(self) -> None:
        """Test that only full-line comments count as comments."""
        assert is_blank_or_comment("")
        assert is_blank_or_comment("   ")
        assert is_blank_or_comment("  # note")
        assert not is_blank_or_comment("WELL. Well #1 : NAME")
