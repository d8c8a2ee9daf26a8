"""Regex-based LAS text parser.

Header sections are line-based:
  MNEMONIC.UNIT  VALUE : DESCRIPTION

Real field files are rarely conformant, so a line that does not fit the
grammar is skipped rather than treated as an error.
"""

from __future__ import annotations

import logging
import re
import warnings

from .data_reader import convert_null_sentinels, read_ascii_rows
from .models import CurveDefinition, Delimiter, HeaderEntry, HeaderSection, LogDocument, WrapMode
from .resolver import header_text, resolve_delimiter, resolve_null_value
from .sections import (
    detect_line_ending,
    find_section,
    index_sections,
    is_blank_or_comment,
    split_sections,
)
from .sync import sync_after_load

logger = logging.getLogger(__name__)

# Header line: MNEMONIC.UNIT  VALUE : DESCRIPTION
# The unit is whatever directly follows the dot up to whitespace or a colon;
# mnemonics commonly have spaces before the dot (e.g., "DT  .US/M")
HEADER_LINE_PATTERN = re.compile(
    r"^\s*"
    r"(?P<mnemonic>[^\s.:]+)"  # mnemonic: anything up to the dot
    r"\s*\."  # optional whitespace, literal dot
    r"(?P<unit>[^\s:]*)"  # unit: optional, no whitespace
    r"(?:\s+(?P<value>[^:]*?))?"  # value: everything up to the first colon
    r"\s*(?::\s*(?P<description>.*?))?"  # description: rest of line
    r"\s*$"
)


def match_header_line(line: str) -> HeaderEntry | None:
    """Parse one header line, or return None for comments and stray text."""
    if is_blank_or_comment(line):
        return None
    match = HEADER_LINE_PATTERN.match(line)
    if not match:
        logger.debug("Skipping unparsable header line: %r", line)
        return None
    return HeaderEntry(
        mnemonic=match.group("mnemonic"),
        unit=match.group("unit") or "",
        value=(match.group("value") or "").strip(),
        description=(match.group("description") or "").strip(),
    )


def parse_header_lines(lines: list[str]) -> list[HeaderEntry]:
    """Parse the key-value lines of a ~V, ~W or ~P section in file order."""
    entries = []
    for line in lines:
        entry = match_header_line(line)
        if entry is not None:
            entries.append(entry)
    return entries


def split_api_and_code(middle: str) -> tuple[str, str]:
    """Split the text between unit and colon into (api code, free-form code).

    One token is the api code; with more, the first is the api code and the
    rest is joined into the free-form code.
    """
    parts = middle.split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def parse_curve_lines(lines: list[str]) -> list[CurveDefinition]:
    """Parse ~C section lines into curve definitions with empty data."""
    curves: list[CurveDefinition] = []
    seen: set[str] = set()
    for entry in parse_header_lines(lines):
        api_code, code = split_api_and_code(entry.value)
        key = entry.mnemonic.upper()
        if key in seen:
            warnings.warn(
                f"Duplicate curve mnemonic '{entry.mnemonic}'. "
                "Lookups by name resolve to the first curve with this mnemonic.",
                stacklevel=2,
            )
        seen.add(key)
        curves.append(
            CurveDefinition(
                mnemonic=entry.mnemonic,
                unit=entry.unit,
                api_code=api_code,
                code=code,
                description=entry.description,
            )
        )
    return curves


class LASParser:
    """Builds a ``LogDocument`` from LAS text.

    All parsing state lives on the instance and is reset by ``parse()``.
    """

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.document = LogDocument()
        self._dlm_hint: Delimiter | None = None

    def parse(self, content: str) -> LogDocument:
        """Parse LAS text; never raises on malformed content."""
        self._reset()
        doc = self.document
        doc.line_ending = detect_line_ending(content)
        doc.sections = index_sections(split_sections(content))

        self._parse_version()
        self._parse_header_section("W", doc.well)
        self._parse_header_section("P", doc.parameters)
        self._parse_curves()

        doc.null_value = resolve_null_value(doc.well)
        ascii_section = find_section(doc.sections, "A")
        ascii_lines = ascii_section.lines if ascii_section is not None else []
        doc.delimiter = resolve_delimiter(self._dlm_hint, doc.well, ascii_lines)

        doc.table = read_ascii_rows(ascii_lines, doc.delimiter, doc.wrap_mode, len(doc.curves))
        # Sentinel conversion needs the resolved null value, so it runs last
        convert_null_sentinels(doc.table, doc.null_value)

        sync_after_load(doc)
        logger.debug(
            "Parsed LAS %s: %d curves, %d rows, delimiter %s, null %r",
            doc.version,
            len(doc.curves),
            doc.row_count,
            doc.delimiter.value,
            doc.null_value,
        )
        return doc

    def _parse_version(self) -> None:
        """Parse ~V: VERS, WRAP and the DLM hint."""
        section = find_section(self.document.sections, "V")
        if section is None:
            return
        for entry in parse_header_lines(section.lines):
            mnemonic = entry.mnemonic.upper()
            if mnemonic == "VERS":
                self.document.version = header_text(entry) or self.document.version
            elif mnemonic == "WRAP":
                self.document.wrap_mode = WrapMode.from_flag(header_text(entry))
            elif mnemonic == "DLM":
                self._dlm_hint = Delimiter.from_name(header_text(entry))

    def _parse_header_section(self, kind: str, target: HeaderSection) -> None:
        section = find_section(self.document.sections, kind)
        if section is None:
            return
        for entry in parse_header_lines(section.lines):
            target.add(entry)

    def _parse_curves(self) -> None:
        section = find_section(self.document.sections, "C")
        if section is None:
            return
        self.document.curves = parse_curve_lines(section.lines)
