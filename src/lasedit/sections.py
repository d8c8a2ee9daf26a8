"""Section splitting for LAS text.

A section starts at a ``~NAME`` header line and runs to the next header.
Section names are not validated: anything unknown is carried through so
the writer can pass it on untouched.
"""

from __future__ import annotations

import logging
import re

from .models import RawSection

logger = logging.getLogger(__name__)

# Section header: optional indent, ~, the name token, then free text
SECTION_PATTERN = re.compile(r"^\s*~\s*(?P<name>[A-Za-z0-9_]+)\b(?P<rest>.*)$")

COMMENT_PATTERN = re.compile(r"^\s*#")
EMPTY_PATTERN = re.compile(r"^\s*$")
INLINE_COMMENT_PATTERN = re.compile(r"#.*$")

PRE_SECTION = "PRE"

SECTION_ALIASES: dict[str, tuple[str, ...]] = {
    "V": ("V", "VERSION"),
    "W": ("W", "WELL"),
    "C": ("C", "CURVE", "CURVES"),
    "P": ("P", "PARAMETER", "PARAMETERS"),
    "O": ("O", "OTHER"),
    "A": ("A", "ASCII", "DATA"),
}


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def detect_line_ending(text: str) -> str:
    """Return the line ending used by ``text`` (CRLF wins over CR over LF)."""
    if "\r\n" in text:
        return "\r\n"
    if "\r" in text:
        return "\r"
    return "\n"


def is_comment(line: str) -> bool:
    return COMMENT_PATTERN.match(line) is not None


def is_blank_or_comment(line: str) -> bool:
    return EMPTY_PATTERN.match(line) is not None or is_comment(line)


def strip_inline_comment(line: str) -> str:
    """Drop a trailing ``# ...`` comment from a data line.

    Only used for ~A rows; header values keep their ``#`` (``WELL. Well #1``).
    """
    return INLINE_COMMENT_PATTERN.sub("", line)


def split_sections(text: str) -> list[RawSection]:
    """Split LAS text into sections in file order.

    Lines before the first header go into a synthetic ``PRE`` section.
    Comment lines stay in ``lines`` verbatim; the grammar parsers skip them.
    """
    lines = normalize_newlines(text).split("\n")
    if lines and lines[0].startswith("\ufeff"):
        lines[0] = lines[0][1:]
    # A trailing newline is a terminator, not an empty last line
    if lines and lines[-1] == "":
        lines.pop()

    sections: list[RawSection] = []
    current: RawSection | None = None

    for line in lines:
        match = SECTION_PATTERN.match(line)
        if match:
            current = RawSection(name=match.group("name").upper(), header_line=line)
            sections.append(current)
            continue

        if current is None:
            current = RawSection(name=PRE_SECTION)
            sections.append(current)
        current.lines.append(line)

    return sections


def index_sections(sections: list[RawSection]) -> dict[str, RawSection]:
    """Build the name -> section mapping; a repeated name keeps the later one."""
    mapping: dict[str, RawSection] = {}
    for section in sections:
        if section.name in mapping:
            logger.debug("Section ~%s appears more than once; keeping the last", section.name)
        mapping[section.name] = section
    return mapping


def find_section(sections: dict[str, RawSection], kind: str) -> RawSection | None:
    """Look up a section by kind letter (``"V"``, ``"W"``, ...) via its aliases."""
    for alias in SECTION_ALIASES[kind]:
        section = sections.get(alias)
        if section is not None:
            return section
    return None


def section_kind(name: str) -> str | None:
    """Return the kind letter for a section name, or None if unrecognised."""
    for kind, aliases in SECTION_ALIASES.items():
        if name in aliases:
            return kind
    return None
