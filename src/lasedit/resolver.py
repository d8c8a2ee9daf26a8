"""Delimiter and null-value resolution from header metadata.

Delimiter resolution order:
  1. DLM in the ~V section, if it names SPACE, TAB or COMMA
  2. DLM in the ~W section
  3. sniffing the first data line (comma, then tab, else space)
"""

from __future__ import annotations

import logging

from .models import Delimiter, HeaderEntry, HeaderSection
from .numbers import parse_number
from .sections import is_blank_or_comment, strip_inline_comment

logger = logging.getLogger(__name__)


def sniff_delimiter(data_lines: list[str]) -> Delimiter:
    """Guess the delimiter from the first non-empty, non-comment data line."""
    for line in data_lines:
        if is_blank_or_comment(line):
            continue
        line = strip_inline_comment(line)
        if "," in line:
            return Delimiter.COMMA
        if "\t" in line:
            return Delimiter.TAB
        return Delimiter.SPACE
    return Delimiter.SPACE


def resolve_delimiter(
    dlm_hint: Delimiter | None,
    well: HeaderSection,
    data_lines: list[str],
) -> Delimiter:
    """Resolve the ~A delimiter; the result is never None."""
    if dlm_hint is not None:
        return dlm_hint

    well_dlm = well.get("DLM")
    if well_dlm is not None:
        delimiter = Delimiter.from_name(header_text(well_dlm))
        if delimiter is not None:
            return delimiter

    delimiter = sniff_delimiter(data_lines)
    logger.debug("No DLM entry; sniffed delimiter %s from data", delimiter.value)
    return delimiter


def header_text(entry: HeaderEntry) -> str:
    """Value text of a header entry.

    Files written as ``NULL.-999.25 :`` put the value where the unit goes,
    so the unit field is used when the value is empty.
    """
    return entry.value or entry.unit


def header_number(entry: HeaderEntry) -> float | None:
    return parse_number(header_text(entry))


def resolve_null_value(well: HeaderSection) -> float | None:
    """Read NULL from the ~W section; None if absent or not a finite number."""
    entry = well.get("NULL")
    if entry is None:
        return None
    value = header_number(entry)
    if value is None:
        logger.debug("NULL entry %r is not a finite number; null value unresolved", header_text(entry))
    return value
