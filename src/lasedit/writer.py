"""LAS text writer.

~C and ~A are always regenerated from the curves: curve data is the only
source of truth for export. ~V and ~W are passed through from the source
text with targeted rewrites of VERS, WRAP, DLM and NULL; ~P, ~O and any
unrecognised sections are passed through untouched.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from .exceptions import LASWriteError
from .models import CurveDefinition, Delimiter, LogDocument, RawSection
from .numbers import decimal_text, format_cell, parse_number
from .parser import match_header_line
from .resolver import header_text
from .sections import PRE_SECTION, find_section, is_blank_or_comment, section_kind
from .sync import rebuild_rows

logger = logging.getLogger(__name__)

CURVE_SECTION_HEADER = "~Curve Information"
CURVE_COLUMNS_COMMENT = "#MNEM.UNIT         API CODE           : CURVE DESCRIPTION"
ASCII_SECTION_HEADER = "~ASCII"

DEFAULT_DESCRIPTIONS = {
    "VERS": "LAS version",
    "WRAP": "One line per depth step",
    "DLM": "Delimiter",
    "NULL": "Null value",
}


@dataclass
class WriterOptions:
    """Output settings; None means "use the document's own value"."""

    delimiter: Delimiter | str | None = None
    precision: int | None = None
    line_ending: str | None = None


def _resolve_delimiter(doc: LogDocument, options: WriterOptions) -> Delimiter:
    if options.delimiter is None:
        return doc.delimiter
    if isinstance(options.delimiter, Delimiter):
        return options.delimiter
    delimiter = Delimiter.from_name(options.delimiter)
    if delimiter is None:
        raise ValueError(f"Unknown delimiter {options.delimiter!r}; use SPACE, TAB or COMMA")
    return delimiter


def format_curve_line(curve: CurveDefinition) -> str:
    """Format one ~C line: mnemonic and unit padded to 8, api and code to 16."""
    line = (
        f"{curve.mnemonic:<8}.{curve.unit:<8} {curve.api_code:<16} {curve.code:<16} : "
        f"{curve.description}"
    )
    return re.sub(r"\s+:", " :", line, count=1).rstrip()


def _value_matches(key: str, current: str, wanted: str) -> bool:
    if key == "NULL":
        return parse_number(current) == parse_number(wanted)
    return current.strip().upper() == wanted.strip().upper()


def rebuild_header_lines(
    lines: list[str],
    updates: dict[str, str],
    append_missing: tuple[str, ...] = (),
) -> list[str]:
    """Pass header lines through, rewriting entries whose value changed.

    Args:
        lines: Original section lines.
        updates: Upper-cased mnemonic -> value to write.
        append_missing: Keys from ``updates`` to add at the end when the
            section has no entry for them.
    """
    out: list[str] = []
    present: set[str] = set()
    for raw in lines:
        if is_blank_or_comment(raw):
            out.append(raw)
            continue
        entry = match_header_line(raw)
        if entry is None:
            out.append(raw)
            continue
        key = entry.mnemonic.upper()
        present.add(key)
        if key not in updates:
            out.append(raw)
            continue

        # "VERS.2.0 :" carries the value in the unit slot
        value_in_unit = not entry.value and bool(entry.unit)
        current = header_text(entry)
        wanted = updates[key]
        if _value_matches(key, current, wanted):
            out.append(raw)
            continue

        unit = "" if value_in_unit else entry.unit
        out.append(f"{key}.{unit}  {wanted} : {entry.description}".rstrip())

    for key in append_missing:
        if key in updates and key not in present:
            out.append(f"{key}.  {updates[key]} : {DEFAULT_DESCRIPTIONS.get(key, '')}".rstrip())
    return out


def _version_lines(doc: LogDocument, delimiter: Delimiter) -> list[str]:
    # Output is always one line per depth step
    updates = {"VERS": doc.version, "WRAP": "NO", "DLM": delimiter.value}
    append = ("VERS", "WRAP") if delimiter is Delimiter.SPACE else ("VERS", "WRAP", "DLM")

    section = find_section(doc.sections, "V")
    if section is None:
        return ["~Version", *rebuild_header_lines([], updates, append)]
    return [section.header_line or "~Version", *rebuild_header_lines(section.lines, updates, append)]


def _well_lines(doc: LogDocument) -> list[str]:
    updates: dict[str, str] = {}
    if doc.null_value is not None:
        updates["NULL"] = decimal_text(doc.null_value)

    section = find_section(doc.sections, "W")
    if section is None:
        return ["~Well", *rebuild_header_lines([], updates, ("NULL",))]
    return [section.header_line or "~Well", *rebuild_header_lines(section.lines, updates, ("NULL",))]


def _passthrough(section: RawSection) -> list[str]:
    return [section.header_line, *section.lines]


def serialize_document(doc: LogDocument, options: WriterOptions | None = None) -> str:
    """Render ``doc`` as LAS text.

    Args:
        doc: Document to write; it is not modified.
        options: Delimiter, fixed precision and line ending overrides.

    Returns:
        LAS text ending with a line ending.
    """
    options = options or WriterOptions()
    delimiter = _resolve_delimiter(doc, options)
    line_ending = options.line_ending or doc.line_ending or "\n"

    lines = _version_lines(doc, delimiter)
    lines.extend(_well_lines(doc))

    lines.append(CURVE_SECTION_HEADER)
    lines.append(CURVE_COLUMNS_COMMENT)
    lines.extend(format_curve_line(curve) for curve in doc.curves)

    parameter_section = find_section(doc.sections, "P")
    if parameter_section is not None:
        lines.extend(_passthrough(parameter_section))

    other_section = find_section(doc.sections, "O")
    if other_section is not None:
        lines.extend(_passthrough(other_section))

    for name, section in doc.sections.items():
        if name != PRE_SECTION and section_kind(name) is None:
            lines.extend(_passthrough(section))

    lines.append(ASCII_SECTION_HEADER)
    for row in rebuild_rows(doc.curves):
        cells = (format_cell(v, doc.null_value, options.precision) for v in row)
        lines.append(delimiter.char.join(cells).rstrip())

    return line_ending.join(lines) + line_ending


def write_las_document(
    file_path: str | Path,
    doc: LogDocument,
    options: WriterOptions | None = None,
    encoding: str | None = None,
) -> None:
    """Write ``doc`` to a LAS file.

    Args:
        file_path: Output file path.
        doc: Document to write.
        options: Writer options (see ``serialize_document``).
        encoding: Output encoding; defaults to the encoding the document
            was read with.

    Raises:
        LASWriteError: If the file cannot be written.
    """
    file_path = Path(file_path)
    content = serialize_document(doc, options)

    try:
        # newline="" keeps the document's own line endings
        with open(file_path, "w", encoding=encoding or doc.encoding, newline="") as f:
            f.write(content)
    except (OSError, LookupError) as e:
        raise LASWriteError(f"Cannot write to {file_path}: {e}") from e
    logger.debug("Wrote %d curves to %s", len(doc.curves), file_path)
