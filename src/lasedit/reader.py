"""LAS document loading: from text and from files on disk."""

from __future__ import annotations

import logging
import warnings
from pathlib import Path

from .encoding import read_with_encoding
from .exceptions import LASReadError
from .models import LogDocument
from .numbers import parse_number
from .parser import LASParser

logger = logging.getLogger(__name__)

MAX_SUPPORTED_VERSION = 3.0


def load_document(text: str) -> LogDocument:
    """Parse LAS text into a ``LogDocument``.

    Malformed lines are skipped, so this never raises on bad content; an
    empty string gives an empty document.
    """
    return LASParser().parse(text)


def read_las_document(
    file_path: str | Path,
    encoding: str | None = None,
    max_file_size: int | None = None,
) -> LogDocument:
    """Read a LAS file into an editable ``LogDocument``.

    Args:
        file_path: Path to LAS file.
        encoding: Optional encoding override. If None, auto-detected.
        max_file_size: Optional maximum file size in bytes. If the file
            exceeds this limit, a ValueError is raised.

    Returns:
        The parsed document, with ``source_file`` and ``encoding`` set.

    Raises:
        LASReadError: If the file cannot be read or decoded.
        ValueError: If file exceeds max_file_size.

    Warns:
        UserWarning: If LAS version is > 3.0 (unsupported but attempted).

    Example:
        >>> doc = read_las_document("sample.las")
        >>> doc.get_curve("GR").data[:3]
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise LASReadError(f"File not found: {file_path}")

    if not file_path.is_file():
        raise LASReadError(f"Not a file: {file_path}")

    try:
        detected_encoding, content = read_with_encoding(file_path, encoding, max_file_size)
    except (OSError, UnicodeDecodeError, LookupError) as e:
        raise LASReadError(f"Cannot read {file_path}: {e}") from e

    doc = load_document(content)
    doc.source_file = str(file_path)
    doc.encoding = detected_encoding

    # Warn on unsupported versions but keep what was read
    vers = parse_number(doc.version)
    if vers is not None and vers > MAX_SUPPORTED_VERSION:
        warnings.warn(
            f"LAS version {doc.version} is not officially supported. "
            "Only LAS 1.2, 2.0, and 3.0 are supported. "
            "Attempting to read anyway.",
            stacklevel=2,
        )

    logger.debug("Read %s (%s): %d curves", file_path, detected_encoding, len(doc.curves))
    return doc
