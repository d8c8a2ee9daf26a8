"""Encoding detection for LAS files read from disk.

Field logs commonly use:
- UTF-8 (modern exports)
- CP1252 / Latin-1 (Western European)
- CP866 (Russian DOS encoding)
- CP1251 (Russian Windows encoding)
"""

from __future__ import annotations

import logging
from pathlib import Path

import chardet

logger = logging.getLogger(__name__)

# Tried in order when detection fails
FALLBACK_ENCODINGS = ["utf-8", "cp1251", "cp1252", "cp866", "latin-1"]

DETECTION_SAMPLE_SIZE = 50_000
MIN_CONFIDENCE = 0.7


def detect_encoding(raw: bytes) -> str:
    """Guess the encoding of ``raw`` with chardet, defaulting to UTF-8.

    Only the first ``DETECTION_SAMPLE_SIZE`` bytes are inspected.
    """
    result = chardet.detect(raw[:DETECTION_SAMPLE_SIZE])
    confidence = result.get("confidence") or 0.0
    encoding = result.get("encoding")
    if confidence > MIN_CONFIDENCE and encoding:
        # Plain ASCII is read and written back as its UTF-8 superset
        return "utf-8" if encoding.lower() == "ascii" else encoding
    return "utf-8"


def decode_bytes(raw: bytes, encoding: str | None = None) -> tuple[str, str]:
    """Decode file bytes, detecting the encoding when none is given.

    Returns:
        Tuple of (encoding used, text).

    Raises:
        UnicodeDecodeError: If an explicit ``encoding`` does not fit.
        LookupError: If an explicit ``encoding`` is unknown.
    """
    if encoding is not None:
        return encoding, raw.decode(encoding)

    detected = detect_encoding(raw)
    candidates = [detected] + [enc for enc in FALLBACK_ENCODINGS if enc != detected]
    for enc in candidates:
        try:
            return enc, raw.decode(enc)
        except (UnicodeDecodeError, LookupError):
            logger.debug("Encoding %s does not decode the file, trying next", enc)

    # Unreachable while latin-1 is in the fallback chain
    return "utf-8", raw.decode("utf-8", errors="replace")


def read_with_encoding(
    file_path: Path,
    encoding: str | None = None,
    max_file_size: int | None = None,
) -> tuple[str, str]:
    """Read file content with encoding detection and a fallback chain.

    Args:
        file_path: Path to the file.
        encoding: Explicit encoding override. If None, auto-detected.
        max_file_size: Optional maximum file size in bytes.

    Returns:
        Tuple of (detected_encoding, file_content).

    Raises:
        ValueError: If the file exceeds ``max_file_size``.
    """
    if max_file_size is not None:
        file_size = file_path.stat().st_size
        if file_size > max_file_size:
            raise ValueError(
                f"File size ({file_size} bytes) exceeds maximum allowed "
                f"({max_file_size} bytes): {file_path}"
            )

    # Bytes, not text: newline translation would lose the original line endings
    raw = file_path.read_bytes()
    return decode_bytes(raw, encoding)
