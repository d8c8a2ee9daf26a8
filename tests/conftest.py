"""Pytest fixtures for lasedit tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from lasedit import LogDocument, load_document

# Test data at repository root
TEST_DATA_DIR = Path(__file__).parent.parent / "test_data"

MINIMAL_LAS = (
    "~W\n"
    "NULL. -999.25 : Null\n"
    "~C\n"
    "DEPT.M : Depth\n"
    "GR.GAPI : Gamma\n"
    "~A\n"
    "100 -999.25\n"
    "200 55.2\n"
)

DENSITY_LAS = """~Version
 VERS.   2.0  : CWLS LOG ASCII STANDARD
 WRAP.   NO   : ONE LINE PER DEPTH STEP
~Well
 NULL.   -999.25 : NULL VALUE
~Curve
 DEPT.M       : Depth
 RHOB.K/M3    : Bulk density
 ILD .OHMM    : Deep resistivity
~ASCII
1000.0  2400.0  20.0
1000.5  2650.0  25.0
1001.0  -999.25 30.0
1001.5  2150.0  15.0
"""


@pytest.fixture
def test_data_dir() -> Path:
    """Path to test data directory."""
    return TEST_DATA_DIR


@pytest.fixture
def all_las_files() -> list[Path]:
    """All LAS test files in test_data/."""
    if TEST_DATA_DIR.exists():
        return sorted(TEST_DATA_DIR.glob("*.las"))
    return []


@pytest.fixture
def minimal_text() -> str:
    """Two-curve document with one null cell."""
    return MINIMAL_LAS


@pytest.fixture
def minimal_doc() -> LogDocument:
    """Parsed ``MINIMAL_LAS``: DEPT [100, 200], GR [None, 55.2]."""
    return load_document(MINIMAL_LAS)


@pytest.fixture
def density_doc() -> LogDocument:
    """Document with density and resistivity curves for petrophysics."""
    return load_document(DENSITY_LAS)


@pytest.fixture
def sample_doc(test_data_dir: Path) -> LogDocument:
    """Parsed test_data/sample.las."""
    return load_document((test_data_dir / "sample.las").read_text(encoding="utf-8"))
