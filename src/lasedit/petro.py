"""Density porosity and Archie water saturation.

For each depth step with bulk density ``v``::

    DPHIX  = 100 * (matrix_density - v) / (matrix_density - fluid_density)
    SWARCH = 100 * (rw / (max(DPHIX/100, cutoff/100) ** m * rt)) ** (1/n)

Both results are in percent. Null or non-finite inputs and results are null.

Known issue: ``rt`` is read from the density curve, not from the selected
resistivity curve. This matches the established output of the tool and is
kept until the formula owner confirms the fix; the resistivity mnemonic is
still validated.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from .editing import upsert_curve
from .exceptions import CurveNotFoundError, InvalidOperandError
from .models import DeriveOutcome, LogDocument
from .numbers import array_to_cells

logger = logging.getLogger(__name__)

POROSITY_MNEMONIC = "DPHIX"
SATURATION_MNEMONIC = "SWARCH"


@dataclass
class PetrophysicalParams:
    """Inputs of the porosity / saturation derivation.

    Densities must share the density curve's unit (e.g. K/M3).
    ``porosity_cutoff`` is a percentage; porosity below it is raised to it
    inside the saturation term only.
    """

    density_mnemonic: str
    resistivity_mnemonic: str
    matrix_density: float
    fluid_density: float
    water_resistivity: float
    cementation_exponent: float = 2.0
    saturation_exponent: float = 2.0
    porosity_cutoff: float = 0.0

    def validate(self) -> None:
        """Raise InvalidOperandError for values the formula cannot use."""
        for name in (
            "matrix_density",
            "fluid_density",
            "water_resistivity",
            "cementation_exponent",
            "saturation_exponent",
            "porosity_cutoff",
        ):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidOperandError(f"{name} must be a finite number, got {value!r}")
        if self.saturation_exponent == 0:
            raise InvalidOperandError("saturation_exponent must be non-zero")


@dataclass
class PetrophysicalResult:
    porosity: DeriveOutcome
    saturation: DeriveOutcome


def compute_petrophysical_curves(doc: LogDocument, params: PetrophysicalParams) -> PetrophysicalResult:
    """Write DPHIX and SWARCH into ``doc``, overwriting them in place if present.

    The two output curves belong to this derivation and are written even
    when listed as protected. Re-running with the same inputs reproduces the
    same values.

    Raises:
        InvalidOperandError: A scalar parameter is unusable.
        CurveNotFoundError: The density or resistivity curve is missing.
    """
    params.validate()
    density = doc.get_curve(params.density_mnemonic)
    if density is None:
        raise CurveNotFoundError(f"Curve not found: {params.density_mnemonic}")
    if doc.get_curve(params.resistivity_mnemonic) is None:
        raise CurveNotFoundError(f"Curve not found: {params.resistivity_mnemonic}")

    rhob = density.to_array()
    # Resistivity comes from the density curve; see module docstring
    rt = density.to_array()

    with np.errstate(all="ignore"):
        dphi = 100.0 * (params.matrix_density - rhob) / (params.matrix_density - params.fluid_density)
        effective = np.maximum(dphi / 100.0, params.porosity_cutoff / 100.0)
        sw = 100.0 * (
            params.water_resistivity / (effective**params.cementation_exponent * rt)
        ) ** (1.0 / params.saturation_exponent)

    porosity = upsert_curve(
        doc,
        POROSITY_MNEMONIC,
        array_to_cells(dphi),
        template=density,
        description="Porosity from bulk density",
        unit="%",
        keep_metadata=True,
    )
    saturation = upsert_curve(
        doc,
        SATURATION_MNEMONIC,
        array_to_cells(sw),
        template=density,
        description="Water saturation (Archie)",
        unit="%",
        keep_metadata=True,
    )
    logger.info(
        "Computed %s (%s) and %s (%s) from %s",
        POROSITY_MNEMONIC,
        porosity.value,
        SATURATION_MNEMONIC,
        saturation.value,
        density.mnemonic,
    )
    return PetrophysicalResult(porosity=porosity, saturation=saturation)
