"""Operator expressions for derived curves.

An expression is one arithmetic operator followed by a constant:
``+5``, ``- 2.5``, ``*10``, ``x3``, ``×3``, ``/2``, ``÷2``, ``*1e-3``.
"""

from __future__ import annotations

import math
import operator as _op
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .exceptions import InvalidOperandError
from .numbers import Cell, array_to_cells, cells_to_array, decimal_text

OPERATOR_PATTERN = re.compile(
    r"^(?P<symbol>[+\-*/])(?P<operand>[0-9]*\.?[0-9]+(?:e[+\-]?[0-9]+)?)$",
    re.IGNORECASE,
)

ARRAY_OPS: dict[str, Callable[[NDArray[np.float64], float], NDArray[np.float64]]] = {
    "+": _op.add,
    "-": _op.sub,
    "*": _op.mul,
    "/": _op.truediv,
}


@dataclass(frozen=True)
class Operator:
    """A validated ``<symbol><operand>`` pair."""

    symbol: str
    operand: float

    def __post_init__(self) -> None:
        if self.symbol not in ARRAY_OPS:
            raise InvalidOperandError(f"Unsupported operator: {self.symbol!r}")
        if not math.isfinite(self.operand):
            raise InvalidOperandError(f"Operand must be a finite number, got {self.operand!r}")
        if self.symbol == "/" and self.operand == 0:
            raise InvalidOperandError("Division by zero")

    def __str__(self) -> str:
        return f"{self.symbol}{decimal_text(self.operand)}"

    def apply(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        with np.errstate(all="ignore"):
            return ARRAY_OPS[self.symbol](values, self.operand)


def parse_operator_expr(text: str) -> Operator:
    """Parse operator text into an ``Operator``.

    Raises:
        InvalidOperandError: If the text is malformed or divides by zero.
    """
    compact = re.sub(r"\s+", "", text)
    compact = re.sub(r"^[xX×]", "*", compact).replace("÷", "/")
    match = OPERATOR_PATTERN.match(compact)
    if not match:
        raise InvalidOperandError(f"Invalid operator {text!r}. Use like +5, *10, /2, -3")
    return Operator(match.group("symbol"), float(match.group("operand")))


def apply_operator(values: Sequence[Cell], operator: Operator) -> list[Cell]:
    """Apply ``operator`` elementwise.

    Null or non-finite inputs, and non-finite results, come out as null.
    """
    return array_to_cells(operator.apply(cells_to_array(values)))
