"""Solver package: diffraction limit evaluation."""

from difflim.solver.diffraction import (
    DEFAULT_WAVELENGTH_NM,
    InvalidArgumentError,
    calculate,
    sample_curve,
    solve,
)

__all__ = [
    "DEFAULT_WAVELENGTH_NM",
    "InvalidArgumentError",
    "calculate",
    "sample_curve",
    "solve",
]
