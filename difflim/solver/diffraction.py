"""Diffraction limit solver.

Inverts the diffraction-limited MTF of a circular aperture: given an f-number,
a target contrast and a wavelength, find the spatial frequency at which the
lens still delivers that contrast.

    MTF(u) = (2/π) · (acos(u) − u·sqrt(1 − u²)),   u = ν / ν₀

The MTF is non-increasing on [0, 1], so a bisection over u always brackets
the root.
"""

from __future__ import annotations

import numpy as np

from difflim.schemas import DiffractionParameters, DiffractionResult, MtfCurve
from difflim.solver.models.optical import cutoff_frequency, mtf, mtf_curve

DEFAULT_WAVELENGTH_NM = 520.0
TOLERANCE = 1e-6
MAX_ITERATIONS = 100
MIN_CURVE_POINTS = 2
MAX_CURVE_POINTS = 1001


class InvalidArgumentError(ValueError):
    """An input lies outside the physical domain of the solver."""


def _check_f_number(f_number: float) -> None:
    if not f_number > 0:
        raise InvalidArgumentError("f-number must be positive.")


def _check_contrast(contrast_percent: float) -> None:
    if not 0 <= contrast_percent <= 100:
        raise InvalidArgumentError("Contrast percentage must be between 0 and 100.")


def _check_wavelength(wavelength_nm: float) -> None:
    if not wavelength_nm > 0:
        raise InvalidArgumentError("Wavelength must be positive.")


def invert_mtf(target_mtf: float) -> tuple[float, int]:
    """Solve MTF(u) = target_mtf by bisection over u in [0, 1].

    Stops when the bracket is narrower than TOLERANCE, when the MTF at the
    midpoint is within TOLERANCE of the target, or after MAX_ITERATIONS.
    Hitting the cap is not an error: the last midpoint is returned.

    Returns:
        Tuple of (normalized frequency, iterations taken).
    """
    low = 0.0
    high = 1.0
    u = 0.5
    iterations = 0

    while (high - low) > TOLERANCE and iterations < MAX_ITERATIONS:
        u = (low + high) / 2
        current_mtf = mtf(u)

        if abs(current_mtf - target_mtf) < TOLERANCE:
            break

        if current_mtf > target_mtf:
            low = u  # root is at higher frequency
        else:
            high = u
        iterations += 1

    return u, iterations


def solve(
    f_number: float,
    contrast_percent: float,
    wavelength_nm: float = DEFAULT_WAVELENGTH_NM,
) -> DiffractionResult:
    """Compute the diffraction-limited spatial frequency for a contrast target.

    Args:
        f_number: Lens f-stop (e.g. 8 for f/8). Must be positive.
        contrast_percent: Target contrast, 0 to 100.
        wavelength_nm: Light wavelength in nanometers. Must be positive.

    Returns:
        DiffractionResult with frequencies in cycles/mm. At 0% and 100%
        contrast the answer is exact and the bisection fields are left unset.

    Raises:
        InvalidArgumentError: If an input is out of range. Checked in
            argument order, the first failure wins.
    """
    _check_f_number(f_number)
    _check_contrast(contrast_percent)
    _check_wavelength(wavelength_nm)

    cutoff = cutoff_frequency(f_number, wavelength_nm)

    if contrast_percent >= 100:
        return DiffractionResult(spatial_frequency=0.0, cutoff_frequency=round(cutoff, 1))
    if contrast_percent <= 0:
        return DiffractionResult(
            spatial_frequency=round(cutoff, 1),
            cutoff_frequency=round(cutoff, 1),
        )

    u, iterations = invert_mtf(contrast_percent / 100.0)

    return DiffractionResult(
        spatial_frequency=round(u * cutoff, 1),
        cutoff_frequency=round(cutoff, 1),
        normalized_frequency=round(u, 6),
        iterations=iterations,
    )


def calculate(params: DiffractionParameters) -> DiffractionResult:
    """Run :func:`solve` on a parameter contract."""
    return solve(params.f_number, params.contrast_percent, params.wavelength_nm)


def sample_curve(
    f_number: float,
    wavelength_nm: float = DEFAULT_WAVELENGTH_NM,
    points: int = 11,
) -> MtfCurve:
    """Sample the MTF of one aperture from zero frequency to the cutoff.

    Raises:
        InvalidArgumentError: If f_number or wavelength_nm is not positive.
        ValueError: If points is outside MIN_CURVE_POINTS..MAX_CURVE_POINTS.
    """
    _check_f_number(f_number)
    _check_wavelength(wavelength_nm)
    if not MIN_CURVE_POINTS <= points <= MAX_CURVE_POINTS:
        raise ValueError(
            f"MTF curve takes between {MIN_CURVE_POINTS} and {MAX_CURVE_POINTS} points"
        )

    cutoff = cutoff_frequency(f_number, wavelength_nm)
    u, values = mtf_curve(points)

    return MtfCurve(
        f_number=f_number,
        wavelength_nm=wavelength_nm,
        cutoff_frequency=round(cutoff, 1),
        normalized_frequency=[round(float(x), 6) for x in u],
        spatial_frequency=[round(float(x), 1) for x in np.asarray(u) * cutoff],
        mtf=[round(float(v), 6) for v in values],
    )
