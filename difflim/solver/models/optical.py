"""Optical physics models for diffraction-limited imaging.

These implement the closed-form relations the solver inverts:
- Incoherent cutoff frequency of a circular aperture
- Normalized Modulation Transfer Function (MTF)
- Resolvable feature size for a given spatial frequency
"""

from __future__ import annotations

import math

import numpy as np

NM_TO_MM = 1e-6


def cutoff_frequency(f_number: float, wavelength_nm: float) -> float:
    """Compute the diffraction cutoff frequency.

    ν₀ = 1 / (λ · N)

    Args:
        f_number: Lens f-stop (focal length / aperture diameter).
        wavelength_nm: Light wavelength in nanometers.

    Returns:
        Cutoff frequency in cycles/mm, where contrast reaches zero.
    """
    wavelength_mm = wavelength_nm * NM_TO_MM
    return 1 / (wavelength_mm * f_number)


def mtf(u: float) -> float:
    """Compute the diffraction-limited MTF of a circular aperture.

    Args:
        u: Spatial frequency as a fraction of the cutoff frequency.

    Returns:
        MTF value between 0.0 and 1.0. Non-increasing in ``u``.
    """
    if u <= 0:
        return 1.0
    if u >= 1:
        return 0.0
    return (2 / math.pi) * (
        math.acos(u)
        - u * math.sqrt(1 - u * u)
    )


def mtf_curve(points: int) -> tuple[np.ndarray, np.ndarray]:
    """Sample the MTF on an evenly spaced grid of normalized frequencies.

    Args:
        points: Number of samples over [0, 1], endpoints included.

    Returns:
        Tuple of (normalized frequencies, MTF values).
    """
    if points < 2:
        raise ValueError("MTF curve needs at least 2 points")

    u = np.linspace(0.0, 1.0, points)
    values = (2 / np.pi) * (np.arccos(u) - u * np.sqrt(1 - u ** 2))
    # Pin the endpoints to the exact piecewise values
    values[0] = 1.0
    values[-1] = 0.0
    return u, np.clip(values, 0.0, 1.0)


def feature_size_um(spatial_frequency: float) -> float:
    """Smallest resolvable feature (half a line pair) in micrometers.

    Args:
        spatial_frequency: Spatial frequency in cycles/mm.

    Returns:
        Feature size in µm, ``inf`` at zero frequency.
    """
    if spatial_frequency == 0:
        return math.inf
    return 1000 / (2 * spatial_frequency)
