"""Diffraction physics models."""

from difflim.solver.models.optical import (
    cutoff_frequency,
    feature_size_um,
    mtf,
    mtf_curve,
)

__all__ = [
    "cutoff_frequency",
    "mtf",
    "mtf_curve",
    "feature_size_um",
]
