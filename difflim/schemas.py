"""Pydantic data contracts for the diffraction limit calculator.

Every value crossing a component boundary (CLI, HTTP, solver) uses one of
these contracts.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Input Schemas
# ---------------------------------------------------------------------------

class DiffractionParameters(BaseModel):
    """Input parameters for one diffraction limit evaluation.

    Ranges are not constrained here: the solver owns the domain checks so
    callers always see the same error messages.
    """

    f_number: float = Field(
        ...,
        description="Lens aperture f-stop, e.g. 2.8, 4, 5.6, 8, 11, 16",
    )
    contrast_percent: float = Field(
        ...,
        description="Target contrast percentage (0-100)",
    )
    wavelength_nm: float = Field(
        520.0,
        description="Light wavelength in nanometers",
    )

    model_config = {"json_schema_extra": {
        "examples": [{
            "f_number": 8,
            "contrast_percent": 10,
            "wavelength_nm": 520,
        }]
    }}


# ---------------------------------------------------------------------------
# Output Schemas
# ---------------------------------------------------------------------------

class DiffractionResult(BaseModel):
    """Spatial frequency reached at the requested contrast.

    ``normalized_frequency`` and ``iterations`` are only set when the
    bisection ran, i.e. for contrast strictly between 0 and 100.
    """

    spatial_frequency: float = Field(..., description="Frequency at target contrast, cycles/mm")
    cutoff_frequency: float = Field(..., description="Frequency at 0% contrast, cycles/mm")
    normalized_frequency: Optional[float] = Field(
        None, ge=0.0, le=1.0,
        description="Spatial frequency as a fraction of the cutoff",
    )
    iterations: Optional[int] = Field(None, ge=0, description="Bisection steps taken")

    @property
    def solved(self) -> bool:
        """True when the value came from the bisection, not a boundary."""
        return self.iterations is not None

    def to_dict(self) -> Dict[str, Any]:
        """Result record with the bisection-only fields omitted at boundaries."""
        return self.model_dump(exclude_none=True)


class MtfCurve(BaseModel):
    """MTF sampled over the full frequency range of one aperture."""

    f_number: float
    wavelength_nm: float
    cutoff_frequency: float
    normalized_frequency: List[float] = Field(default_factory=list)
    spatial_frequency: List[float] = Field(default_factory=list)
    mtf: List[float] = Field(default_factory=list)

    def rows(self) -> List[tuple[float, float, float]]:
        return list(zip(self.normalized_frequency, self.spatial_frequency, self.mtf))
