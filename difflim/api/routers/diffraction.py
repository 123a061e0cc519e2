"""Diffraction limit endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Query

from difflim.schemas import DiffractionParameters, MtfCurve
from difflim.solver.diffraction import (
    DEFAULT_WAVELENGTH_NM,
    MAX_CURVE_POINTS,
    MIN_CURVE_POINTS,
    InvalidArgumentError,
    calculate,
    sample_curve,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/solve")
async def solve_diffraction_limit(request: DiffractionParameters) -> Dict[str, Any]:
    """Spatial frequency at which the lens still delivers the target contrast.

    ``normalized_frequency`` and ``iterations`` are omitted at 0% and 100%
    contrast, where no bisection is needed.
    """
    try:
        result = calculate(request)
    except InvalidArgumentError as e:
        logger.info(f"Rejected parameters {request.model_dump()}: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return result.to_dict()


@router.get("/mtf-curve", response_model=MtfCurve)
async def mtf_curve(
    f_number: float = Query(..., description="Lens aperture f-stop"),
    wavelength_nm: float = Query(DEFAULT_WAVELENGTH_NM, description="Wavelength in nm"),
    points: int = Query(11, ge=MIN_CURVE_POINTS, le=MAX_CURVE_POINTS, description="Number of samples"),
):
    """MTF of one aperture sampled from zero frequency to the cutoff."""
    try:
        return sample_curve(f_number, wavelength_nm, points=points)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=422, detail=str(e))
