"""FastAPI application for the diffraction limit calculator.

Run with:
    uvicorn difflim.api.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from difflim import config

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan (startup / shutdown)
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan. The solver is stateless, so there is nothing to load."""
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    logger.info("Diffraction limit API ready.")
    yield
    logger.info("Diffraction limit API shutting down.")


# ---------------------------------------------------------------------------
# FastAPI App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Diffraction Limit Calculator",
    description=(
        "Diffraction-limited spatial resolution of an optical system "
        "for a given aperture, contrast target and wavelength."
    ),
    version=config.API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Import routers AFTER app is created
from difflim.api.routers import diffraction, health  # noqa: E402

app.include_router(health.router, prefix="/api/v1/health", tags=["Health"])
app.include_router(diffraction.router, prefix="/api/v1/diffraction", tags=["Diffraction"])
