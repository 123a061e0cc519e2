"""Health check endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from difflim import config

router = APIRouter()


@router.get("")
async def health_check():
    """Service health summary."""
    return {
        "status": "healthy",
        "service": "difflim",
        "version": config.API_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
