"""Runtime settings, read once from the environment."""

from __future__ import annotations

import logging
import os

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def parse_log_level(name: str, default: str = "WARNING") -> str:
    """Upper-cased level name, or ``default`` if logging does not know it."""
    level = name.strip().upper()
    if isinstance(logging.getLevelName(level), int):
        return level
    return default


LOG_LEVEL = parse_log_level(os.getenv("DIFFLIM_LOG_LEVEL", "WARNING"))

LOG_FORMAT = os.getenv(
    "DIFFLIM_LOG_FORMAT",
    "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

# ---------------------------------------------------------------------------
# HTTP API
# ---------------------------------------------------------------------------

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("DIFFLIM_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

API_VERSION = "0.1.0"
