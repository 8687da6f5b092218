"""Centralized configuration for environment variables.

This module is the single source of truth for configuration used across the
application. Import constants from here rather than calling os.getenv directly
in multiple places.
"""

from __future__ import annotations

import os
from typing import Final

from dotenv import load_dotenv

# Load environment variables from .env if present
load_dotenv()


# --- Runtime ---
APP_ENV: Final[str] = (
    os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development"
).lower()
PORT: Final[int] = int(os.getenv("PORT", "3000"))
LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()
API_VERSION: Final[str] = "1.0.0"

# Origin allowed by CORS (the map frontend)
FRONTEND_URL: Final[str] = os.getenv("FRONTEND_URL", "http://localhost:4200")


# --- MongoDB ---
MONGODB_URI: Final[str] = os.getenv(
    "MONGODB_URI", "mongodb://localhost:27017"
).strip()
MONGODB_DATABASE: Final[str] = os.getenv("MONGODB_DATABASE", "map_places")
MONGODB_MAX_POOL_SIZE: Final[int] = int(os.getenv("MONGODB_MAX_POOL_SIZE", "10"))
MONGODB_SERVER_SELECTION_TIMEOUT_MS: Final[int] = int(
    os.getenv("MONGODB_SERVER_SELECTION_TIMEOUT_MS", "30000"),
)
MONGODB_SOCKET_TIMEOUT_MS: Final[int] = int(
    os.getenv("MONGODB_SOCKET_TIMEOUT_MS", "45000"),
)


# --- Places ---
DEFAULT_PLACE_IMAGE: Final[str] = "assets/praia.jpg"
NEARBY_DEFAULT_DISTANCE_M: Final[int] = int(
    os.getenv("NEARBY_DEFAULT_DISTANCE_M", "50000"),
)


def is_production() -> bool:
    """Return True when running with APP_ENV=production."""
    return APP_ENV == "production"


def is_development() -> bool:
    """Return True when running with APP_ENV=development."""
    return APP_ENV == "development"


__all__ = [
    "API_VERSION",
    "APP_ENV",
    "DEFAULT_PLACE_IMAGE",
    "FRONTEND_URL",
    "LOG_LEVEL",
    "MONGODB_DATABASE",
    "MONGODB_MAX_POOL_SIZE",
    "MONGODB_SERVER_SELECTION_TIMEOUT_MS",
    "MONGODB_SOCKET_TIMEOUT_MS",
    "MONGODB_URI",
    "NEARBY_DEFAULT_DISTANCE_M",
    "PORT",
    "is_development",
    "is_production",
]
