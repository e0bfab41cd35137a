"""
Environment variable loading for the telemetry backend.

- DATABASE_URL / TELEMETRY_DB_URL: SQLAlchemy URL (PostgreSQL in production)
- TELEMETRY_DB_PATH: SQLite file used when no URL is set
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is telemetry_backend/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_SQLITE_PATH = "telemetry.db"


def load_telemetry_env() -> None:
    """Load .env from project root. Safe to call multiple times; existing env vars win."""
    load_dotenv(_ENV_PATH, override=False)


def get_database_url() -> str:
    """
    Resolve the database URL.
    Order: TELEMETRY_DB_URL > DATABASE_URL > sqlite:///TELEMETRY_DB_PATH.
    """
    load_telemetry_env()
    url = (os.getenv("TELEMETRY_DB_URL") or os.getenv("DATABASE_URL") or "").strip()
    if url:
        return url
    path = (os.getenv("TELEMETRY_DB_PATH") or "").strip() or DEFAULT_SQLITE_PATH
    return f"sqlite:///{path}"


def mask_database_url(url: str) -> str:
    """Drop credentials and query string so the URL is safe to log."""
    return url.split("?")[0].split("@")[-1].split("//")[-1]
