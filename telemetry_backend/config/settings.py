"""
Application settings and environment configuration.

Typed settings (database URL, API host/port, logging, CORS origins) loaded
from environment variables and the project .env file, shared by the API
server and main.py.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from telemetry_backend.config.env import get_database_url, load_telemetry_env

DEFAULT_API_PORT = 8080


@dataclass(frozen=True)
class Settings:
    database_url: str
    api_host: str = "0.0.0.0"
    api_port: int = DEFAULT_API_PORT
    log_level: str = "INFO"
    log_format: str = "json"
    cors_origins: tuple[str, ...] = ("*",)


_settings: Settings | None = None


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError as e:
        raise ValueError(f"API_PORT must be an integer, got {raw!r}") from e
    if not 0 < port < 65536:
        raise ValueError(f"API_PORT out of range: {port}")
    return port


def _parse_origins(raw: str) -> tuple[str, ...]:
    origins = tuple(o.strip() for o in raw.split(",") if o.strip())
    return origins or ("*",)


def get_settings() -> Settings:
    """
    Return the current application settings (built once, then cached).

    Raises ValueError when API_PORT is not a valid port number.
    """
    global _settings
    if _settings is None:
        load_telemetry_env()
        port_raw = (os.getenv("API_PORT") or os.getenv("PORT") or "").strip()
        _settings = Settings(
            database_url=get_database_url(),
            api_host=(os.getenv("API_HOST") or "0.0.0.0").strip(),
            api_port=_parse_port(port_raw) if port_raw else DEFAULT_API_PORT,
            log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
            log_format=(os.getenv("LOG_FORMAT") or "json").strip().lower(),
            cors_origins=_parse_origins(os.getenv("CORS_ORIGINS") or "*"),
        )
    return _settings


def reset_settings_for_test() -> None:
    """Clear cached settings. For tests only."""
    global _settings
    _settings = None
