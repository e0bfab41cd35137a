"""
Create the telemetry tables.

Usage:
    python -m telemetry_backend.database.init_tables

Safe to run multiple times; existing tables are left untouched.
"""

from __future__ import annotations

from telemetry_backend.config import get_settings
from telemetry_backend.config.env import mask_database_url
from telemetry_backend.database.store import SQLAlchemyRecordStore


def main() -> int:
    settings = get_settings()
    store = SQLAlchemyRecordStore(settings.database_url)
    store.ensure_schema()
    store.dispose()
    print(f"[init_tables] tables ready at {mask_database_url(settings.database_url)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
