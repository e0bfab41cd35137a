"""
Main entrypoint: create tables, then run the FastAPI server.

Env: DATABASE_URL (or TELEMETRY_DB_PATH for SQLite), API_HOST, API_PORT, LOG_LEVEL, LOG_FORMAT, CORS_ORIGINS.

Server only: uvicorn telemetry_backend.api_server.app:app --host 0.0.0.0 --port 8080
"""

import sys

from telemetry_backend.telemetry_logging import configure_structlog, get_logger

logger = get_logger("main")


def main() -> None:
    """Validate config, make sure the schema exists, then serve until SIGINT/SIGTERM."""
    from telemetry_backend.config import get_settings
    from telemetry_backend.config.env import mask_database_url
    from telemetry_backend.core.exceptions import StoreError

    try:
        settings = get_settings()
    except ValueError as e:
        logger.error("main_config_error", error=str(e))
        sys.exit(1)

    configure_structlog(settings.log_level, settings.log_format)

    from telemetry_backend.api_server.dependencies import get_store

    try:
        get_store().ensure_schema()
    except StoreError as e:
        logger.error("main_database_unavailable", url=mask_database_url(settings.database_url), error=str(e))
        sys.exit(1)

    from telemetry_backend.api_server.app import app
    import uvicorn

    logger.info("main_server_starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
