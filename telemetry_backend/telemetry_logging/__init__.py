"""
Structured logging for the telemetry backend.

JSON logs with timestamp, level, event_type and per-request context.
Use get_logger() in all modules.
"""

from telemetry_backend.telemetry_logging.logger import bind_request, configure_structlog, get_logger

__all__ = ["bind_request", "configure_structlog", "get_logger"]
