"""
Application-level exceptions.

DecodeError is surfaced to clients as 400; StoreError never reaches the wire
directly and only drives the aggregate batch signal or a log line.
"""

from __future__ import annotations


class TelemetryError(Exception):
    """Base class for telemetry backend errors."""


class DecodeError(TelemetryError):
    """Request body is malformed or missing required fields."""


class StoreError(TelemetryError):
    """Insert or update against the record store failed."""

    def __init__(self, message: str, *, kind: str | None = None, identifier: int | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.identifier = identifier
