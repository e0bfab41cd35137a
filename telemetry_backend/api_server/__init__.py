"""
API server package: HTTP interface for telemetry ingestion.

Decodes request bodies, delegates to the ingestion core and maps outcomes to
HTTP status codes and JSON bodies.
"""
