"""
Telemetry Backend: ingestion endpoint for node telemetry.

Client nodes push protocol statistics, received-message records, waku message
records and envelope lifecycle events over HTTP; each record is persisted as a
row and echoed back with its server-assigned id.
"""

__version__ = "0.1.0"
