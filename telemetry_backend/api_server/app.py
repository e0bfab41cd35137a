"""
FastAPI/ASGI application entrypoint.

Run with: uvicorn telemetry_backend.api_server.app:app --host 0.0.0.0 --port 8080
"""

from telemetry_backend.api_server.server import app

__all__ = ["app"]
