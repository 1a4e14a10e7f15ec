"""
HTTP host module for schema-form.

Serves registered forms over HTTP with Starlette and uvicorn.
"""

from schema_form.server.app import create_app, run_server

__all__ = [
    "create_app",
    "run_server",
]
