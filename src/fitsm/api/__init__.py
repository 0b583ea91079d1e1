"""
REST API layer for the FitSM vocabulary.

Provides a FastAPI application factory with typed endpoints that
delegate to the operations layer (``fitsm.ops``).  This package handles
only HTTP transport concerns: serialisation, error mapping, and request
context.

Quick start::

    from fitsm.api import create_app

    app = create_app()  # ready for uvicorn
"""

from fitsm.api.app import create_app

__all__ = ["create_app"]
