"""
API-specific settings.

Extends :class:`~fitsm.core.settings.FitsmBaseSettings` with parameters
that govern the REST transport (CORS, prefix, OpenAPI metadata).

All values can be overridden via environment variables prefixed with
``FITSM_``.
"""

from __future__ import annotations

from pydantic import Field

from fitsm import __version__
from fitsm.core.settings import FitsmBaseSettings


class FitsmAPISettings(FitsmBaseSettings):
    """Settings for the FitSM vocabulary REST API.

    Order of precedence (highest → lowest):
        1. Environment variables (``FITSM_API_PREFIX``, etc.)
        2. ``.env`` file
        3. Defaults below
    """

    # ── API ──────────────────────────────────────────────────────────────
    api_prefix: str = Field(default="/api/v1", description="URL prefix for all endpoints")
    api_title: str = Field(default="FitSM Vocabulary API", description="OpenAPI title")
    api_version: str = Field(default=__version__, description="OpenAPI version string")
    api_description: str = Field(
        default="Terms, definitions and semantic relationships of the FitSM vocabulary",
        description="OpenAPI description",
    )

    # ── CORS ─────────────────────────────────────────────────────────────
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )
