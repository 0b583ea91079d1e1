"""Shared base settings.

``FitsmBaseSettings`` carries what every FitSM front end needs (bind
address, log level, debug mode, data source overrides).  The API adds its
own transport knobs in :mod:`fitsm.api.settings`.

Examples:
    >>> from fitsm.core.settings import FitsmBaseSettings
    >>> FitsmBaseSettings(log_level="DEBUG").log_level
    'DEBUG'

Tags:
    settings, configuration, pydantic, environment, fitsm
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FitsmBaseSettings(BaseSettings):
    """Common settings, read from ``FITSM_*`` environment variables.

    Fields
    ──────
    host              : Bind address for the HTTP server
    port              : Bind port for the HTTP server
    debug             : Enable debug mode (verbose errors)
    log_level         : Structlog log level
    json_logs         : Force JSON (True) / console (False); None auto-detects
    dataset_path      : Override for the packaged vocabulary JSON
    processes_path    : Override for the packaged process catalogue JSON
    strict_integrity  : Refuse to start when the dataset has integrity violations
    """

    model_config = SettingsConfigDict(
        env_prefix="FITSM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Network ──────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 8787

    # ── Observability ────────────────────────────────────────────
    debug: bool = False
    log_level: str = "INFO"
    json_logs: bool | None = None

    # ── Data ─────────────────────────────────────────────────────
    dataset_path: Path | None = Field(
        default=None,
        description="Path to a vocabulary JSON file (defaults to the packaged dataset)",
    )
    processes_path: Path | None = Field(
        default=None,
        description="Path to a process catalogue JSON file (defaults to the packaged catalogue)",
    )
    strict_integrity: bool = Field(
        default=True,
        description="Fail startup when the dataset breaks slug/id uniqueness or edge integrity",
    )
