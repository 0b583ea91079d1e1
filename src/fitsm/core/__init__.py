"""
Core primitives shared by every FitSM front end: logging, errors, settings, health.
"""

from fitsm.core.errors import (
    ConfigError,
    DatasetError,
    DatasetIntegrityError,
    ErrorCategory,
    FitsmError,
)
from fitsm.core.logging import bind_context, configure_logging, get_logger, unbind_context

__all__ = [
    "ConfigError",
    "DatasetError",
    "DatasetIntegrityError",
    "ErrorCategory",
    "FitsmError",
    "bind_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
]
