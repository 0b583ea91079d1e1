"""
Typed request objects for operations.

Each dataclass is the *input* contract of one operation function:
validated, transport-agnostic data only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class ListTermsRequest:
    """Request for :func:`fitsm.ops.terms.list_terms`."""

    limit: int = 100
    offset: int = 0


@dataclass(frozen=True, slots=True)
class CreateTermRequest:
    """Request for :func:`fitsm.ops.terms.create_term`.

    ``payload`` is the raw term document (validated by the repository), so
    that every malformed field is reported rather than only the first.
    """

    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class CreateProcessRequest:
    """Request for :func:`fitsm.ops.processes.create_process`."""

    payload: dict[str, Any] = field(default_factory=dict)
