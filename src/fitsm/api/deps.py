"""
FastAPI dependency injection: shared singletons and per-request factories.

Usage in routers::

    from fitsm.api.deps import OpContext, Settings

    @router.get("/terms")
    def list_terms(ctx: OpContext, settings: Settings):
        ...

The term repository and process catalogue are built once by the lifespan
hook and live on ``app.state``; every request gets a fresh
:class:`OperationContext` pointing at them.
"""

from __future__ import annotations

import uuid
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from fitsm.api.settings import FitsmAPISettings
from fitsm.ops.context import OperationContext
from fitsm.vocabulary.processes import ProcessCatalog
from fitsm.vocabulary.repository import TermRepository

# ── Settings (singleton) ─────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_settings() -> FitsmAPISettings:
    """Cached settings: loaded once per process."""
    return FitsmAPISettings()


# ── Shared state (built at startup) ──────────────────────────────────────


def get_repository(request: Request) -> TermRepository:
    return request.app.state.repository


def get_process_catalog(request: Request) -> ProcessCatalog:
    return request.app.state.processes


# ── Operation context (per-request) ──────────────────────────────────────


def get_operation_context(
    request: Request,
    repository: Annotated[TermRepository, Depends(get_repository)],
    processes: Annotated[ProcessCatalog, Depends(get_process_catalog)],
) -> OperationContext:
    """Build an :class:`OperationContext` from the current request."""
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))
    return OperationContext(
        repository=repository,
        processes=processes,
        request_id=request_id,
        caller="api",
    )


# ── Convenience type aliases ─────────────────────────────────────────────

Settings = Annotated[FitsmAPISettings, Depends(get_settings)]
OpContext = Annotated[OperationContext, Depends(get_operation_context)]
