"""
FastAPI application factory.

``create_app()`` wires middleware, routers, error handlers, and
lifespan events into a single ``FastAPI`` instance.  The lifespan hook
builds the term repository and process catalogue once and validates the
dataset; a dataset that breaks its integrity rules aborts startup.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from fitsm.api.deps import get_settings
from fitsm.api.middleware.errors import unhandled_exception_handler, validation_exception_handler
from fitsm.api.middleware.request_id import RequestIDMiddleware
from fitsm.api.middleware.timing import TimingMiddleware
from fitsm.api.settings import FitsmAPISettings
from fitsm.core.errors import ConfigError
from fitsm.core.health import HealthCheck, create_health_router, vocabulary_check
from fitsm.core.logging import configure_logging, get_logger
from fitsm.vocabulary.processes import build_process_catalog
from fitsm.vocabulary.repository import build_repository


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup / shutdown hooks."""
    settings: FitsmAPISettings = app.state.settings
    configure_logging(
        level=settings.log_level,
        json_format=settings.json_logs,
        service="fitsm-vocabulary",
    )
    log = get_logger("fitsm.api")
    log.info("api_starting", version=app.version)

    try:
        app.state.repository.initialize()
        app.state.processes.initialize()
    except Exception as exc:
        log.error("startup_failed", error=str(exc))
        raise

    log.info(
        "api_ready",
        terms=len(app.state.repository),
        processes=len(app.state.processes.get_all()),
    )
    yield
    log.info("api_stopping")


def create_app(
    *,
    settings: FitsmAPISettings | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : FitsmAPISettings | None
        Override settings (useful for testing).  When ``None`` the cached
        singleton from :func:`get_settings` is used.

    Raises
    ------
    ConfigError
        If ``api_prefix`` is malformed.
    """

    settings = settings or get_settings()
    prefix = settings.api_prefix
    if prefix and (not prefix.startswith("/") or prefix.endswith("/")):
        raise ConfigError(
            f"api_prefix must start with '/' and must not end with one, got {prefix!r}",
            context={"api_prefix": prefix},
        )

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description=settings.api_description,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    app.state.settings = settings
    app.state.repository = build_repository(settings)
    app.state.processes = build_process_catalog(settings)

    # Override DI so endpoints use the provided settings
    app.dependency_overrides[get_settings] = lambda: settings

    # ── Middleware (outermost → innermost) ────────────────────────────
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    from fitsm.api.routers import processes, terms, vocabulary

    # Health endpoints at root level (no prefix) for container healthchecks
    app.include_router(
        create_health_router(
            "fitsm-vocabulary",
            version=settings.api_version,
            checks=[HealthCheck("vocabulary", vocabulary_check(app.state.repository))],
        ),
    )

    app.include_router(vocabulary.router, prefix=prefix, tags=["vocabulary"])
    app.include_router(terms.router, prefix=prefix, tags=["terms"])
    app.include_router(processes.router, prefix=prefix, tags=["processes"])

    return app
