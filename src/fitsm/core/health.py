"""Health endpoints for container orchestration.

``create_health_router()`` mounts three probes on a FastAPI app:

- ``GET /health``        full report; 503 when a required check fails
- ``GET /health/ready``  readiness; 503 unless every check passes
- ``GET /health/live``   liveness; 200 while the process runs

A check is an async callable.  It passes by returning ``True`` or a dict
of details (term counts, for instance), and fails by returning ``False``,
raising, or exceeding its timeout.  :func:`vocabulary_check` builds the
check the API registers for its term repository.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from fitsm.vocabulary.repository import TermRepository

_START_TIME = time.monotonic()

Status = Literal["healthy", "degraded", "unhealthy"]
CheckOutcome = bool | dict[str, Any]


class CheckResult(BaseModel):
    status: Status
    latency_ms: float | None = None
    error: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    status: Status = "healthy"
    service: str = ""
    version: str = ""
    uptime_s: float = Field(default_factory=lambda: round(time.monotonic() - _START_TIME, 1))
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    checks: dict[str, CheckResult] = Field(default_factory=dict)


class LivenessResponse(BaseModel):
    status: str = "alive"


@dataclass
class HealthCheck:
    """One named check.

    A failing ``required`` check makes the service ``unhealthy``; a failing
    optional one only ``degraded``.
    """

    name: str
    check_fn: Callable[[], Awaitable[CheckOutcome]]
    required: bool = True
    timeout_s: float = 5.0


def vocabulary_check(repository: TermRepository) -> Callable[[], Awaitable[CheckOutcome]]:
    """Check that passes once *repository* is loaded and non-empty."""

    async def _check() -> CheckOutcome:
        if not repository.initialized:
            return False
        terms = len(repository)
        if terms == 0:
            return False
        return {
            "terms": terms,
            "edges": repository.relationship_count(),
            "violations": len(repository.violations()),
        }

    return _check


async def _execute(hc: HealthCheck) -> CheckResult:
    start = time.monotonic()

    def _elapsed() -> float:
        return round((time.monotonic() - start) * 1000, 2)

    try:
        outcome = await asyncio.wait_for(hc.check_fn(), timeout=hc.timeout_s)
    except TimeoutError:
        return CheckResult(status="unhealthy", error=f"timed out after {hc.timeout_s}s")
    except Exception as exc:  # noqa: BLE001
        return CheckResult(status="unhealthy", latency_ms=_elapsed(), error=str(exc)[:200])

    if outcome is False:
        return CheckResult(status="unhealthy", latency_ms=_elapsed(), error="check failed")
    details = outcome if isinstance(outcome, dict) else {}
    return CheckResult(status="healthy", latency_ms=_elapsed(), details=details)


async def run_checks(checks: list[HealthCheck]) -> dict[str, CheckResult]:
    """Run *checks* concurrently; name → result."""
    results = await asyncio.gather(*(_execute(hc) for hc in checks))
    return {hc.name: result for hc, result in zip(checks, results, strict=True)}


def overall_status(results: dict[str, CheckResult], checks: list[HealthCheck]) -> Status:
    required = {hc.name for hc in checks if hc.required}
    failed = {name for name, r in results.items() if r.status != "healthy"}
    if failed & required:
        return "unhealthy"
    if failed:
        return "degraded"
    return "healthy"


def create_health_router(
    service_name: str,
    version: str,
    checks: list[HealthCheck] | None = None,
    prefix: str = "/health",
) -> APIRouter:
    """Router with ``{prefix}``, ``{prefix}/ready`` and ``{prefix}/live``."""
    router = APIRouter(tags=["health"])
    registered = list(checks or [])

    async def _report() -> HealthResponse:
        results = await run_checks(registered)
        return HealthResponse(
            status=overall_status(results, registered),
            service=service_name,
            version=version,
            checks=results,
        )

    @router.get(prefix, response_model=HealthResponse)
    async def health() -> JSONResponse:
        report = await _report()
        code = 503 if report.status == "unhealthy" else 200
        return JSONResponse(content=report.model_dump(), status_code=code)

    @router.get(f"{prefix}/ready", response_model=HealthResponse)
    async def readiness() -> JSONResponse:
        report = await _report()
        code = 200 if report.status == "healthy" else 503
        return JSONResponse(content=report.model_dump(), status_code=code)

    @router.get(f"{prefix}/live", response_model=LivenessResponse)
    async def liveness() -> LivenessResponse:
        return LivenessResponse()

    return router
