"""Per-request wall-clock time, exposed as ``X-Process-Time-Ms`` and logged at debug."""

from __future__ import annotations

from time import perf_counter

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from fitsm.core.logging import get_logger

logger = get_logger(__name__)

HEADER = "X-Process-Time-Ms"


class TimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        t0 = perf_counter()
        response = await call_next(request)
        took = round(1000 * (perf_counter() - t0), 2)
        response.headers[HEADER] = f"{took}"
        logger.debug(
            "request_served",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            elapsed_ms=took,
        )
        return response
