"""
Shared API router utilities.

- ``_dc()``: convert a dataclass or dict to a plain dict
- ``_handle_error()``: convert a failed OperationResult to a ``problem_response``
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi.responses import JSONResponse

from fitsm.api.middleware.errors import problem_response, status_for_error_code
from fitsm.ops.result import OperationResult


def _dc(obj: Any) -> dict[str, Any]:
    """Convert a dataclass (or dict) to a plain dict.

    Returns an empty dict for objects that are neither dataclasses nor dicts.
    """
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    return obj if isinstance(obj, dict) else {}


def _handle_error(result: OperationResult[Any], instance: str = "") -> JSONResponse:
    """Convert a failed ``OperationResult`` into a Problem Details response.

    The error code picks the HTTP status; field errors (if any) are carried
    through to ``errors`` and summarised in ``detail``.
    """
    if result.error is None:
        return problem_response(status=500, title="Operation failed", instance=instance)
    field_errors = result.error.field_errors
    return problem_response(
        status=status_for_error_code(result.error.code),
        title=result.error.message,
        detail="; ".join(e["message"] for e in field_errors),
        instance=instance,
        errors=field_errors,
    )
