"""
Operation result envelope.

Operations report outcomes as values.  A call yields an
:class:`OperationResult` holding either ``data`` or an :class:`OperationError`;
list operations that page yield a :class:`PagedResult`.  Three error codes
cover every way a vocabulary operation can fail:

- ``NOT_FOUND``: slug / id / process lookup miss
- ``VALIDATION_FAILED``: malformed input or a refused write; ``details``
  carries the field-path-qualified ``errors`` list
- ``INTERNAL``: unexpected exception, logged by the operation
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from fitsm.core.errors import ErrorCategory
from fitsm.vocabulary.models import FieldError

T = TypeVar("T")

NOT_FOUND = "NOT_FOUND"
VALIDATION_FAILED = "VALIDATION_FAILED"
INTERNAL = "INTERNAL"


@dataclass(frozen=True, slots=True)
class OperationError:
    """Why an operation failed.

    ``details`` is free-form context; for ``VALIDATION_FAILED`` it holds an
    ``errors`` list of ``{field, message, code}`` dicts.
    """

    code: str
    message: str
    category: ErrorCategory | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def field_errors(self) -> list[dict[str, str]]:
        return list(self.details.get("errors", []))


@dataclass
class OperationResult(Generic[T]):
    """Outcome of one operation call.  Build with the classmethods."""

    success: bool
    data: T | None = None
    error: OperationError | None = None
    warnings: list[str] = field(default_factory=list)
    elapsed_ms: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(
        cls,
        data: T,
        *,
        warnings: list[str] | None = None,
        elapsed_ms: float = 0.0,
        metadata: dict[str, Any] | None = None,
    ) -> OperationResult[T]:
        return cls(
            success=True,
            data=data,
            warnings=list(warnings or ()),
            elapsed_ms=elapsed_ms,
            metadata=dict(metadata or {}),
        )

    @classmethod
    def fail(
        cls,
        code: str,
        message: str,
        *,
        category: ErrorCategory | None = None,
        details: dict[str, Any] | None = None,
        elapsed_ms: float = 0.0,
    ) -> OperationResult[T]:
        err = OperationError(code, message, category, dict(details or {}))
        return cls(success=False, error=err, elapsed_ms=elapsed_ms)

    @classmethod
    def not_found(cls, message: str, *, elapsed_ms: float = 0.0) -> OperationResult[T]:
        return cls.fail(NOT_FOUND, message, elapsed_ms=elapsed_ms)

    @classmethod
    def validation_failed(
        cls,
        message: str,
        errors: Iterable[FieldError] = (),
        *,
        elapsed_ms: float = 0.0,
    ) -> OperationResult[T]:
        """Refusal carrying one entry per offending field."""
        entries = [{"field": e.field, "message": str(e), "code": e.code} for e in errors]
        return cls.fail(
            VALIDATION_FAILED,
            message,
            category=ErrorCategory.VALIDATION,
            details={"errors": entries},
            elapsed_ms=elapsed_ms,
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for JSON output; empty members are left out."""
        out: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            out["data"] = self.data
        if self.error is not None:
            error: dict[str, Any] = {"code": self.error.code, "message": self.error.message}
            if self.error.details:
                error["details"] = self.error.details
            out["error"] = error
        optional = {
            "warnings": self.warnings,
            "elapsed_ms": round(self.elapsed_ms, 2) if self.elapsed_ms else None,
            "metadata": self.metadata,
        }
        out.update({k: v for k, v in optional.items() if v})
        return out


@dataclass
class PagedResult(OperationResult[list[T]]):
    """A page of a longer list plus the numbers needed to fetch the next one."""

    total: int = 0
    limit: int = 100
    offset: int = 0
    has_more: bool = False

    @classmethod
    def from_items(
        cls,
        items: list[T],
        total: int,
        *,
        limit: int = 100,
        offset: int = 0,
        elapsed_ms: float = 0.0,
    ) -> PagedResult[T]:
        return cls(
            success=True,
            data=items,
            elapsed_ms=elapsed_ms,
            total=total,
            limit=limit,
            offset=offset,
            has_more=offset + limit < total,
        )

    def to_dict(self) -> dict[str, Any]:
        page = {"total": self.total, "limit": self.limit, "offset": self.offset, "has_more": self.has_more}
        return super().to_dict() | page


class Stopwatch:
    """Wall-clock milliseconds since construction."""

    __slots__ = ("_t0",)

    def __init__(self) -> None:
        self._t0 = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._t0) * 1000.0


def start_timer() -> Stopwatch:
    return Stopwatch()
