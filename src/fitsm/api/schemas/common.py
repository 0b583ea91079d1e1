"""
Response envelopes shared by every router.

A 2xx body is a :class:`SuccessResponse` (one object or an unpaged list) or a
:class:`PagedResponse` (``GET /terms``).  A 4xx/5xx body is a
:class:`ProblemDetail` served as ``application/problem+json`` (RFC 7807),
whose ``errors`` list names each rejected field.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, computed_field

T = TypeVar("T")


class ErrorDetail(BaseModel):
    """One rejected field."""

    code: str = Field(description="Machine-readable reason, e.g. 'DUPLICATE' or 'string_pattern_mismatch'")
    message: str = Field(description="Message prefixed with the field path")
    field: str | None = Field(default=None, description="Dotted field path, e.g. 'broader.0' or 'body.number'")


class ProblemDetail(BaseModel):
    """RFC 7807 error body.

    ``status`` follows the operation's error code: ``NOT_FOUND`` is 404,
    ``VALIDATION_FAILED`` 400 and ``INTERNAL`` 500.  For a lookup miss::

        {
            "type": "about:blank",
            "title": "Term 'nonexistent-term' not found",
            "status": 404,
            "detail": "",
            "instance": "/api/v1/terms/nonexistent-term",
            "errors": []
        }
    """

    type: str = Field(default="about:blank", description="Problem type URI")
    title: str = Field(description="Summary of the failure")
    status: int = Field(description="HTTP status code")
    detail: str = Field(default="", description="Field messages joined with '; '")
    instance: str = Field(default="", description="Path of the request that failed")
    errors: list[ErrorDetail] = Field(default_factory=list, description="Per-field errors")


class PageMeta(BaseModel):
    """Where a page sits in the full list."""

    total: int = Field(description="Number of items in the full list")
    limit: int = Field(description="Page size requested")
    offset: int = Field(description="Index of the first item on this page")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_more(self) -> bool:
        return self.offset + self.limit < self.total

    @computed_field  # type: ignore[prop-decorator]
    @property
    def page(self) -> int:
        """1-based page number."""
        return self.offset // self.limit + 1 if self.limit else 1

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        return max(1, -(-self.total // self.limit)) if self.limit else 1

    @classmethod
    def from_result(cls, total: int, limit: int, offset: int) -> PageMeta:
        return cls(total=total, limit=limit, offset=offset)


class SuccessResponse(BaseModel, Generic[T]):
    data: T = Field(description="Payload; its shape depends on the endpoint")
    elapsed_ms: float = Field(default=0.0, description="Time spent in the operation, in ms")
    warnings: list[str] = Field(default_factory=list)
    meta: dict[str, Any] = Field(default_factory=dict, description="Echoed query, counts, dry-run flag")


class PagedResponse(BaseModel, Generic[T]):
    data: list[T] = Field(description="Items on this page")
    page: PageMeta
    elapsed_ms: float = Field(default=0.0, description="Time spent in the operation, in ms")
