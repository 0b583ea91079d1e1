"""
Structured error types for the FitSM vocabulary service.

Exceptions are reserved for load-time failures: a dataset file that cannot
be read or parsed, or a dataset that violates its integrity rules.  Query
and write outcomes travel as values (see :mod:`fitsm.ops.result`).

Architecture:
    ::

        ┌──────────────────────────────────────────────┐
        │                 FitsmError                    │
        │       (category, context, cause)              │
        ├──────────────────────────────────────────────┤
        │  ConfigError        DatasetError              │
        │  (CONFIG)           (SOURCE / PARSE)          │
        │                          │                    │
        │                 DatasetIntegrityError         │
        │                 (VALIDATION, violations)      │
        └──────────────────────────────────────────────┘

Tags:
    error-handling, exception-hierarchy, fitsm, dataset

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fitsm.vocabulary.integrity import IntegrityViolation


class ErrorCategory(str, Enum):
    """Standard error categories for classification and logging."""

    SOURCE = "SOURCE"             # Dataset file missing or unreadable
    PARSE = "PARSE"               # Malformed JSON / schema mismatch
    VALIDATION = "VALIDATION"     # Integrity or constraint violations
    CONFIG = "CONFIG"             # Missing config, invalid settings
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


class FitsmError(Exception):
    """Base class for all service errors.

    Attributes:
        message: Human-readable description.
        category: :class:`ErrorCategory` used for log routing.
        context: Extra key/value metadata for structured logging.
        cause: Underlying exception, if any.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Serialise for logging."""
        d: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            d["context"] = self.context
        if self.cause is not None:
            d["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return d

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, category={self.category.value})"


class ConfigError(FitsmError):
    """Missing or invalid configuration."""

    default_category = ErrorCategory.CONFIG


class DatasetError(FitsmError):
    """The canonical dataset could not be read or does not match its schema."""

    default_category = ErrorCategory.SOURCE


class DatasetIntegrityError(DatasetError):
    """The dataset loaded, but breaks one or more integrity rules.

    Carries *every* violation found so the curator can fix them in one pass.
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(self, violations: Sequence[IntegrityViolation], **kwargs: Any) -> None:
        self.violations = list(violations)
        lines = "; ".join(v.message for v in self.violations)
        super().__init__(
            f"Dataset failed integrity validation ({len(self.violations)} violation(s)): {lines}",
            **kwargs,
        )
