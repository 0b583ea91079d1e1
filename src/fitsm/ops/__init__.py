"""
Operations layer: transport-agnostic functions shared by the API and CLI.

Every function takes an :class:`OperationContext` first and returns an
:class:`OperationResult` (or :class:`PagedResult`); none of them raise.

Usage::

    from fitsm.ops import OperationContext
    from fitsm.ops.terms import get_term
    from fitsm.vocabulary import TermRepository

    ctx = OperationContext(repository=TermRepository(), caller="sdk")
    result = get_term(ctx, "activity")
    result.data.definition
"""

from fitsm.ops.context import OperationContext
from fitsm.ops.result import OperationError, OperationResult, PagedResult, start_timer

__all__ = [
    "OperationContext",
    "OperationError",
    "OperationResult",
    "PagedResult",
    "start_timer",
]
