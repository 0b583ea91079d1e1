"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument.  It carries the process-wide term repository and process catalogue
plus per-call identity (request id, caller, dry-run flag).
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from fitsm.vocabulary.processes import ProcessCatalog
from fitsm.vocabulary.repository import TermRepository


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        repository: The shared :class:`TermRepository`.
        processes: The shared :class:`ProcessCatalog`.
        request_id: Unique ID for this invocation (auto-generated).
        caller: Origin of the request, ``"api"``, ``"cli"`` or ``"sdk"``.
        dry_run: When ``True``, writes validate and preview without applying.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    repository: TermRepository
    processes: ProcessCatalog = field(default_factory=ProcessCatalog)
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    dry_run: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
