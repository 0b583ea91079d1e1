"""
Process operations.

List, fetch and (in memory) register FitSM processes.
"""

from __future__ import annotations

from fitsm.core.logging import get_logger
from fitsm.ops.context import OperationContext
from fitsm.ops.requests import CreateProcessRequest
from fitsm.ops.responses import CreatePreview
from fitsm.ops.result import INTERNAL, OperationResult, start_timer
from fitsm.vocabulary.models import Process

logger = get_logger(__name__)


def list_processes(ctx: OperationContext) -> OperationResult[list[Process]]:
    timer = start_timer()
    try:
        return OperationResult.ok(ctx.processes.get_all(), elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="list_processes", error=str(exc))
        return OperationResult.fail(INTERNAL, f"Failed to list processes: {exc}", elapsed_ms=timer.elapsed_ms)


def get_process(ctx: OperationContext, process_id: str) -> OperationResult[Process]:
    """Get a single process by ID."""
    timer = start_timer()
    try:
        process = ctx.processes.get(process_id)
        if process is None:
            return OperationResult.not_found(f"Process '{process_id}' not found", elapsed_ms=timer.elapsed_ms)
        return OperationResult.ok(process, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="get_process", error=str(exc))
        return OperationResult.fail(INTERNAL, f"Failed to get process: {exc}", elapsed_ms=timer.elapsed_ms)


def create_process(
    ctx: OperationContext,
    request: CreateProcessRequest,
) -> OperationResult[Process | CreatePreview]:
    """Register a new process; refused on malformed input or a taken id."""
    timer = start_timer()

    try:
        written = ctx.processes.add(request.payload, dry_run=ctx.dry_run)
        if not written.ok:
            return OperationResult.validation_failed(
                "Process validation failed",
                written.errors,
                elapsed_ms=timer.elapsed_ms,
            )
        assert written.value is not None
        if ctx.dry_run:
            return OperationResult.ok(
                CreatePreview(dry_run=True, would_create=written.value.model_dump(mode="json")),
                elapsed_ms=timer.elapsed_ms,
            )
        return OperationResult.ok(written.value, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="create_process", error=str(exc))
        return OperationResult.fail(INTERNAL, f"Failed to create process: {exc}", elapsed_ms=timer.elapsed_ms)
