"""
Processes router: the FitSM process catalogue.

Endpoints:
    GET  /processes               List processes
    GET  /processes/{process_id}  Get one process
    POST /processes               Register a process (in memory)
"""

from __future__ import annotations

from dataclasses import replace

from fastapi import APIRouter, Path, Query, Request, Response

from fitsm.api.deps import OpContext
from fitsm.api.schemas.common import SuccessResponse
from fitsm.api.utils import _dc, _handle_error
from fitsm.vocabulary.models import Process

router = APIRouter(prefix="/processes")


@router.get("", response_model=SuccessResponse[list[Process]])
def list_processes(ctx: OpContext):
    from fitsm.ops.processes import list_processes as _list

    result = _list(ctx)
    if not result.success:
        return _handle_error(result)
    return SuccessResponse(data=result.data or [], elapsed_ms=result.elapsed_ms)


@router.get("/{process_id}", response_model=SuccessResponse[Process])
def get_process(
    request: Request,
    ctx: OpContext,
    process_id: str = Path(..., description="Process ID, e.g. 'ism'"),
):
    from fitsm.ops.processes import get_process as _get

    result = _get(ctx, process_id)
    if not result.success:
        return _handle_error(result, instance=request.url.path)
    return SuccessResponse(data=result.data, elapsed_ms=result.elapsed_ms)


@router.post("", status_code=201, response_model=SuccessResponse[Process])
def create_process(
    request: Request,
    response: Response,
    ctx: OpContext,
    body: Process,
    dry_run: bool = Query(False, description="Validate and preview without storing"),
):
    """Register a process.  Refused when the id is already taken."""
    from fitsm.ops.processes import create_process as _create
    from fitsm.ops.requests import CreateProcessRequest

    result = _create(replace(ctx, dry_run=dry_run), CreateProcessRequest(payload=body.model_dump()))
    if not result.success:
        return _handle_error(result, instance=request.url.path)
    if dry_run:
        response.status_code = 200
        return SuccessResponse(data=_dc(result.data)["would_create"], elapsed_ms=result.elapsed_ms, meta={"dry_run": True})
    return SuccessResponse(data=result.data, elapsed_ms=result.elapsed_ms)
