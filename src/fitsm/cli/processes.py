"""
CLI: ``fitsm processes``: the FitSM process catalogue.
"""

from __future__ import annotations

import typer

from fitsm.cli.utils import make_context, output_result

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_processes(json_out: bool = typer.Option(False, "--json")) -> None:
    """List processes."""
    from fitsm.ops.processes import list_processes as _list

    ctx = make_context()
    output_result(_list(ctx), as_json=json_out, title="Processes", columns=["id", "name", "type"])


@app.command("get")
def get_process(
    process_id: str = typer.Argument(..., help="Process ID, e.g. ism"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show one process."""
    from fitsm.ops.processes import get_process as _get

    ctx = make_context()
    output_result(_get(ctx, process_id), as_json=json_out, title=process_id)
