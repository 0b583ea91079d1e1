"""
CLI: ``fitsm serve``: run the REST API under uvicorn.
"""

from __future__ import annotations

import os
from pathlib import Path

import typer
import uvicorn

from fitsm.cli.utils import console, get_settings

app = typer.Typer(no_args_is_help=True)


@app.command("start")
def start(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address (default: FITSM_HOST)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port (default: FITSM_PORT)"),
    dataset: Path | None = typer.Option(
        None, "--dataset", exists=True, dir_okay=False, help="Serve this vocabulary file instead of the packaged one"
    ),
    lenient: bool = typer.Option(False, "--lenient", help="Start even if the dataset has integrity violations"),
    reload: bool = typer.Option(False, "--reload", help="Restart when source files change"),
    workers: int = typer.Option(1, "--workers", "-w", min=1),
    log_level: str | None = typer.Option(None, "--log-level", help="uvicorn log level (default: FITSM_LOG_LEVEL)"),
) -> None:
    """Serve the vocabulary API.

    The app is built by ``fitsm.api:create_app`` in each worker, so dataset
    options are handed over as ``FITSM_*`` environment variables.
    """
    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port

    if dataset is not None:
        os.environ["FITSM_DATASET_PATH"] = str(dataset.resolve())
    if lenient:
        os.environ["FITSM_STRICT_INTEGRITY"] = "false"

    console.print(f"[bold green]FitSM vocabulary API[/bold green] listening on http://{bind_host}:{bind_port}")
    uvicorn.run(
        "fitsm.api:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        workers=workers,
        log_level=(log_level or settings.log_level).lower(),
    )
