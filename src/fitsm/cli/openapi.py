"""
CLI: ``fitsm openapi``: regenerate the machine-readable API description.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from fitsm.cli.utils import console

app = typer.Typer(no_args_is_help=True)


@app.command("export")
def export(
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout"),
) -> None:
    """Export the OpenAPI document generated from the API routes."""
    from fitsm.api import create_app
    from fitsm.api.settings import FitsmAPISettings

    document = create_app(settings=FitsmAPISettings()).openapi()
    text = json.dumps(document, indent=2)

    if output is None:
        console.print_json(text)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    console.print(f"[green]Wrote[/green] {output} ({len(document.get('paths', {}))} paths)")
