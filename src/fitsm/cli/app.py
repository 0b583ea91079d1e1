"""
Root Typer application for the ``fitsm`` command.
"""

from __future__ import annotations

import typer
from typer import Typer

from fitsm import __version__

app = Typer(
    name="fitsm",
    help="FitSM vocabulary: browse terms, check the dataset, serve the API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"fitsm-vocabulary {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """FitSM vocabulary CLI: terms, relationships, processes and the REST API."""


# ── Sub-command registration ─────────────────────────────────────────────

from fitsm.cli.openapi import app as openapi_app  # noqa: E402
from fitsm.cli.processes import app as processes_app  # noqa: E402
from fitsm.cli.serve import app as serve_app  # noqa: E402
from fitsm.cli.terms import app as terms_app  # noqa: E402
from fitsm.cli.vocab import app as vocab_app  # noqa: E402

app.add_typer(terms_app, name="terms", help="Browse and search terms.")
app.add_typer(vocab_app, name="vocab", help="Vocabulary metadata and integrity.")
app.add_typer(processes_app, name="processes", help="FitSM processes.")
app.add_typer(openapi_app, name="openapi", help="OpenAPI document.")
app.add_typer(serve_app, name="serve", help="Start the API server.")
