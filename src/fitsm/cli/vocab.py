"""
CLI: ``fitsm vocab``: scheme metadata and dataset integrity.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from fitsm.cli.utils import console, err_console, fail, make_context, output_result

app = typer.Typer(no_args_is_help=True)


@app.command("info")
def info(json_out: bool = typer.Option(False, "--json")) -> None:
    """Show vocabulary metadata and counts."""
    from fitsm.ops.vocabulary import get_vocabulary_info

    ctx = make_context()
    output_result(get_vocabulary_info(ctx), as_json=json_out, title="Vocabulary")


@app.command("check")
def check(
    dataset: Path | None = typer.Option(
        None,
        "--dataset",
        "-f",
        exists=True,
        dir_okay=False,
        help="Check this file instead of the configured dataset",
    ),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Validate the dataset: unique ids, numbers and slugs, resolvable edges.

    Exits with status 1 when any violation is found.
    """
    from dataclasses import replace
    from functools import partial

    from fitsm.ops.vocabulary import check_vocabulary
    from fitsm.vocabulary.loader import load_dataset
    from fitsm.vocabulary.repository import TermRepository

    ctx = make_context()
    if dataset is not None:
        ctx = replace(ctx, repository=TermRepository(partial(load_dataset, dataset), strict=False))

    result = check_vocabulary(ctx)
    if not result.success:
        fail(result)
    report = result.data
    assert report is not None

    if json_out:
        console.print_json(json.dumps({
            "valid": report.valid,
            "term_count": report.term_count,
            "violations": report.violations,
        }))
    elif report.valid:
        console.print(f"[bold green]OK[/bold green] {report.term_count} terms, no integrity violations")
    else:
        err_console.print(f"[bold red]{len(report.violations)} integrity violation(s)[/bold red]")
        for v in report.violations:
            where = f" term {v['term_id']}" if v.get("term_id") is not None else ""
            err_console.print(f"  [red]{v['code']}[/red]{where}: {v['message']}")

    if not report.valid:
        raise typer.Exit(code=1)
