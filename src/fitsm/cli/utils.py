"""
CLI utility helpers: output formatting and shared repository access.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from functools import lru_cache
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from fitsm.core.settings import FitsmBaseSettings
from fitsm.ops.context import OperationContext
from fitsm.ops.result import OperationResult, PagedResult
from fitsm.vocabulary.processes import ProcessCatalog, build_process_catalog
from fitsm.vocabulary.repository import TermRepository, build_repository

console = Console()
err_console = Console(stderr=True)


# ── Repository helpers ───────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_settings() -> FitsmBaseSettings:
    return FitsmBaseSettings()


@lru_cache(maxsize=1)
def get_repository() -> TermRepository:
    """Process-wide repository, initialised lazily on first query."""
    return build_repository(get_settings())


@lru_cache(maxsize=1)
def get_process_catalog() -> ProcessCatalog:
    return build_process_catalog(get_settings())


def make_context(*, dry_run: bool = False) -> OperationContext:
    """Create an ``OperationContext`` for CLI commands."""
    return OperationContext(
        repository=get_repository(),
        processes=get_process_catalog(),
        caller="cli",
        dry_run=dry_run,
    )


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / pydantic model / dict to plain dict."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def _to_json(obj: Any) -> Any:
    if isinstance(obj, list | tuple):
        return [_to_json(o) for o in obj]
    if isinstance(obj, str | int | float | bool) or obj is None:
        return obj
    return _to_dict(obj)


def fail(result: OperationResult) -> None:
    """Print the error of a failed result (with field errors) and exit 1."""
    err = result.error
    msg = err.message if err else "Unknown error"
    code = err.code if err else "ERROR"
    err_console.print(f"[bold red]Error[/bold red] ({code}): {msg}")
    for field_error in err.field_errors if err else []:
        err_console.print(f"  [red]-[/red] {field_error['message']}")
    raise typer.Exit(code=1)


def output_result(
    result: OperationResult,
    *,
    as_json: bool = False,
    title: str = "",
    columns: list[str] | None = None,
) -> None:
    """Render an ``OperationResult`` to the terminal.

    *columns* restricts table output to those keys; JSON output is always
    the full payload.
    """
    if not result.success:
        fail(result)

    data = result.data

    if as_json:
        console.print_json(json.dumps(_to_json(data), default=str))
        return

    if isinstance(data, list):
        if not data:
            console.print("[dim]No items.[/dim]")
            return
        if all(isinstance(d, str) for d in data):
            if title:
                console.print(f"[bold]{title}[/bold]")
            for d in data:
                console.print(d, highlight=False)
            return
        _print_table(data, title=title, columns=columns)
    else:
        _print_dict(_to_dict(data), title=title)


def output_paged(
    result: PagedResult,
    *,
    as_json: bool = False,
    title: str = "",
    columns: list[str] | None = None,
) -> None:
    """Render a ``PagedResult`` to the terminal with pagination info."""
    if not result.success:
        fail(result)

    items = result.data or []

    if as_json:
        payload = {
            "items": [_to_dict(d) for d in items],
            "total": result.total,
            "limit": result.limit,
            "offset": result.offset,
            "has_more": result.has_more,
        }
        console.print_json(json.dumps(payload, default=str))
        return

    if not items:
        console.print("[dim]No items.[/dim]")
        return

    _print_table(items, title=title, columns=columns)
    console.print(
        f"\n[dim]Showing {len(items)} of {result.total}"
        f" (offset {result.offset})[/dim]"
    )


# ── Private helpers ──────────────────────────────────────────────────────


def _print_table(items: list, *, title: str = "", columns: list[str] | None = None) -> None:
    """Render a list of models/dataclasses/dicts as a Rich table."""
    rows = [_to_dict(item) for item in items]
    cols = columns or list(rows[0])
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in cols:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(_cell(row.get(col)) for col in cols))
    console.print(table)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list | tuple):
        return ", ".join(str(v) for v in value)
    return str(value)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        if isinstance(v, list) and v and not isinstance(v[0], dict):
            console.print(f"  [cyan]{k}[/cyan]:")
            for i, item in enumerate(v, 1):
                console.print(f"    {i}. {item}")
        else:
            console.print(f"  [cyan]{k}[/cyan]: {_cell(v)}")
