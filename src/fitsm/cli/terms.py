"""
CLI: ``fitsm terms``: browse and search the vocabulary.
"""

from __future__ import annotations

import typer

from fitsm.cli.utils import console, make_context, output_paged, output_result

app = typer.Typer(no_args_is_help=True)

TERM_COLUMNS = ["id", "number", "name", "slug", "category"]


@app.command("list")
def list_terms(
    limit: int = typer.Option(100, "--limit", "-n", min=1),
    offset: int = typer.Option(0, "--offset", min=0),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List terms in canonical order."""
    from fitsm.ops.requests import ListTermsRequest
    from fitsm.ops.terms import list_terms as _list

    ctx = make_context()
    result = _list(ctx, ListTermsRequest(limit=limit, offset=offset))
    output_paged(result, as_json=json_out, title="Terms", columns=TERM_COLUMNS)


@app.command("names")
def list_names(
    sort: bool = typer.Option(False, "--sort", "-s", help="Alphabetical instead of canonical order"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Print term names only."""
    from fitsm.ops.terms import list_term_names

    ctx = make_context()
    output_result(list_term_names(ctx, sort=sort), as_json=json_out)


@app.command("get")
def get_term(
    identifier: str = typer.Argument(..., help="Numeric id or slug"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show one term."""
    from fitsm.ops.terms import get_term as _get

    ctx = make_context()
    result = _get(ctx, identifier)
    title = f"{result.data.number} {result.data.name}" if result.success and result.data else ""
    output_result(result, as_json=json_out, title=title)


@app.command("search")
def search_terms(
    query: str = typer.Argument(..., help="Substring to look for in name, definition and notes"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Case-insensitive substring search."""
    from fitsm.ops.terms import search_terms as _search

    ctx = make_context()
    result = _search(ctx, query)
    output_result(result, as_json=json_out, title=f"Search: {query.strip()}", columns=TERM_COLUMNS)


@app.command("letter")
def terms_by_letter(
    letter: str = typer.Argument(..., help="A single letter, or 0-9"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Terms starting with a letter (or a digit for 0-9)."""
    from fitsm.ops.terms import list_terms_by_letter

    ctx = make_context()
    result = list_terms_by_letter(ctx, letter)
    output_result(result, as_json=json_out, title=f"Terms: {letter.upper()}", columns=TERM_COLUMNS)


@app.command("letters")
def letter_index(json_out: bool = typer.Option(False, "--json")) -> None:
    """Alphabetical index with term counts."""
    from fitsm.ops.terms import get_letter_index

    ctx = make_context()
    output_result(get_letter_index(ctx), as_json=json_out, title="Letters")


@app.command("categories")
def list_categories(json_out: bool = typer.Option(False, "--json")) -> None:
    """Inferred categories with term counts."""
    from fitsm.ops.terms import list_categories as _list

    ctx = make_context()
    output_result(_list(ctx), as_json=json_out, title="Categories")


@app.command("category")
def terms_by_category(
    category: str = typer.Argument(..., help="Category name, or 'all'"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Terms in one category."""
    from fitsm.ops.terms import list_terms_by_category

    ctx = make_context()
    result = list_terms_by_category(ctx, category)
    output_result(result, as_json=json_out, title=category, columns=TERM_COLUMNS)


@app.command("related")
def term_relationships(
    term_id: int = typer.Argument(..., help="Numeric term id"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show a term's broader, narrower and related terms."""
    from fitsm.ops.terms import get_term_relationships

    ctx = make_context()
    result = get_term_relationships(ctx, term_id)
    if json_out or not result.success:
        output_result(result, as_json=json_out)
        return

    assert result.data is not None
    if not result.data.relationships:
        console.print("[dim]No relationships.[/dim]")
        return
    for rel in result.data.relationships.values():
        console.print(f"[bold]{rel.label}[/bold]")
        for target in rel.terms:
            console.print(f"  - {target.name} [dim]({target.slug})[/dim]")
