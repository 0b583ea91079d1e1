"""
Terms router: lookup, search, alphabetical and category views, relationships.

Endpoints:
    GET  /terms                          Full term records (paged, canonical order)
    GET  /terms/all                      Term names, alphabetical
    GET  /terms/names                    Term names (canonical order, ``?sort=true`` for alphabetical)
    GET  /terms/search?q=                Case-insensitive substring search
    GET  /terms/letters                  Alphabetical index (non-empty buckets)
    GET  /terms/letters/{letter}         Terms starting with a letter, or ``0-9``
    GET  /terms/categories               Inferred categories with counts
    GET  /terms/categories/{category}    Terms in a category (``all`` for every term)
    GET  /terms/{identifier}             One term, by numeric id or slug
    GET  /terms/{term_id}/relationships  Resolved broader / narrower / related edges
    POST /terms                          Append a term (in memory, validated)

Literal paths are registered before ``/{identifier}`` so they are never
captured as identifiers.
"""

from __future__ import annotations

from dataclasses import replace

from fastapi import APIRouter, Path, Query, Request, Response

from fitsm.api.deps import OpContext
from fitsm.api.schemas.common import PagedResponse, PageMeta, SuccessResponse
from fitsm.api.schemas.terms import CategorySchema, LetterSchema, TermSchema
from fitsm.api.utils import _dc, _handle_error
from fitsm.vocabulary.models import TermCreate, TermRelationships

router = APIRouter(prefix="/terms")


@router.get("", response_model=PagedResponse[TermSchema])
def list_terms(
    ctx: OpContext,
    limit: int = Query(100, ge=1, le=500, description="Maximum items to return"),
    offset: int = Query(0, ge=0, description="Pagination offset"),
):
    """List full term records in canonical order."""
    from fitsm.ops.requests import ListTermsRequest
    from fitsm.ops.terms import list_terms as _list

    result = _list(ctx, ListTermsRequest(limit=limit, offset=offset))
    if not result.success:
        return _handle_error(result)

    return PagedResponse(
        data=[TermSchema.from_term(t) for t in result.data or []],
        page=PageMeta.from_result(result.total, result.limit, result.offset),
        elapsed_ms=result.elapsed_ms,
    )


@router.get("/all", response_model=SuccessResponse[list[str]])
def list_all_names(ctx: OpContext):
    """All term names, sorted alphabetically."""
    from fitsm.ops.terms import list_term_names

    result = list_term_names(ctx, sort=True)
    if not result.success:
        return _handle_error(result)
    return SuccessResponse(data=result.data or [], elapsed_ms=result.elapsed_ms)


@router.get("/names", response_model=SuccessResponse[list[str]])
def list_names(
    ctx: OpContext,
    sort: bool = Query(False, description="Sort alphabetically instead of canonical order"),
):
    """Name-only projection of the vocabulary."""
    from fitsm.ops.terms import list_term_names

    result = list_term_names(ctx, sort=sort)
    if not result.success:
        return _handle_error(result)
    return SuccessResponse(data=result.data or [], elapsed_ms=result.elapsed_ms)


@router.get("/search", response_model=SuccessResponse[list[TermSchema]])
def search_terms(
    ctx: OpContext,
    q: str | None = Query(None, description="Substring to look for in name, definition and notes"),
):
    """Search terms.

    Matching is case-insensitive; an empty or missing query returns no
    results rather than the whole vocabulary.
    """
    from fitsm.ops.terms import search_terms as _search

    result = _search(ctx, q)
    if not result.success:
        return _handle_error(result)
    return SuccessResponse(
        data=[TermSchema.from_term(t) for t in result.data or []],
        elapsed_ms=result.elapsed_ms,
        meta=result.metadata,
    )


@router.get("/letters", response_model=SuccessResponse[list[LetterSchema]])
def letter_index(ctx: OpContext):
    """Alphabetical index: each non-empty bucket with its term count."""
    from fitsm.ops.terms import get_letter_index

    result = get_letter_index(ctx)
    if not result.success:
        return _handle_error(result)
    return SuccessResponse(data=[LetterSchema(**_dc(g)) for g in result.data or []], elapsed_ms=result.elapsed_ms)


@router.get("/letters/{letter}", response_model=SuccessResponse[list[TermSchema]])
def terms_by_letter(
    request: Request,
    ctx: OpContext,
    letter: str = Path(..., description="A single letter, or '0-9' for names starting with a digit"),
):
    """Terms whose name starts with *letter*, sorted by name."""
    from fitsm.ops.terms import list_terms_by_letter

    result = list_terms_by_letter(ctx, letter)
    if not result.success:
        return _handle_error(result, instance=request.url.path)
    return SuccessResponse(data=[TermSchema.from_term(t) for t in result.data or []], elapsed_ms=result.elapsed_ms)


@router.get("/categories", response_model=SuccessResponse[list[CategorySchema]])
def list_categories(ctx: OpContext):
    from fitsm.ops.terms import list_categories as _list

    result = _list(ctx)
    if not result.success:
        return _handle_error(result)
    return SuccessResponse(data=[CategorySchema(**_dc(c)) for c in result.data or []], elapsed_ms=result.elapsed_ms)


@router.get("/categories/{category}", response_model=SuccessResponse[list[TermSchema]])
def terms_by_category(
    ctx: OpContext,
    category: str = Path(..., description="Category name, or 'all'"),
):
    """Terms in one inferred category."""
    from fitsm.ops.terms import list_terms_by_category

    result = list_terms_by_category(ctx, category)
    if not result.success:
        return _handle_error(result)
    return SuccessResponse(data=[TermSchema.from_term(t) for t in result.data or []], elapsed_ms=result.elapsed_ms)


@router.get("/{term_id}/relationships", response_model=SuccessResponse[TermRelationships])
def term_relationships(
    request: Request,
    ctx: OpContext,
    term_id: int = Path(..., description="Numeric term id"),
):
    """Resolved relationship edges of one term.

    Kinds without a resolvable target are omitted.  An unknown id is a 404;
    a term with no relationships returns an empty mapping.
    """
    from fitsm.ops.terms import get_term_relationships

    result = get_term_relationships(ctx, term_id)
    if not result.success:
        return _handle_error(result, instance=request.url.path)
    return SuccessResponse(data=result.data, elapsed_ms=result.elapsed_ms)


@router.get("/{identifier}", response_model=SuccessResponse[TermSchema])
def get_term(
    request: Request,
    ctx: OpContext,
    identifier: str = Path(..., description="Numeric id or slug"),
):
    """Get one term, resolving the identifier as an id first, then as a slug."""
    from fitsm.ops.terms import get_term as _get

    result = _get(ctx, identifier)
    if not result.success:
        return _handle_error(result, instance=request.url.path)
    return SuccessResponse(data=TermSchema.from_term(result.data), elapsed_ms=result.elapsed_ms)


@router.post("", status_code=201, response_model=SuccessResponse[TermSchema])
def create_term(
    request: Request,
    response: Response,
    ctx: OpContext,
    body: TermCreate,
    dry_run: bool = Query(False, description="Validate and preview without storing"),
):
    """Append a term to the in-memory vocabulary.

    The term is checked for unique id, number, slug and ref, and every
    relationship target must already exist.  Not persisted across restarts.
    A dry run answers 200 with the would-be term.
    """
    from fitsm.ops.requests import CreateTermRequest
    from fitsm.ops.terms import create_term as _create

    result = _create(replace(ctx, dry_run=dry_run), CreateTermRequest(payload=body.model_dump()))
    if not result.success:
        return _handle_error(result, instance=request.url.path)
    if dry_run:
        response.status_code = 200
        return SuccessResponse(data=_dc(result.data)["would_create"], elapsed_ms=result.elapsed_ms, meta={"dry_run": True})
    return SuccessResponse(data=TermSchema.from_term(result.data), elapsed_ms=result.elapsed_ms)
