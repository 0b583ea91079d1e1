"""
Term operations.

Read access to the vocabulary (full records, name projections, lookup,
search, alphabetical and category views, resolved relationships) plus the
guarded in-memory create path.
"""

from __future__ import annotations

from fitsm.core.logging import get_logger
from fitsm.ops.context import OperationContext
from fitsm.ops.requests import CreateTermRequest, ListTermsRequest
from fitsm.ops.responses import CategorySummary, CreatePreview, LetterSummary
from fitsm.ops.result import INTERNAL, OperationResult, PagedResult, start_timer
from fitsm.vocabulary.derive import DIGIT_BUCKET
from fitsm.vocabulary.models import FieldError, Term, TermRelationships

logger = get_logger(__name__)


def list_terms(
    ctx: OperationContext,
    request: ListTermsRequest | None = None,
) -> PagedResult[Term]:
    """Full term records in canonical order, one page at a time."""
    request = request or ListTermsRequest()
    timer = start_timer()

    try:
        terms = ctx.repository.get_all()
        page = terms[request.offset : request.offset + request.limit]
        return PagedResult.from_items(
            page,
            total=len(terms),
            limit=request.limit,
            offset=request.offset,
            elapsed_ms=timer.elapsed_ms,
        )
    except Exception as exc:
        logger.exception("op_failed", op="list_terms", error=str(exc))
        return PagedResult.fail(INTERNAL, f"Failed to list terms: {exc}", elapsed_ms=timer.elapsed_ms)


def list_term_names(ctx: OperationContext, *, sort: bool = False) -> OperationResult[list[str]]:
    """Name-only projection; canonical order unless *sort*."""
    timer = start_timer()
    try:
        return OperationResult.ok(ctx.repository.names(sort=sort), elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="list_term_names", error=str(exc))
        return OperationResult.fail(INTERNAL, f"Failed to list term names: {exc}", elapsed_ms=timer.elapsed_ms)


def get_term(ctx: OperationContext, identifier: str) -> OperationResult[Term]:
    """Resolve *identifier* as a numeric id first, then as a slug."""
    timer = start_timer()

    try:
        term = ctx.repository.resolve(identifier)
        if term is None:
            return OperationResult.not_found(f"Term '{identifier}' not found", elapsed_ms=timer.elapsed_ms)
        return OperationResult.ok(term, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="get_term", error=str(exc))
        return OperationResult.fail(INTERNAL, f"Failed to get term: {exc}", elapsed_ms=timer.elapsed_ms)


def search_terms(ctx: OperationContext, query: str | None) -> OperationResult[list[Term]]:
    """Substring search; a missing or blank query yields no results."""
    timer = start_timer()

    try:
        results = ctx.repository.search(query or "")
        return OperationResult.ok(
            results,
            elapsed_ms=timer.elapsed_ms,
            metadata={"query": (query or "").strip(), "count": len(results)},
        )
    except Exception as exc:
        logger.exception("op_failed", op="search_terms", error=str(exc))
        return OperationResult.fail(INTERNAL, f"Search failed: {exc}", elapsed_ms=timer.elapsed_ms)


def list_terms_by_letter(ctx: OperationContext, letter: str) -> OperationResult[list[Term]]:
    """Terms whose name starts with *letter*; ``"0-9"`` selects leading digits."""
    timer = start_timer()

    if letter != DIGIT_BUCKET and len(letter) != 1:
        return OperationResult.validation_failed(
            f"Invalid letter selector '{letter}'",
            [FieldError("letter", f"must be a single character or '{DIGIT_BUCKET}'")],
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        return OperationResult.ok(ctx.repository.by_first_char(letter), elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="list_terms_by_letter", error=str(exc))
        return OperationResult.fail(INTERNAL, f"Failed to list terms by letter: {exc}", elapsed_ms=timer.elapsed_ms)


def get_letter_index(ctx: OperationContext) -> OperationResult[list[LetterSummary]]:
    """Non-empty alphabetical buckets with their term counts."""
    timer = start_timer()
    try:
        groups = ctx.repository.letter_index()
        return OperationResult.ok(
            [LetterSummary(letter=g.letter, count=g.count) for g in groups],
            elapsed_ms=timer.elapsed_ms,
        )
    except Exception as exc:
        logger.exception("op_failed", op="get_letter_index", error=str(exc))
        return OperationResult.fail(INTERNAL, f"Failed to build letter index: {exc}", elapsed_ms=timer.elapsed_ms)


def list_categories(ctx: OperationContext) -> OperationResult[list[CategorySummary]]:
    timer = start_timer()
    try:
        repo = ctx.repository
        summaries = [CategorySummary(name=c, count=len(repo.by_category(c))) for c in repo.categories()]
        return OperationResult.ok(summaries, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="list_categories", error=str(exc))
        return OperationResult.fail(INTERNAL, f"Failed to list categories: {exc}", elapsed_ms=timer.elapsed_ms)


def list_terms_by_category(ctx: OperationContext, category: str) -> OperationResult[list[Term]]:
    """Terms in *category*; ``"all"`` returns every term, unknown categories none."""
    timer = start_timer()
    try:
        return OperationResult.ok(ctx.repository.by_category(category), elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="list_terms_by_category", error=str(exc))
        return OperationResult.fail(INTERNAL, f"Failed to list category: {exc}", elapsed_ms=timer.elapsed_ms)


def get_term_relationships(ctx: OperationContext, term_id: int) -> OperationResult[TermRelationships]:
    """Resolved edges of one term.

    An unknown id is ``NOT_FOUND``; a known term without edges succeeds with
    an empty ``relationships`` mapping.
    """
    timer = start_timer()

    try:
        resolved = ctx.repository.relationships_for(term_id)
        if resolved is None:
            return OperationResult.not_found(f"Term {term_id} not found", elapsed_ms=timer.elapsed_ms)
        return OperationResult.ok(resolved, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="get_term_relationships", error=str(exc))
        return OperationResult.fail(INTERNAL, f"Failed to resolve relationships: {exc}", elapsed_ms=timer.elapsed_ms)


def create_term(
    ctx: OperationContext,
    request: CreateTermRequest,
) -> OperationResult[Term | CreatePreview]:
    """Validate and append a term (in memory only).

    All refusals (malformed fields, a taken id/number/slug/ref, unknown
    edge targets) are reported together in one ``VALIDATION_FAILED`` result.  With
    ``ctx.dry_run`` the checks run and a preview is returned instead.
    """
    timer = start_timer()

    try:
        written = ctx.repository.add(request.payload, dry_run=ctx.dry_run)
        if not written.ok:
            return OperationResult.validation_failed(
                "Term validation failed",
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
        logger.exception("op_failed", op="create_term", error=str(exc))
        return OperationResult.fail(INTERNAL, f"Failed to create term: {exc}", elapsed_ms=timer.elapsed_ms)
