"""
Vocabulary router: API landing document and scheme metadata.

Endpoints:
    GET /             API info (name, version, endpoint map)
    GET /vocabulary   Scheme metadata with live counts
"""

from __future__ import annotations

from fastapi import APIRouter

from fitsm.api.deps import OpContext, Settings
from fitsm.api.schemas.common import SuccessResponse
from fitsm.api.schemas.terms import ApiInfoSchema, VocabularySchema
from fitsm.api.utils import _dc, _handle_error

router = APIRouter()

ENDPOINTS: dict[str, str] = {
    "terms": "/terms",
    "all_terms": "/terms/all",
    "term_names": "/terms/names",
    "search": "/terms/search?q={query}",
    "letters": "/terms/letters",
    "by_letter": "/terms/letters/{letter}",
    "categories": "/terms/categories",
    "by_category": "/terms/categories/{category}",
    "term": "/terms/{id_or_slug}",
    "relationships": "/terms/{id}/relationships",
    "vocabulary": "/vocabulary",
    "processes": "/processes",
    "process": "/processes/{process_id}",
}


@router.get("/", response_model=SuccessResponse[ApiInfoSchema])
def api_info(settings: Settings):
    """Landing document: what this API is and where its endpoints live."""
    prefix = settings.api_prefix
    info = ApiInfoSchema(
        name=settings.api_title,
        version=settings.api_version,
        description=settings.api_description,
        docs=f"{prefix}/docs",
        openapi=f"{prefix}/openapi.json",
        endpoints={name: f"{prefix}{path}" for name, path in ENDPOINTS.items()},
    )
    return SuccessResponse(data=info)


@router.get("/vocabulary", response_model=SuccessResponse[VocabularySchema])
def vocabulary_info(ctx: OpContext):
    """Scheme metadata (title, version, licence) with term and edge counts."""
    from fitsm.ops.vocabulary import get_vocabulary_info

    result = get_vocabulary_info(ctx)
    if not result.success:
        return _handle_error(result)
    return SuccessResponse(data=VocabularySchema(**_dc(result.data)), elapsed_ms=result.elapsed_ms)
