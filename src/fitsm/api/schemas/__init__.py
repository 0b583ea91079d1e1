"""API schemas package."""

from fitsm.api.schemas.common import (
    ErrorDetail,
    PagedResponse,
    PageMeta,
    ProblemDetail,
    SuccessResponse,
)
from fitsm.api.schemas.terms import (
    ApiInfoSchema,
    CategorySchema,
    LetterSchema,
    TermSchema,
    VocabularySchema,
)

__all__ = [
    "ApiInfoSchema",
    "CategorySchema",
    "ErrorDetail",
    "LetterSchema",
    "PageMeta",
    "PagedResponse",
    "ProblemDetail",
    "SuccessResponse",
    "TermSchema",
    "VocabularySchema",
]
