"""
FitSM vocabulary: canonical term models, derived fields and the term repository.

Usage::

    from fitsm.vocabulary import TermRepository

    repo = TermRepository()
    repo.get_by_slug("configuration-item-ci").acronym_expansion   # 'CI'
    repo.relationships_for(15)
"""

from fitsm.vocabulary.derive import extract_acronym, first_char_key, infer_category, slugify
from fitsm.vocabulary.integrity import IntegrityViolation, check_integrity
from fitsm.vocabulary.loader import load_dataset, load_processes
from fitsm.vocabulary.models import (
    FieldError,
    LetterGroup,
    Process,
    ProcessType,
    Relationship,
    Term,
    TermCreate,
    TermRelationships,
    TermSummary,
    VocabularyDataset,
    VocabularyMetadata,
    WriteResult,
)
from fitsm.vocabulary.processes import ProcessCatalog, build_process_catalog
from fitsm.vocabulary.repository import TermRepository, build_repository

__all__ = [
    "FieldError",
    "IntegrityViolation",
    "LetterGroup",
    "Process",
    "ProcessCatalog",
    "ProcessType",
    "Relationship",
    "Term",
    "TermCreate",
    "TermRelationships",
    "TermRepository",
    "TermSummary",
    "VocabularyDataset",
    "VocabularyMetadata",
    "WriteResult",
    "build_process_catalog",
    "build_repository",
    "check_integrity",
    "extract_acronym",
    "first_char_key",
    "infer_category",
    "load_dataset",
    "load_processes",
    "slugify",
]
