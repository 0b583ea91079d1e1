"""
Typed response objects for operations.

Term, process and relationship payloads are the vocabulary's own pydantic
models; the dataclasses here cover the aggregate views that have no model
of their own.  Responses carry only domain data, never HTTP status codes
or CLI formatting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class LetterSummary:
    """One bucket of the alphabetical index."""

    letter: str
    count: int


@dataclass(frozen=True, slots=True)
class CategorySummary:
    name: str
    count: int


@dataclass(slots=True)
class VocabularyInfo:
    """Result payload for :func:`fitsm.ops.vocabulary.get_vocabulary_info`."""

    title: str
    version: str
    description: str = ""
    source: str = ""
    publisher: str = ""
    license: str = ""
    last_modified: str = ""
    term_count: int = 0
    relationship_count: int = 0
    categories: list[str] = field(default_factory=list)
    letters: list[str] = field(default_factory=list)
    relationship_types: list[dict[str, Any]] = field(default_factory=list)


@dataclass(slots=True)
class IntegrityReport:
    """Result payload for :func:`fitsm.ops.vocabulary.check_vocabulary`."""

    term_count: int
    strict: bool
    valid: bool
    violations: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class CreatePreview:
    """Dry-run payload: what a write would store, without storing it."""

    dry_run: bool
    would_create: dict[str, Any]
