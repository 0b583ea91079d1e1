"""
Term, vocabulary and process schemas exposed by the HTTP API.

Terms are served with Pythonic field names plus their derived fields
(``slug``, ``acronym_expansion``, ``category``); the JSON-LD keys of the
canonical file (``@id``, ``prefLabel`` …) stay internal.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from fitsm.vocabulary.models import Term


class TermSchema(BaseModel):
    """One vocabulary term as served by the API."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="Numeric id from the standard")
    number: str = Field(description="Section number, e.g. '6.1'")
    name: str
    slug: str = Field(description="URL-safe identifier derived from the name")
    definition: str
    notes: list[str] = Field(default_factory=list)
    acronym_expansion: str | None = Field(default=None, description="Acronym encoded in the name, e.g. 'CI'")
    category: str = Field(description="Display grouping inferred from name and definition")
    broader: list[str] = Field(default_factory=list)
    narrower: list[str] = Field(default_factory=list)
    related: list[str] = Field(default_factory=list)
    ref: str = Field(description="External identifier used by relationship edges")
    language: str = "en"

    @classmethod
    def from_term(cls, term: Term) -> TermSchema:
        return cls.model_validate(term.model_dump())


class LetterSchema(BaseModel):
    letter: str
    count: int


class CategorySchema(BaseModel):
    name: str
    count: int


class VocabularySchema(BaseModel):
    """Scheme metadata with live counts."""

    title: str
    version: str
    description: str = ""
    source: str = ""
    publisher: str = ""
    license: str = ""
    last_modified: str = ""
    term_count: int = 0
    relationship_count: int = 0
    categories: list[str] = Field(default_factory=list)
    letters: list[str] = Field(default_factory=list)
    relationship_types: list[dict[str, Any]] = Field(default_factory=list)


class ApiInfoSchema(BaseModel):
    """Landing document for the API root."""

    name: str
    version: str
    description: str
    docs: str
    openapi: str
    endpoints: dict[str, str]
