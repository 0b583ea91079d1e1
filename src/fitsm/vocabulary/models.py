"""
Vocabulary data model.

Canonical records are parsed straight from the SKOS / JSON-LD style dataset
(``@id``, ``fitsmId``, ``prefLabel`` …) into frozen pydantic models with
Pythonic field names.  Derived view fields (``slug``, ``acronym_expansion``,
``category``) are computed fields: they appear in every dump but are never
stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, computed_field, field_validator

from fitsm.vocabulary.derive import extract_acronym, infer_category, slugify

T = TypeVar("T")

RelationKind = Literal["broader", "narrower", "related"]

RELATION_KINDS: tuple[RelationKind, ...] = ("broader", "narrower", "related")

RELATION_LABELS: dict[str, str] = {
    "broader": "Broader Terms",
    "narrower": "Narrower Terms",
    "related": "Related Terms",
}

TERM_NUMBER_PATTERN = r"^6\.\d+$"


# ------------------------------------------------------------------ #
# Canonical records
# ------------------------------------------------------------------ #


class TermSource(BaseModel):
    """Where in the standard a term is defined."""

    model_config = ConfigDict(frozen=True)

    document: str
    section: str
    page: int | None = None


class Term(BaseModel):
    """One vocabulary entry.

    ``id`` is the standard's numeric id, ``ref`` the stable external
    identifier used by relationship edges.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ref: str = Field(alias="@id", min_length=1)
    concept_type: str = Field(default="skos:Concept", alias="@type")
    id: int = Field(alias="fitsmId", gt=0)
    number: str = Field(alias="fitsmNumber", pattern=TERM_NUMBER_PATTERN)
    name: str = Field(alias="prefLabel", min_length=1)
    definition: str = Field(min_length=1)
    notes: tuple[str, ...] = ()
    broader: tuple[str, ...] = ()
    narrower: tuple[str, ...] = ()
    related: tuple[str, ...] = ()
    language: str = "en"
    source: TermSource | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def slug(self) -> str:
        return slugify(self.name)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def acronym_expansion(self) -> str | None:
        return extract_acronym(self.name)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def category(self) -> str:
        return infer_category(self.name, self.definition)

    def edges(self, kind: RelationKind) -> tuple[str, ...]:
        """Outgoing references of one relation kind."""
        return getattr(self, kind)

    def summary(self) -> TermSummary:
        return TermSummary(id=self.ref, name=self.name, slug=self.slug)


class RelationshipType(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ref: str = Field(alias="@id")
    concept_type: str = Field(default="rdf:Property", alias="@type")
    label: str = Field(alias="prefLabel")
    definition: str = ""
    inverse: str | None = None
    transitive: bool = False


class VocabularyMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: str
    title: str
    description: str = ""
    source: str = ""
    publisher: str = ""
    license: str = ""
    last_modified: str = Field(default="", alias="lastModified")


class VocabularyDataset(BaseModel):
    """The whole canonical file: scheme header, relation types and terms."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    context: dict[str, str] = Field(default_factory=dict, alias="@context")
    concept_type: str = Field(default="skos:ConceptScheme", alias="@type")
    ref: str = Field(default="", alias="@id")
    metadata: VocabularyMetadata
    relationship_types: tuple[RelationshipType, ...] = Field(default=(), alias="relationshipTypes")
    terms: tuple[Term, ...]


# ------------------------------------------------------------------ #
# Views
# ------------------------------------------------------------------ #


class TermSummary(BaseModel):
    """Target of a relationship edge."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    slug: str


class Relationship(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: RelationKind
    label: str
    terms: tuple[TermSummary, ...]


class TermRelationships(BaseModel):
    """Resolved edges of one term, keyed by relation kind.

    Kinds with no resolvable target are absent from ``relationships``.
    """

    model_config = ConfigDict(frozen=True)

    term_id: int
    relationships: dict[str, Relationship] = Field(default_factory=dict)


class LetterGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    letter: str
    terms: tuple[Term, ...]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def count(self) -> int:
        return len(self.terms)


# ------------------------------------------------------------------ #
# Write path
# ------------------------------------------------------------------ #


class TermCreate(BaseModel):
    """Payload accepted by :meth:`TermRepository.add`.

    Derived fields (slug, acronym, category) are ignored if supplied.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    id: int = Field(gt=0)
    number: str = Field(pattern=TERM_NUMBER_PATTERN)
    name: str = Field(min_length=1)
    definition: str = Field(min_length=1)
    notes: list[str] = Field(default_factory=list)
    broader: list[str] = Field(default_factory=list)
    narrower: list[str] = Field(default_factory=list)
    related: list[str] = Field(default_factory=list)
    ref: str | None = None
    language: str = "en"

    @field_validator("name")
    @classmethod
    def _name_has_slug(cls, value: str) -> str:
        if not slugify(value):
            raise ValueError("name must contain at least one letter or digit")
        return value

    def to_term(self) -> Term:
        return Term(
            ref=self.ref or f"fitsm:{slugify(self.name)}",
            id=self.id,
            number=self.number,
            name=self.name,
            definition=self.definition,
            notes=tuple(self.notes),
            broader=tuple(self.broader),
            narrower=tuple(self.narrower),
            related=tuple(self.related),
            language=self.language,
        )


class ProcessType(str, Enum):
    """Process classification within the FitSM framework."""

    STRATEGIC = "strategic"
    TACTICAL = "tactical"
    OPERATIONAL = "operational"


class Process(BaseModel):
    """A FitSM process: activities that turn inputs into outputs."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="ignore")

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str | None = None
    type: ProcessType
    inputs: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()
    objective: str | None = None


@dataclass(frozen=True, slots=True)
class FieldError:
    """One field-path-qualified validation failure."""

    field: str
    message: str
    code: str = "INVALID"

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass
class WriteResult(Generic[T]):
    """Outcome of a write: the stored value, or every reason it was refused."""

    value: T | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors and self.value is not None

    @property
    def messages(self) -> list[str]:
        return [str(e) for e in self.errors]


def field_errors_from(exc: ValidationError) -> list[FieldError]:
    """Flatten a pydantic ``ValidationError`` into :class:`FieldError` entries."""
    errors = []
    for err in exc.errors():
        path = ".".join(str(p) for p in err.get("loc", ())) or "body"
        errors.append(FieldError(field=path, message=err.get("msg", "invalid value"), code=err.get("type", "INVALID")))
    return errors


def as_payload(data: Any) -> Any:
    """Accept either a mapping or a pydantic model as a write payload."""
    if isinstance(data, BaseModel):
        return data.model_dump()
    return data
