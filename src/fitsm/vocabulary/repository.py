"""
Term repository: the authoritative in-memory view of the vocabulary.

The dataset is loaded once, validated, and turned into a
:class:`_RepositoryState` holding the term tuple and three indices (by slug,
by numeric id, by external ``ref``).  Reads never mutate that state apart
from memoising resolved relationships.  The only write, :meth:`TermRepository.add`,
builds a *new* state with the same :func:`_build_state` used at load time and
swaps it in under the lock, so indices and data cannot diverge and a refused
write leaves everything untouched.

"Not found" is ``None``; a refused write is a :class:`WriteResult` carrying
field errors.  Nothing here raises for well-formed input; only
:meth:`TermRepository.initialize` raises, when the dataset cannot be loaded
or (in strict mode) breaks an integrity rule.

Examples:
    >>> repo = TermRepository()
    >>> repo.get_by_slug("activity").definition
    'Set of actions carried out within a process'
    >>> repo.search("   ")
    []
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from functools import partial
from typing import Any

from pydantic import ValidationError

from fitsm.core.errors import DatasetIntegrityError
from fitsm.core.logging import get_logger
from fitsm.core.settings import FitsmBaseSettings
from fitsm.vocabulary.derive import DIGIT_BUCKET, first_char_key
from fitsm.vocabulary.integrity import IntegrityViolation, check_integrity
from fitsm.vocabulary.loader import load_dataset
from fitsm.vocabulary.models import (
    RELATION_KINDS,
    RELATION_LABELS,
    FieldError,
    LetterGroup,
    Relationship,
    RelationshipType,
    Term,
    TermCreate,
    TermRelationships,
    TermSummary,
    VocabularyDataset,
    VocabularyMetadata,
    WriteResult,
    as_payload,
    field_errors_from,
)

logger = get_logger(__name__)

ALL_CATEGORIES = "all"


def _name_sort_key(term: Term) -> tuple[str, str]:
    return (term.name.casefold(), term.name)


@dataclass
class _RepositoryState:
    """One consistent snapshot: terms in canonical order plus their indices."""

    terms: tuple[Term, ...]
    by_slug: dict[str, Term]
    by_id: dict[int, Term]
    by_ref: dict[str, Term]
    violations: tuple[IntegrityViolation, ...] = ()
    relationships: dict[int, TermRelationships] = field(default_factory=dict)


def _build_state(terms: Iterable[Term], violations: Iterable[IntegrityViolation] = ()) -> _RepositoryState:
    terms = tuple(terms)
    by_slug: dict[str, Term] = {}
    by_id: dict[int, Term] = {}
    by_ref: dict[str, Term] = {}
    for term in terms:
        # first occurrence wins if a lenient load let duplicates through
        by_slug.setdefault(term.slug, term)
        by_id.setdefault(term.id, term)
        by_ref.setdefault(term.ref, term)
    return _RepositoryState(
        terms=terms,
        by_slug=by_slug,
        by_id=by_id,
        by_ref=by_ref,
        violations=tuple(violations),
    )


class TermRepository:
    """Read-mostly repository over the canonical term dataset.

    Args:
        loader: Zero-argument callable returning the canonical dataset.
        strict: Raise :class:`DatasetIntegrityError` on load when the dataset
            has integrity violations.  When False, violations are logged and
            the dataset is served as-is.
    """

    def __init__(
        self,
        loader: Callable[[], VocabularyDataset] = load_dataset,
        *,
        strict: bool = True,
    ) -> None:
        self._loader = loader
        self._strict = strict
        self._lock = threading.RLock()
        self._state: _RepositoryState | None = None
        self._metadata: VocabularyMetadata | None = None
        self._relationship_types: tuple[RelationshipType, ...] = ()

    @classmethod
    def from_terms(
        cls,
        terms: Iterable[Term],
        *,
        strict: bool = True,
        metadata: VocabularyMetadata | None = None,
    ) -> TermRepository:
        """Repository over an explicit term list instead of the packaged file."""
        dataset = VocabularyDataset(
            metadata=metadata or VocabularyMetadata(version="0", title="Ad-hoc vocabulary"),
            terms=tuple(terms),
        )
        return cls(lambda: dataset, strict=strict)

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    @property
    def initialized(self) -> bool:
        return self._state is not None

    @property
    def strict(self) -> bool:
        return self._strict

    def initialize(self) -> None:
        """Load, validate and index the dataset.  Later calls are no-ops."""
        if self._state is not None:
            return
        with self._lock:
            if self._state is not None:
                return

            dataset = self._loader()
            violations = check_integrity(dataset.terms)
            for v in violations:
                log = logger.error if self._strict else logger.warning
                log("integrity_violation", code=v.code, term_id=v.term_id, field=v.field, detail=v.message)
            if violations and self._strict:
                raise DatasetIntegrityError(violations, context={"term_count": len(dataset.terms)})

            state = _build_state(dataset.terms, violations)
            self._metadata = dataset.metadata
            self._relationship_types = dataset.relationship_types
            self._state = state
            logger.info(
                "vocabulary_loaded",
                terms=len(state.terms),
                edges=_edge_count(state.terms),
                violations=len(violations),
            )

    def _current(self) -> _RepositoryState:
        self.initialize()
        assert self._state is not None
        return self._state

    # ------------------------------------------------------------------ #
    # Lookups
    # ------------------------------------------------------------------ #

    def get_all(self) -> list[Term]:
        """All terms in canonical order."""
        return list(self._current().terms)

    def get_by_slug(self, slug: str) -> Term | None:
        return self._current().by_slug.get(slug)

    def get_by_id(self, term_id: int) -> Term | None:
        return self._current().by_id.get(term_id)

    def get_by_ref(self, ref: str) -> Term | None:
        return self._current().by_ref.get(ref)

    def resolve(self, identifier: str) -> Term | None:
        """Look up by ASCII decimal id first, then by slug."""
        identifier = identifier.strip()
        if identifier.isascii() and identifier.isdecimal():
            term = self.get_by_id(int(identifier))
            if term is not None:
                return term
        return self.get_by_slug(identifier)

    def names(self, *, sort: bool = False) -> list[str]:
        """Name-only projection; canonical order unless *sort*."""
        terms = self._current().terms
        if sort:
            terms = tuple(sorted(terms, key=_name_sort_key))
        return [t.name for t in terms]

    # ------------------------------------------------------------------ #
    # Filters
    # ------------------------------------------------------------------ #

    def search(self, query: str) -> list[Term]:
        """Case-insensitive substring match over name, definition and notes.

        A blank query matches nothing.  Results keep canonical order.
        """
        needle = query.strip().casefold()
        if not needle:
            return []
        return [
            t
            for t in self._current().terms
            if needle in t.name.casefold()
            or needle in t.definition.casefold()
            or any(needle in note.casefold() for note in t.notes)
        ]

    def by_first_char(self, letter: str) -> list[Term]:
        """Terms whose name starts with *letter* (or any digit for ``"0-9"``), sorted by name."""
        terms = self._current().terms
        if letter == DIGIT_BUCKET:
            matches = [t for t in terms if t.name[:1].isdigit()]
        elif len(letter) == 1:
            key = letter.casefold()
            matches = [t for t in terms if t.name[:1].casefold() == key]
        else:
            return []
        return sorted(matches, key=_name_sort_key)

    def letter_index(self) -> list[LetterGroup]:
        """Non-empty alphabetical buckets, ``"0-9"`` first, each sorted by name."""
        buckets: dict[str, list[Term]] = {}
        for term in self._current().terms:
            buckets.setdefault(first_char_key(term.name), []).append(term)
        order = sorted(buckets, key=lambda k: (k != DIGIT_BUCKET, k))
        return [
            LetterGroup(letter=k, terms=tuple(sorted(buckets[k], key=_name_sort_key)))
            for k in order
        ]

    def categories(self) -> list[str]:
        return sorted({t.category for t in self._current().terms})

    def by_category(self, category: str) -> list[Term]:
        terms = self._current().terms
        if category == ALL_CATEGORIES:
            return list(terms)
        return [t for t in terms if t.category == category]

    # ------------------------------------------------------------------ #
    # Relationships
    # ------------------------------------------------------------------ #

    def relationships_for(self, term_id: int) -> TermRelationships | None:
        """Resolve a term's outgoing edges to target summaries.

        Returns None when the term does not exist.  A relation kind with no
        resolvable target is omitted; targets that match no term are dropped.
        """
        state = self._current()
        cached = state.relationships.get(term_id)
        if cached is not None:
            return cached

        term = state.by_id.get(term_id)
        if term is None:
            return None

        resolved: dict[str, Relationship] = {}
        for kind in RELATION_KINDS:
            targets: list[TermSummary] = []
            for ref in dict.fromkeys(term.edges(kind)):
                target = state.by_ref.get(ref)
                if target is None:
                    logger.debug("dangling_edge_dropped", term_id=term_id, kind=kind, ref=ref)
                    continue
                targets.append(target.summary())
            if targets:
                resolved[kind] = Relationship(type=kind, label=RELATION_LABELS[kind], terms=tuple(targets))

        result = TermRelationships(term_id=term_id, relationships=resolved)
        return state.relationships.setdefault(term_id, result)

    def relationship_count(self) -> int:
        """Number of canonical edges across all terms."""
        return _edge_count(self._current().terms)

    # ------------------------------------------------------------------ #
    # Dataset info
    # ------------------------------------------------------------------ #

    def metadata(self) -> VocabularyMetadata:
        self._current()
        assert self._metadata is not None
        return self._metadata

    def relationship_types(self) -> list[RelationshipType]:
        self._current()
        return list(self._relationship_types)

    def violations(self) -> list[IntegrityViolation]:
        """Integrity violations found at load (always empty in strict mode)."""
        return list(self._current().violations)

    def __len__(self) -> int:
        return len(self._current().terms)

    # ------------------------------------------------------------------ #
    # Write path
    # ------------------------------------------------------------------ #

    def add(self, payload: Mapping[str, Any] | TermCreate, *, dry_run: bool = False) -> WriteResult[Term]:
        """Validate *payload* and append it as a new, non-persisted term.

        Refused when the payload is malformed, when its id, number, slug or
        ref is already taken, or when an edge points at an unknown term.
        With *dry_run* the checks run but the state is left as it was.
        """
        try:
            candidate = payload if isinstance(payload, TermCreate) else TermCreate.model_validate(as_payload(payload))
            term = candidate.to_term()
        except ValidationError as exc:
            return WriteResult(errors=field_errors_from(exc))

        with self._lock:
            state = self._current()
            errors = _conflicts(state, term)
            if errors:
                refused: WriteResult[Term] = WriteResult(errors=errors)
                logger.info("term_rejected", term_id=term.id, errors=refused.messages)
                return refused
            if dry_run:
                return WriteResult(value=term)
            self._state = _build_state(state.terms + (term,), state.violations)

        logger.info("term_created", term_id=term.id, slug=term.slug)
        return WriteResult(value=term)


def _edge_count(terms: Iterable[Term]) -> int:
    return sum(len(t.edges(kind)) for t in terms for kind in RELATION_KINDS)


def _conflicts(state: _RepositoryState, term: Term) -> list[FieldError]:
    errors = []
    if (other := state.by_id.get(term.id)) is not None:
        errors.append(FieldError("id", f"{term.id} is already used by term {other.name!r}", "DUPLICATE"))
    for other in state.terms:
        if other.number == term.number:
            errors.append(FieldError("number", f"{term.number} is already used by term {other.name!r}", "DUPLICATE"))
            break
    if (other := state.by_slug.get(term.slug)) is not None:
        errors.append(FieldError("name", f"slug {term.slug!r} is already used by term {other.name!r}", "DUPLICATE"))
    if (other := state.by_ref.get(term.ref)) is not None:
        errors.append(FieldError("ref", f"{term.ref!r} is already used by term {other.name!r}", "DUPLICATE"))

    for kind in RELATION_KINDS:
        for i, ref in enumerate(term.edges(kind)):
            if ref == term.ref:
                errors.append(FieldError(f"{kind}.{i}", "a term cannot reference itself", "SELF_REFERENCE"))
            elif ref not in state.by_ref:
                errors.append(FieldError(f"{kind}.{i}", f"{ref!r} matches no term", "DANGLING_EDGE"))
    return errors


def build_repository(settings: FitsmBaseSettings) -> TermRepository:
    """Repository configured from settings (dataset override, strictness)."""
    return TermRepository(
        partial(load_dataset, settings.dataset_path),
        strict=settings.strict_integrity,
    )
