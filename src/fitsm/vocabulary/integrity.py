"""
Dataset integrity validation.

The vocabulary is hand-curated; these checks make the curator's promises
explicit.  ``check_integrity`` collects *every* violation instead of stopping
at the first, so one run reports everything that needs fixing.

Checked:
    - ``id``, ``number``, ``slug`` and ``ref`` are unique
    - every broader / narrower / related reference resolves
    - no term references itself

Not checked: symmetry.  A ``broader`` edge without the matching ``narrower``
edge on its target is allowed.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass

from fitsm.vocabulary.models import RELATION_KINDS, Term


@dataclass(frozen=True, slots=True)
class IntegrityViolation:
    """A single broken rule, tied to the offending term where possible."""

    code: str
    message: str
    term_id: int | None = None
    field: str | None = None


def _duplicates(
    terms: Iterable[Term],
    key: Callable[[Term], Hashable],
    code: str,
    field: str,
) -> list[IntegrityViolation]:
    seen: dict[Hashable, Term] = {}
    found = []
    for term in terms:
        value = key(term)
        first = seen.setdefault(value, term)
        if first is not term:
            found.append(
                IntegrityViolation(
                    code=code,
                    message=f"{field} {value!r} of term {term.id} ({term.name}) is already used by term {first.id} ({first.name})",
                    term_id=term.id,
                    field=field,
                )
            )
    return found


def check_integrity(terms: Iterable[Term]) -> list[IntegrityViolation]:
    """Return every integrity violation in *terms* (empty list when clean)."""
    terms = list(terms)
    violations: list[IntegrityViolation] = []
    violations += _duplicates(terms, lambda t: t.id, "DUPLICATE_ID", "id")
    violations += _duplicates(terms, lambda t: t.number, "DUPLICATE_NUMBER", "number")
    violations += _duplicates(terms, lambda t: t.slug, "DUPLICATE_SLUG", "slug")
    violations += _duplicates(terms, lambda t: t.ref, "DUPLICATE_REF", "ref")

    refs = {t.ref for t in terms}
    for term in terms:
        for kind in RELATION_KINDS:
            for target in term.edges(kind):
                if target == term.ref:
                    violations.append(
                        IntegrityViolation(
                            code="SELF_REFERENCE",
                            message=f"term {term.id} ({term.name}) lists itself as {kind}",
                            term_id=term.id,
                            field=kind,
                        )
                    )
                elif target not in refs:
                    violations.append(
                        IntegrityViolation(
                            code="DANGLING_EDGE",
                            message=f"term {term.id} ({term.name}) has {kind} reference {target!r} that matches no term",
                            term_id=term.id,
                            field=kind,
                        )
                    )
    return violations
