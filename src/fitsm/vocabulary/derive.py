"""
Derived view fields: pure functions of a term's canonical fields.

Slug, acronym and category are never stored alongside the canonical record;
they are recomputed from ``name`` / ``definition`` whenever asked for, so they
cannot drift from the data they describe.
"""

from __future__ import annotations

import re

GENERAL_CATEGORY = "General"
DIGIT_BUCKET = "0-9"

_PARENS = re.compile(r"[()]")
_WHITESPACE = re.compile(r"\s+")
_NON_SLUG = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUN = re.compile(r"-+")
_ACRONYM = re.compile(r"\(([A-Z]+)\)")

# Ordered: the first rule with a matching keyword wins.
CATEGORY_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Process Management", ("process",)),
    ("Service Management", ("service",)),
    ("Service Operation", ("incident", "problem", "change")),
    ("Configuration Management", ("configuration", "asset")),
    ("Service Quality", ("capacity", "availability", "performance")),
    ("Service Delivery", ("customer", "supplier", "agreement")),
    ("Governance", ("audit", "review", "assessment")),
    ("Security & Risk", ("security", "risk")),
    ("Financial Management", ("financial", "cost", "budget")),
)


def slugify(name: str) -> str:
    """URL-safe identifier for a display name.

    >>> slugify("Configuration item (CI)")
    'configuration-item-ci'
    >>> slugify("Release and deployment strategy")
    'release-and-deployment-strategy'
    """
    slug = _PARENS.sub("", name.lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _NON_SLUG.sub("", slug)
    slug = _HYPHEN_RUN.sub("-", slug)
    return slug.strip("-")


def extract_acronym(name: str) -> str | None:
    """Return the parenthesised acronym encoded in *name*, if any.

    >>> extract_acronym("Service level agreement (SLA)")
    'SLA'
    >>> extract_acronym("Activity") is None
    True
    """
    match = _ACRONYM.search(name)
    return match.group(1) if match else None


def infer_category(name: str, definition: str) -> str:
    """Display category for a term, by keyword over name and definition."""
    combined = f"{name} {definition}".lower()
    for category, keywords in CATEGORY_RULES:
        if any(keyword in combined for keyword in keywords):
            return category
    return GENERAL_CATEGORY


def first_char_key(name: str) -> str:
    """Alphabetical-index bucket for *name*: ``"0-9"`` or an upper-case letter."""
    first = name[:1]
    if first.isdigit():
        return DIGIT_BUCKET
    return first.upper()
