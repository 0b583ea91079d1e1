"""Tests for term operations."""

from __future__ import annotations

from unittest.mock import patch

from fitsm.ops.requests import CreateTermRequest, ListTermsRequest
from fitsm.ops.responses import CreatePreview
from fitsm.ops.result import INTERNAL, NOT_FOUND, VALIDATION_FAILED
from fitsm.ops.terms import (
    create_term,
    get_letter_index,
    get_term,
    get_term_relationships,
    list_categories,
    list_term_names,
    list_terms,
    list_terms_by_category,
    list_terms_by_letter,
    search_terms,
)


def _new_term(**overrides):
    payload = {
        "id": 81,
        "number": "6.81",
        "name": "Service owner",
        "definition": "Person accountable for a service",
    }
    payload.update(overrides)
    return CreateTermRequest(payload=payload)


class TestListTerms:
    def test_default_page_is_everything(self, ctx):
        result = list_terms(ctx)
        assert result.success
        assert result.total == 80
        assert len(result.data) == 80
        assert not result.has_more

    def test_paging(self, ctx):
        result = list_terms(ctx, ListTermsRequest(limit=10, offset=75))
        assert [t.id for t in result.data] == [76, 77, 78, 79, 80]
        assert not result.has_more

        result = list_terms(ctx, ListTermsRequest(limit=10, offset=0))
        assert result.has_more

    def test_internal_error(self, ctx):
        with patch.object(ctx.repository, "get_all", side_effect=RuntimeError("disk")):
            result = list_terms(ctx)
        assert not result.success
        assert result.error.code == INTERNAL
        assert "disk" in result.error.message


class TestNames:
    def test_canonical(self, ctx):
        assert list_term_names(ctx).data[:2] == ["Activity", "Assessment"]

    def test_sorted(self, ctx):
        names = list_term_names(ctx, sort=True).data
        assert names == sorted(names, key=lambda n: (n.casefold(), n))


class TestGetTerm:
    def test_by_slug(self, ctx):
        assert get_term(ctx, "activity").data.id == 1

    def test_by_id(self, ctx):
        assert get_term(ctx, "15").data.slug == "configuration-item-ci"

    def test_not_found(self, ctx):
        result = get_term(ctx, "nonexistent")
        assert result.error.code == NOT_FOUND
        assert "nonexistent" in result.error.message


class TestSearch:
    def test_metadata(self, ctx):
        result = search_terms(ctx, "  audit ")
        assert [t.name for t in result.data] == ["Audit", "Improvement", "Report"]
        assert result.metadata == {"query": "audit", "count": 3}

    def test_missing_query(self, ctx):
        result = search_terms(ctx, None)
        assert result.success
        assert result.data == []


class TestLetters:
    def test_letter(self, ctx):
        assert [t.name for t in list_terms_by_letter(ctx, "A").data][:2] == ["Activity", "Assessment"]

    def test_digits(self, ctx):
        result = list_terms_by_letter(ctx, "0-9")
        assert result.success
        assert result.data == []

    def test_invalid_selector(self, ctx):
        result = list_terms_by_letter(ctx, "abc")
        assert result.error.code == VALIDATION_FAILED
        assert result.error.field_errors[0]["field"] == "letter"

    def test_index(self, ctx):
        index = get_letter_index(ctx).data
        assert index[0].letter == "A"
        assert index[0].count == 5
        assert sum(s.count for s in index) == 80


class TestCategories:
    def test_counts_cover_all_terms(self, ctx):
        summaries = list_categories(ctx).data
        assert sum(s.count for s in summaries) == 80
        assert [s.name for s in summaries] == sorted(s.name for s in summaries)

    def test_by_category(self, ctx):
        assert len(list_terms_by_category(ctx, "all").data) == 80
        assert list_terms_by_category(ctx, "Nope").data == []


class TestRelationships:
    def test_resolved(self, ctx):
        rels = get_term_relationships(ctx, 20).data.relationships
        assert [s.name for s in rels["narrower"].terms] == ["Policy", "Record", "Report"]

    def test_unknown_term(self, ctx):
        assert get_term_relationships(ctx, 999).error.code == NOT_FOUND


class TestCreateTerm:
    def test_created(self, ctx):
        result = create_term(ctx, _new_term())
        assert result.success
        assert result.data.slug == "service-owner"
        assert get_term(ctx, "service-owner").success

    def test_validation_errors(self, ctx):
        result = create_term(ctx, _new_term(id=1, broader=["fitsm:ghost"]))
        assert result.error.code == VALIDATION_FAILED
        fields = {e["field"] for e in result.error.field_errors}
        assert fields == {"id", "broader.0"}

    def test_dry_run_previews(self, dry_ctx):
        result = create_term(dry_ctx, _new_term())
        assert isinstance(result.data, CreatePreview)
        assert result.data.dry_run
        assert result.data.would_create["slug"] == "service-owner"
        assert result.data.would_create["category"] == "Service Management"
        assert get_term(dry_ctx, "service-owner").error.code == NOT_FOUND
