"""Tests for vocabulary-level operations."""

from __future__ import annotations

from fitsm.core.errors import DatasetError
from fitsm.ops.context import OperationContext
from fitsm.ops.result import INTERNAL
from fitsm.ops.vocabulary import check_vocabulary, get_vocabulary_info
from fitsm.vocabulary.repository import TermRepository


class TestVocabularyInfo:
    def test_info(self, ctx):
        info = get_vocabulary_info(ctx).data
        assert info.title == "FitSM Vocabulary"
        assert info.version == "3.0"
        assert info.term_count == 80
        assert info.relationship_count == 167
        assert info.letters[0] == "A"
        assert [rt["ref"] for rt in info.relationship_types] == [
            "skos:broader",
            "skos:narrower",
            "skos:related",
        ]


class TestCheckVocabulary:
    def test_clean(self, ctx):
        report = check_vocabulary(ctx).data
        assert report.valid
        assert report.term_count == 80
        assert report.strict
        assert report.violations == []

    def test_strict_failure_is_reported(self, make_term):
        repo = TermRepository.from_terms([make_term(1, "Alpha", related=("fitsm:alpha",))])
        report = check_vocabulary(OperationContext(repository=repo)).data
        assert not report.valid
        assert report.term_count == 1
        assert report.violations[0]["code"] == "SELF_REFERENCE"

    def test_lenient_failure_is_reported(self, make_term):
        repo = TermRepository.from_terms(
            [make_term(1, "Alpha"), make_term(2, "Alpha", ref="fitsm:other")],
            strict=False,
        )
        report = check_vocabulary(OperationContext(repository=repo)).data
        assert not report.strict
        assert [v["code"] for v in report.violations] == ["DUPLICATE_SLUG"]

    def test_unreadable_dataset(self):
        def loader():
            raise DatasetError("Cannot read dataset file x.json", context={"path": "x.json"})

        result = check_vocabulary(OperationContext(repository=TermRepository(loader)))
        assert result.error.code == INTERNAL
        assert result.error.details == {"path": "x.json"}
