"""Tests for dataset loading."""

from __future__ import annotations

import pytest

from fitsm.core.errors import DatasetError, ErrorCategory
from fitsm.vocabulary.loader import load_dataset, load_processes, parse_dataset


def _raw(*terms):
    return {"metadata": {"version": "1", "title": "Test"}, "terms": list(terms)}


def _term(term_id, label, **extra):
    return {
        "@id": f"fitsm:{label.lower()}",
        "fitsmId": term_id,
        "fitsmNumber": f"6.{term_id}",
        "prefLabel": label,
        "definition": f"{label} definition",
        **extra,
    }


class TestPackagedDataset:
    def test_loads_all_terms_in_canonical_order(self):
        dataset = load_dataset()
        assert len(dataset.terms) == 80
        assert [t.id for t in dataset.terms] == list(range(1, 81))
        assert dataset.terms[0].name == "Activity"

    def test_metadata(self):
        meta = load_dataset().metadata
        assert meta.title == "FitSM Vocabulary"
        assert meta.version == "3.0"
        assert meta.last_modified == "2025-01-15"

    def test_relationship_types(self):
        refs = [rt.ref for rt in load_dataset().relationship_types]
        assert refs == ["skos:broader", "skos:narrower", "skos:related"]

    def test_packaged_processes(self):
        processes = load_processes()
        assert [p.id for p in processes] == ["spm", "rlm", "ism"]


class TestFileOverride:
    def test_loads_from_path(self, dataset_file):
        path = dataset_file(_raw(_term(1, "Alpha"), _term(2, "Beta")))
        dataset = load_dataset(path)
        assert [t.name for t in dataset.terms] == ["Alpha", "Beta"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(DatasetError) as exc_info:
            load_dataset(tmp_path / "nope.json")
        assert exc_info.value.category is ErrorCategory.SOURCE
        assert exc_info.value.context["path"].endswith("nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DatasetError) as exc_info:
            load_dataset(path)
        assert exc_info.value.category is ErrorCategory.PARSE

    def test_processes_from_list(self, tmp_path):
        path = tmp_path / "processes.json"
        path.write_text('[{"id": "x", "name": "X", "type": "tactical"}]', encoding="utf-8")
        assert [p.id for p in load_processes(path)] == ["x"]

    def test_invalid_process(self, tmp_path):
        path = tmp_path / "processes.json"
        path.write_text('{"processes": [{"id": "x", "name": "X", "type": "nope"}]}', encoding="utf-8")
        with pytest.raises(DatasetError):
            load_processes(path)


class TestParseDataset:
    def test_schema_mismatch_lists_errors(self):
        bad = _raw(_term(1, "Alpha", fitsmNumber="7.1"))
        with pytest.raises(DatasetError) as exc_info:
            parse_dataset(bad, location="inline")
        err = exc_info.value
        assert err.category is ErrorCategory.PARSE
        assert "inline" in err.message
        assert any("fitsmNumber" in e for e in err.context["errors"])

    def test_missing_metadata(self):
        with pytest.raises(DatasetError):
            parse_dataset({"terms": []})
