"""End-to-end tests for the ``fitsm`` command against the packaged data."""

from __future__ import annotations

import json
import os
from unittest.mock import patch

from typer.testing import CliRunner

from fitsm import __version__
from fitsm.cli.app import app

runner = CliRunner()


class TestRoot:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"fitsm-vocabulary {__version__}" in result.output

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "terms" in result.output


class TestTerms:
    def test_get_by_slug(self):
        result = runner.invoke(app, ["terms", "get", "activity"])
        assert result.exit_code == 0
        assert "Set of actions carried out within a process" in result.output

    def test_search_json(self):
        result = runner.invoke(app, ["terms", "search", "audit", "--json"])
        assert result.exit_code == 0
        assert [t["name"] for t in json.loads(result.output)] == ["Audit", "Improvement", "Report"]

    def test_names_sorted(self):
        result = runner.invoke(app, ["terms", "names", "--sort", "--json"])
        names = json.loads(result.output)
        assert names == sorted(names, key=lambda n: (n.casefold(), n))

    def test_letter_a(self):
        result = runner.invoke(app, ["terms", "letter", "a", "--json"])
        assert [t["name"] for t in json.loads(result.output)][0] == "Activity"

    def test_bad_letter(self):
        assert runner.invoke(app, ["terms", "letter", "abc"]).exit_code == 1

    def test_related(self):
        result = runner.invoke(app, ["terms", "related", "8"])
        assert result.exit_code == 0
        assert "Narrower Terms" in result.output
        assert "Emergency change" in result.output

    def test_related_unknown(self):
        assert runner.invoke(app, ["terms", "related", "999"]).exit_code == 1


class TestVocab:
    def test_info_json(self):
        result = runner.invoke(app, ["vocab", "info", "--json"])
        assert result.exit_code == 0
        info = json.loads(result.output)
        assert info["term_count"] == 80
        assert info["publisher"] == "ITEMO e.V."

    def test_check_packaged(self):
        result = runner.invoke(app, ["vocab", "check"])
        assert result.exit_code == 0
        assert "OK" in result.output

    def test_check_bad_file(self, dataset_file):
        path = dataset_file(
            {
                "metadata": {"version": "1", "title": "Bad"},
                "terms": [
                    {
                        "@id": "fitsm:alpha",
                        "fitsmId": 1,
                        "fitsmNumber": "6.1",
                        "prefLabel": "Alpha",
                        "definition": "First",
                        "broader": ["fitsm:ghost"],
                    }
                ],
            }
        )
        result = runner.invoke(app, ["vocab", "check", "--dataset", str(path), "--json"])
        assert result.exit_code == 1
        report = json.loads(result.stdout)
        assert report["valid"] is False
        assert report["violations"][0]["code"] == "DANGLING_EDGE"


class TestProcesses:
    def test_list(self):
        result = runner.invoke(app, ["processes", "list", "--json"])
        assert [p["id"] for p in json.loads(result.output)] == ["spm", "rlm", "ism"]

    def test_get_missing(self):
        assert runner.invoke(app, ["processes", "get", "nope"]).exit_code == 1


class TestOpenAPI:
    def test_export_to_file(self, tmp_path):
        target = tmp_path / "docs" / "openapi.json"
        result = runner.invoke(app, ["openapi", "export", "-o", str(target)])
        assert result.exit_code == 0
        document = json.loads(target.read_text(encoding="utf-8"))
        assert document["info"]["title"] == "FitSM Vocabulary API"
        assert "/api/v1/terms/search" in document["paths"]


def _serve_settings():
    from fitsm.core.settings import FitsmBaseSettings

    return FitsmBaseSettings(_env_file=None, host="127.0.0.1", port=8787)


class TestServe:
    @patch("fitsm.cli.serve.get_settings", _serve_settings)
    @patch("fitsm.cli.serve.uvicorn.run")
    def test_start_uses_factory(self, mock_run):
        result = runner.invoke(app, ["serve", "start", "--port", "9999"])
        assert result.exit_code == 0
        args, kwargs = mock_run.call_args
        assert args == ("fitsm.api:create_app",)
        assert kwargs["factory"] is True
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 9999
        assert kwargs["log_level"] == "info"

    @patch("fitsm.cli.serve.get_settings", _serve_settings)
    @patch("fitsm.cli.serve.uvicorn.run")
    def test_dataset_and_lenient_exported(self, mock_run, monkeypatch, dataset_file):
        # monkeypatch restores both on teardown
        monkeypatch.setenv("FITSM_DATASET_PATH", "unset")
        monkeypatch.setenv("FITSM_STRICT_INTEGRITY", "true")
        path = dataset_file({"metadata": {"version": "1", "title": "T"}, "terms": []})
        result = runner.invoke(app, ["serve", "start", "--dataset", str(path), "--lenient"])
        assert result.exit_code == 0
        assert os.environ["FITSM_DATASET_PATH"] == str(path.resolve())
        assert os.environ["FITSM_STRICT_INTEGRITY"] == "false"
