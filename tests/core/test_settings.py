"""Tests for fitsm.core.settings and fitsm.api.settings."""

from __future__ import annotations

from pathlib import Path

from fitsm.api.settings import FitsmAPISettings
from fitsm.core.settings import FitsmBaseSettings


class TestFitsmBaseSettings:
    def test_defaults(self, monkeypatch):
        for var in ("FITSM_PORT", "FITSM_DATASET_PATH", "FITSM_STRICT_INTEGRITY", "FITSM_LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)
        s = FitsmBaseSettings(_env_file=None)
        assert s.port == 8787
        assert s.log_level == "INFO"
        assert s.dataset_path is None
        assert s.strict_integrity is True
        assert s.json_logs is None

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("FITSM_PORT", "9000")
        monkeypatch.setenv("FITSM_STRICT_INTEGRITY", "false")
        monkeypatch.setenv("FITSM_DATASET_PATH", "/tmp/vocab.json")
        s = FitsmBaseSettings(_env_file=None)
        assert s.port == 9000
        assert s.strict_integrity is False
        assert s.dataset_path == Path("/tmp/vocab.json")

    def test_unknown_env_ignored(self, monkeypatch):
        monkeypatch.setenv("FITSM_NOT_A_SETTING", "x")
        FitsmBaseSettings(_env_file=None)


class TestFitsmAPISettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("FITSM_API_PREFIX", raising=False)
        s = FitsmAPISettings(_env_file=None)
        assert s.api_prefix == "/api/v1"
        assert s.api_title == "FitSM Vocabulary API"
        assert s.cors_origins == ["*"]

    def test_inherits_base(self):
        s = FitsmAPISettings(_env_file=None, port=1234)
        assert isinstance(s, FitsmBaseSettings)
        assert s.port == 1234

    def test_prefix_from_env(self, monkeypatch):
        monkeypatch.setenv("FITSM_API_PREFIX", "/v2")
        assert FitsmAPISettings(_env_file=None).api_prefix == "/v2"
