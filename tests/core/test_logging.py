"""Tests for fitsm.core.logging."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from fitsm.core import logging as fitsm_logging
from fitsm.core.logging import bind_context, configure_logging, get_logger, unbind_context


@pytest.fixture(autouse=True)
def _reset_structlog():
    root_level = logging.getLogger().level
    yield
    logging.getLogger().setLevel(root_level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    fitsm_logging._SERVICE_NAME = "fitsm"


def _json_records(caplog) -> list[dict]:
    return [json.loads(r.getMessage()) for r in caplog.records if r.name == "fitsm.test"]


class TestConfigureLogging:
    def test_json_output_has_service_and_ecs_keys(self, caplog):
        configure_logging(level="INFO", json_format=True, service="fitsm-test")
        get_logger("fitsm.test").info("vocabulary_loaded", terms=80)

        record = _json_records(caplog)[-1]
        assert record["event"] == "vocabulary_loaded"
        assert record["terms"] == 80
        assert record["service.name"] == "fitsm-test"
        assert record["log.level"] == "info"
        assert record["logger"] == "fitsm.test"
        assert "@timestamp" in record

    def test_level_filters_debug(self, caplog):
        configure_logging(level="INFO", json_format=True)
        get_logger("fitsm.test").debug("should_not_appear")
        assert not any("should_not_appear" in r.getMessage() for r in caplog.records)

    def test_console_format(self, caplog):
        configure_logging(level="DEBUG", json_format=False)
        get_logger("fitsm.test").debug("console_event", key="value")
        assert any("console_event" in r.getMessage() for r in caplog.records)

    def test_without_timestamp(self, caplog):
        configure_logging(json_format=True, add_timestamp=False)
        get_logger("fitsm.test").warning("no_clock")
        assert "@timestamp" not in _json_records(caplog)[-1]

    def test_root_level_follows_setting(self):
        configure_logging(level="WARNING", json_format=True)
        assert logging.getLogger().level == logging.WARNING


class TestContextBinding:
    def test_bound_context_appears_in_logs(self, caplog):
        configure_logging(level="INFO", json_format=True)
        bind_context(request_id="req-1")
        get_logger("fitsm.test").info("with_context")
        unbind_context("request_id")
        get_logger("fitsm.test").info("without_context")

        by_event = {r["event"]: r for r in _json_records(caplog)}
        assert by_event["with_context"]["request_id"] == "req-1"
        assert "request_id" not in by_event["without_context"]
