"""API test fixtures: a TestClient with the lifespan running."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from fitsm.api.app import create_app
from fitsm.api.settings import FitsmAPISettings


@pytest.fixture()
def api_settings() -> FitsmAPISettings:
    return FitsmAPISettings(_env_file=None, json_logs=True)


@pytest.fixture()
def client(api_settings):
    with TestClient(create_app(settings=api_settings)) as c:
        yield c
