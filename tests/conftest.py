"""
Shared pytest fixtures for the FitSM vocabulary tests.

- ``repository``: a fresh repository over the packaged dataset
- ``make_term``: factory for ad-hoc terms (small hand-built vocabularies)
- ``ctx`` / ``dry_ctx``: operation contexts over the packaged dataset
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from fitsm.ops.context import OperationContext
from fitsm.vocabulary.models import Term
from fitsm.vocabulary.processes import ProcessCatalog
from fitsm.vocabulary.repository import TermRepository


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark api/cli tests as integration, everything else as unit."""
    for item in items:
        path = Path(str(item.fspath))
        markers = {mark.name for mark in item.iter_markers()}
        if markers.intersection({"unit", "integration"}):
            continue
        if path.parent.name in {"api", "cli"}:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


def build_term(term_id: int, name: str, /, **overrides: Any) -> Term:
    """A valid term whose ref and number follow the dataset conventions."""
    from fitsm.vocabulary.derive import slugify

    fields: dict[str, Any] = {
        "ref": f"fitsm:{slugify(name)}",
        "id": term_id,
        "number": f"6.{term_id}",
        "name": name,
        "definition": f"Definition of {name.lower()}",
    }
    fields.update(overrides)
    return Term(**fields)


@pytest.fixture()
def make_term() -> Callable[..., Term]:
    return build_term


@pytest.fixture()
def repository() -> TermRepository:
    """Repository over the packaged dataset (fresh per test, writes are isolated)."""
    repo = TermRepository()
    repo.initialize()
    return repo


@pytest.fixture()
def processes() -> ProcessCatalog:
    catalog = ProcessCatalog()
    catalog.initialize()
    return catalog


@pytest.fixture()
def ctx(repository: TermRepository, processes: ProcessCatalog) -> OperationContext:
    return OperationContext(repository=repository, processes=processes, caller="test")


@pytest.fixture()
def dry_ctx(repository: TermRepository, processes: ProcessCatalog) -> OperationContext:
    return OperationContext(repository=repository, processes=processes, caller="test", dry_run=True)


@pytest.fixture()
def dataset_file(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Write a dataset dict to a temp JSON file and return its path."""
    import json

    def _write(data: dict[str, Any], name: str = "vocabulary.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
