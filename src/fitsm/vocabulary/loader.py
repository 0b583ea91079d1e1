"""
Dataset loading.

The canonical vocabulary and the process catalogue ship as JSON package
data under ``fitsm/data``.  Either can be replaced with a file on disk
(``FITSM_DATASET_PATH`` / ``FITSM_PROCESSES_PATH``).
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from fitsm.core.errors import DatasetError, ErrorCategory
from fitsm.core.logging import get_logger
from fitsm.vocabulary.models import Process, VocabularyDataset

logger = get_logger(__name__)

DATA_PACKAGE = "fitsm.data"
VOCABULARY_FILE = "fitsm_vocabulary.json"
PROCESSES_FILE = "fitsm_processes.json"


def _read_json(path: Path | None, packaged_name: str) -> Any:
    """Read JSON from *path*, or from the packaged resource when *path* is None."""
    location = str(path) if path is not None else f"{DATA_PACKAGE}/{packaged_name}"
    try:
        if path is not None:
            text = Path(path).read_text(encoding="utf-8")
        else:
            text = resources.files(DATA_PACKAGE).joinpath(packaged_name).read_text(encoding="utf-8")
    except OSError as exc:
        raise DatasetError(
            f"Cannot read dataset file {location}",
            context={"path": location},
            cause=exc,
        ) from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DatasetError(
            f"Dataset file {location} is not valid JSON: {exc.msg} (line {exc.lineno})",
            category=ErrorCategory.PARSE,
            context={"path": location},
            cause=exc,
        ) from exc


def parse_dataset(raw: Any, *, location: str = "<memory>") -> VocabularyDataset:
    """Validate raw JSON into a :class:`VocabularyDataset`."""
    try:
        return VocabularyDataset.model_validate(raw)
    except ValidationError as exc:
        raise DatasetError(
            f"Dataset {location} does not match the vocabulary schema: {exc.error_count()} error(s)",
            category=ErrorCategory.PARSE,
            context={"path": location, "errors": [str(e["loc"]) + ": " + e["msg"] for e in exc.errors()]},
            cause=exc,
        ) from exc


def load_dataset(path: Path | None = None) -> VocabularyDataset:
    """Load the canonical vocabulary (packaged file unless *path* is given)."""
    raw = _read_json(path, VOCABULARY_FILE)
    dataset = parse_dataset(raw, location=str(path or VOCABULARY_FILE))
    logger.debug("dataset_read", path=str(path or VOCABULARY_FILE), terms=len(dataset.terms))
    return dataset


def load_processes(path: Path | None = None) -> list[Process]:
    """Load the process catalogue (packaged file unless *path* is given)."""
    raw = _read_json(path, PROCESSES_FILE)
    entries = raw.get("processes", []) if isinstance(raw, dict) else raw
    try:
        return [Process.model_validate(entry) for entry in entries]
    except ValidationError as exc:
        raise DatasetError(
            f"Process catalogue {path or PROCESSES_FILE} is invalid: {exc.error_count()} error(s)",
            category=ErrorCategory.PARSE,
            cause=exc,
        ) from exc
