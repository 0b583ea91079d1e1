"""
Process catalogue: the FitSM processes exposed next to the vocabulary.

Same shape as the term repository: loaded once, read without locking, and
extended only through :meth:`ProcessCatalog.add`, which validates and swaps
in a new tuple under the lock.  Additions are not persisted.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from functools import partial
from typing import Any

from pydantic import ValidationError

from fitsm.core.logging import get_logger
from fitsm.core.settings import FitsmBaseSettings
from fitsm.vocabulary.loader import load_processes
from fitsm.vocabulary.models import FieldError, Process, WriteResult, as_payload, field_errors_from

logger = get_logger(__name__)


class ProcessCatalog:
    def __init__(self, loader: Callable[[], list[Process]] = load_processes) -> None:
        self._loader = loader
        self._lock = threading.RLock()
        self._processes: tuple[Process, ...] | None = None

    def initialize(self) -> None:
        if self._processes is not None:
            return
        with self._lock:
            if self._processes is None:
                self._processes = tuple(self._loader())
                logger.info("processes_loaded", count=len(self._processes))

    def _current(self) -> tuple[Process, ...]:
        self.initialize()
        assert self._processes is not None
        return self._processes

    def get_all(self) -> list[Process]:
        return list(self._current())

    def get(self, process_id: str) -> Process | None:
        return next((p for p in self._current() if p.id == process_id), None)

    def add(self, payload: Mapping[str, Any] | Process, *, dry_run: bool = False) -> WriteResult[Process]:
        """Validate and append a process; duplicate ids are refused."""
        try:
            process = payload if isinstance(payload, Process) else Process.model_validate(as_payload(payload))
        except ValidationError as exc:
            return WriteResult(errors=field_errors_from(exc))

        with self._lock:
            current = self._current()
            if any(p.id == process.id for p in current):
                return WriteResult(errors=[FieldError("id", f"process {process.id!r} already exists", "DUPLICATE")])
            if dry_run:
                return WriteResult(value=process)
            self._processes = current + (process,)

        logger.info("process_created", process_id=process.id)
        return WriteResult(value=process)


def build_process_catalog(settings: FitsmBaseSettings) -> ProcessCatalog:
    return ProcessCatalog(partial(load_processes, settings.processes_path))
