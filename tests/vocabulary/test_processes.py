"""Tests for the process catalogue."""

from __future__ import annotations

import threading

from fitsm.vocabulary.models import Process, ProcessType
from fitsm.vocabulary.processes import ProcessCatalog


class TestProcessCatalog:
    def test_packaged_processes(self, processes):
        assert [p.id for p in processes.get_all()] == ["spm", "rlm", "ism"]
        assert processes.get("ism").type is ProcessType.OPERATIONAL

    def test_unknown(self, processes):
        assert processes.get("nope") is None

    def test_custom_loader(self):
        catalog = ProcessCatalog(lambda: [Process(id="x", name="X", type="tactical")])
        assert [p.name for p in catalog.get_all()] == ["X"]

    def test_add(self, processes):
        result = processes.add({"id": "cpm", "name": "Capacity management", "type": "tactical"})
        assert result.ok
        assert processes.get("cpm") is result.value

    def test_add_duplicate(self, processes):
        result = processes.add({"id": "spm", "name": "Again", "type": "strategic"})
        assert not result.ok
        assert result.errors[0].code == "DUPLICATE"

    def test_add_invalid(self, processes):
        result = processes.add({"id": "", "name": "X", "type": "weird"})
        assert {e.field for e in result.errors} == {"id", "type"}

    def test_add_dry_run(self, processes):
        result = processes.add({"id": "cpm", "name": "Capacity", "type": "tactical"}, dry_run=True)
        assert result.ok
        assert processes.get("cpm") is None

    def test_concurrent_adds_all_land(self, processes):
        ids = [f"p{i}" for i in range(20)]
        barrier = threading.Barrier(len(ids))

        def add(process_id):
            barrier.wait()
            processes.add({"id": process_id, "name": process_id.upper(), "type": "tactical"})

        threads = [threading.Thread(target=add, args=(i,)) for i in ids]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(processes.get_all()) == 23
        assert all(processes.get(i) is not None for i in ids)
