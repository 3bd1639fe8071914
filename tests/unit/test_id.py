"""Tests for ID generation."""

import threading

import pytest

from core.id import (
    MonotonicGenerator,
    Prefix,
    new_message_id,
    new_node_id,
    new_version_id,
)


class TestGeneration:
    """Basic ID generation."""

    @pytest.mark.unit
    def test_prefixes(self):
        assert new_version_id().startswith(f"{Prefix.VERSION}_")
        assert new_node_id().startswith(f"{Prefix.NODE}_")
        assert new_message_id().startswith(f"{Prefix.MESSAGE}_")

    @pytest.mark.unit
    def test_unique(self):
        ids = {new_node_id() for _ in range(1000)}
        assert len(ids) == 1000


class TestMonotonic:
    """Version IDs sort in creation order."""

    @pytest.mark.unit
    def test_same_millisecond_increases(self):
        generator = MonotonicGenerator()
        ids = [generator.generate() for _ in range(500)]
        assert ids == sorted(ids)
        assert len(set(ids)) == 500

    @pytest.mark.unit
    def test_threads(self):
        generator = MonotonicGenerator()
        out: list[str] = []
        lock = threading.Lock()

        def work():
            local = [generator.generate() for _ in range(200)]
            with lock:
                out.extend(local)

        threads = [threading.Thread(target=work) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(set(out)) == 800
