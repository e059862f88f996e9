"""Tests for the shared API dependencies."""

import threading

import pytest

from apple_docs.api import dependencies as deps
from apple_docs.core.errors import OperationTimeout
from apple_docs.retrieval.search import SearchEngine


def test_engine_finished_after_init_timeout_is_reused(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADOCS_INIT_TIMEOUT", "0.05")
    release = threading.Event()
    opened = []

    def slow_open(settings):
        release.wait(5)
        engine = object()
        opened.append(engine)
        return engine

    monkeypatch.setattr(SearchEngine, "from_settings", slow_open)

    with pytest.raises(OperationTimeout):
        deps.get_engine()

    release.set()
    deps.get_gate().run("drain", 5.0, lambda: None)

    engine = deps.get_engine()
    assert opened == [engine]
    assert deps.get_engine() is engine
