"""Shared FastAPI dependencies."""

from __future__ import annotations

import threading
from functools import lru_cache

from apple_docs.core.config import Settings, get_settings
from apple_docs.core.gate import OperationGate
from apple_docs.core.logging import get_logger
from apple_docs.retrieval.search import SearchEngine

logger = get_logger(__name__)

_GATE: OperationGate | None = None
_ENGINE: SearchEngine | None = None
_INIT_LOCK = threading.Lock()


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    return get_settings()


def get_gate() -> OperationGate:
    global _GATE
    with _INIT_LOCK:
        if _GATE is None:
            _GATE = OperationGate()
        return _GATE


def get_engine() -> SearchEngine:
    """Open the engine on first use; initialisation runs through the gate too."""
    if _ENGINE is not None:
        return _ENGINE
    settings = get_app_settings()
    return get_gate().run(
        "Engine initialization",
        settings.init_timeout,
        _open_engine,
        settings,
    )


def _open_engine(settings: Settings) -> SearchEngine:
    # Runs on the gate worker, so opening is serialised. The engine is published
    # here so one that finishes after an init timeout is kept for later callers.
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = SearchEngine.from_settings(settings)
    return _ENGINE


def set_engine(engine: SearchEngine | None) -> None:
    """Install a pre-built engine (tests, embedding in other services)."""
    global _ENGINE
    _ENGINE = engine


def shutdown() -> None:
    global _ENGINE, _GATE
    if _GATE is not None:
        # drain queued work before the store handle goes away
        _GATE.shutdown(wait=True)
        _GATE = None
    if _ENGINE is not None:
        logger.info("Shutting down search engine")
        _ENGINE.close()
        _ENGINE = None


__all__ = [
    "get_app_settings",
    "get_gate",
    "get_engine",
    "set_engine",
    "shutdown",
]
