"""Admission gate serialising engine access, with soft per-operation timeouts.

The SQLite handle behind the engine must not be used from two threads at
once, so every engine call is queued onto one worker thread. Callers wait
for the result up to a deadline. When the deadline passes the caller gets
``OperationTimeout`` but the work itself is NOT cancelled: it keeps the
worker until it finishes, and later operations queue behind it.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeout
from typing import Callable, TypeVar

from apple_docs.core.errors import OperationTimeout
from apple_docs.core.logging import get_logger
from apple_docs.core.metrics import OPERATION_TIMEOUTS

logger = get_logger(__name__)

T = TypeVar("T")


class OperationGate:
    """Concurrency-1 queue in front of the search engine."""

    def __init__(self) -> None:
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="adocs-engine")

    def run(self, operation: str, timeout: float, fn: Callable[..., T], *args, **kwargs) -> T:
        future = self._executor.submit(fn, *args, **kwargs)
        try:
            return future.result(timeout=timeout)
        except FuturesTimeout:
            if future.done():
                # the operation itself raised TimeoutError
                raise
            OPERATION_TIMEOUTS.labels(operation=operation).inc()
            logger.error("Operation timeout: %s (%.1fs); work continues in background", operation, timeout)
            future.add_done_callback(lambda done: _log_late_completion(operation, done))
            raise OperationTimeout(operation, timeout) from None

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


def _log_late_completion(operation: str, future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.warning("Timed-out operation %s later failed: %s", operation, exc)
    else:
        logger.info("Timed-out operation %s finished in background", operation)


__all__ = ["OperationGate"]
