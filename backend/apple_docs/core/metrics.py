"""Prometheus metrics instrumentation."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

from fastapi import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

from apple_docs.core.errors import AppleDocsError

REGISTRY = CollectorRegistry()

REQUEST_COUNT = Counter(
    "adocs_requests_total",
    "Total HTTP requests",
    labelnames=("endpoint", "method", "status"),
    registry=REGISTRY,
)

REQUEST_LATENCY = Histogram(
    "adocs_request_latency_seconds",
    "Latency of HTTP requests",
    labelnames=("endpoint", "method"),
    registry=REGISTRY,
)

SEARCH_RELAXATIONS = Counter(
    "adocs_search_relaxations_total",
    "Searches whose similarity floor was relaxed",
    registry=REGISTRY,
)

OPERATION_TIMEOUTS = Counter(
    "adocs_operation_timeouts_total",
    "Operations that exceeded their soft deadline",
    labelnames=("operation",),
    registry=REGISTRY,
)

CORPUS_SIZE = Gauge(
    "adocs_corpus_documents",
    "Number of documents in the corpus",
    registry=REGISTRY,
)


@contextmanager
def track_request(endpoint: str, method: str) -> Iterator[None]:
    """Record latency and status for one API call."""
    start_time = time.perf_counter()
    status = "200"
    try:
        yield
    except AppleDocsError as exc:
        status = str(exc.status_code)
        raise
    except Exception:
        status = "500"
        raise
    finally:
        REQUEST_LATENCY.labels(endpoint=endpoint, method=method).observe(time.perf_counter() - start_time)
        REQUEST_COUNT.labels(endpoint=endpoint, method=method, status=status).inc()


def metrics_response() -> Response:
    """Return Prometheus metrics as an HTTP response."""
    payload = generate_latest(REGISTRY)
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "REGISTRY",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "SEARCH_RELAXATIONS",
    "OPERATION_TIMEOUTS",
    "CORPUS_SIZE",
    "track_request",
    "metrics_response",
]
