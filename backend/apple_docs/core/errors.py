"""Error taxonomy shared by the store, retrieval, and API layers."""

from __future__ import annotations


class AppleDocsError(Exception):
    """Base class for all engine errors; carries the HTTP status used by the API."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StoreUnavailable(AppleDocsError):
    """The document store handle is not open."""

    status_code = 503


class DimensionMismatch(AppleDocsError, ValueError):
    """Two compared vectors have different lengths."""


class EmptyInput(AppleDocsError, ValueError):
    """An aggregate was requested over zero vectors."""


class DocumentNotFound(AppleDocsError):
    status_code = 404

    def __init__(self, document_id: str) -> None:
        super().__init__(f"Document {document_id} not found")
        self.document_id = document_id


class EmbeddingError(AppleDocsError):
    """Failure reported by the external embedding service."""

    status_code = 502


class EmbeddingAuthFailure(EmbeddingError):
    status_code = 401


class EmbeddingRateLimited(EmbeddingError):
    status_code = 429


class EmbeddingTimeout(EmbeddingError):
    status_code = 504


class EmbeddingServiceError(EmbeddingError):
    status_code = 502


class OperationTimeout(AppleDocsError):
    """An operation did not finish within its soft deadline.

    The underlying work is not cancelled; see ``apple_docs.core.gate``.
    """

    status_code = 504

    def __init__(self, operation: str, timeout: float) -> None:
        super().__init__(f"Operation timeout: {operation} ({timeout:g}s)")
        self.operation = operation
        self.timeout = timeout


__all__ = [
    "AppleDocsError",
    "StoreUnavailable",
    "DimensionMismatch",
    "EmptyInput",
    "DocumentNotFound",
    "EmbeddingError",
    "EmbeddingAuthFailure",
    "EmbeddingRateLimited",
    "EmbeddingTimeout",
    "EmbeddingServiceError",
    "OperationTimeout",
]
