"""Query embedding providers.

Stored document vectors are pre-computed; these providers only embed the
incoming query text. No provider retries: failures surface immediately.
"""

from __future__ import annotations

import hashlib
import math
import re
from typing import Protocol

import openai

from apple_docs.core.config import Settings
from apple_docs.core.errors import (
    EmbeddingAuthFailure,
    EmbeddingRateLimited,
    EmbeddingServiceError,
    EmbeddingTimeout,
)
from apple_docs.core.logging import get_logger

logger = get_logger(__name__)

_TOKEN_RE = re.compile(r"\w+")


class EmbeddingProvider(Protocol):
    model_name: str

    @property
    def dim(self) -> int: ...

    def embed(self, text: str) -> list[float]: ...


class OpenAIEmbeddingClient:
    """OpenAI embeddings with SDK failures translated into the engine taxonomy."""

    def __init__(
        self,
        api_key: str | None,
        model_name: str = "text-embedding-3-large",
        dimensions: int = 3072,
        timeout: float = 30.0,
    ) -> None:
        self.model_name = model_name
        self._dim = dimensions
        self._api_key = api_key
        self._timeout = timeout
        self._client: openai.OpenAI | None = None

    @property
    def dim(self) -> int:
        return self._dim

    def embed(self, text: str) -> list[float]:
        client = self._get_client()
        try:
            response = client.embeddings.create(
                model=self.model_name,
                input=text,
                dimensions=self._dim,
            )
        except openai.AuthenticationError as exc:
            raise EmbeddingAuthFailure("Invalid OpenAI API key. Check OPENAI_API_KEY.") from exc
        except openai.RateLimitError as exc:
            raise EmbeddingRateLimited("OpenAI API rate limit exceeded. Please try later.") from exc
        except openai.APIConnectionError as exc:
            # APITimeoutError subclasses APIConnectionError
            raise EmbeddingTimeout("OpenAI connection timeout. Please try later.") from exc
        except openai.OpenAIError as exc:
            logger.error("Embedding retrieval error: %s", exc)
            raise EmbeddingServiceError(f"Failed to get embedding: {exc}") from exc
        return list(response.data[0].embedding)

    def _get_client(self) -> openai.OpenAI:
        if not self._api_key:
            raise EmbeddingAuthFailure("OPENAI_API_KEY is not configured; search is unavailable.")
        if self._client is None:
            self._client = openai.OpenAI(api_key=self._api_key, timeout=self._timeout, max_retries=0)
        return self._client


class HashedEmbeddingModel:
    """Deterministic hashed bag-of-words embedder for offline use and tests."""

    def __init__(self, model_name: str = "hashed", dim: int = 384) -> None:
        self.model_name = model_name
        self._dim = dim

    @property
    def dim(self) -> int:
        return self._dim

    def embed(self, text: str) -> list[float]:
        vector = [0.0] * self._dim
        for token in _tokenize(text):
            vector[_hash_token(token, self._dim)] += 1.0
        _normalize(vector)
        return vector


def get_embedding_provider(settings: Settings) -> EmbeddingProvider:
    if settings.embedding_backend == "hashed":
        return HashedEmbeddingModel(model_name="hashed", dim=settings.embedding_dimensions)
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not found. Search will be unavailable.")
    return OpenAIEmbeddingClient(
        api_key=settings.openai_api_key,
        model_name=settings.embedding_model,
        dimensions=settings.embedding_dimensions,
        timeout=settings.embedding_request_timeout,
    )


def _tokenize(text: str) -> list[str]:
    return _TOKEN_RE.findall(text.lower())


def _hash_token(token: str, dim: int) -> int:
    digest = hashlib.blake2b(token.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big") % dim


def _normalize(vector: list[float]) -> None:
    norm = math.sqrt(sum(value * value for value in vector))
    if norm == 0:
        return
    inv = 1.0 / norm
    for idx, value in enumerate(vector):
        vector[idx] = value * inv


__all__ = [
    "EmbeddingProvider",
    "OpenAIEmbeddingClient",
    "HashedEmbeddingModel",
    "get_embedding_provider",
]
