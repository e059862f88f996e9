"""Vector primitives: packed float32 decoding, cosine similarity, centroids."""

from __future__ import annotations

import math
from array import array
from typing import Iterable, Sequence

from apple_docs.core.errors import DimensionMismatch, EmptyInput


def decode_vector(blob: bytes) -> list[float]:
    """Reinterpret a packed float32 buffer; trailing partial floats are ignored."""
    usable = len(blob) - len(blob) % 4
    floats = array("f")
    floats.frombytes(bytes(blob[:usable]))
    return floats.tolist()


def encode_vector(values: Iterable[float]) -> bytes:
    return array("f", values).tobytes()


def norm(vector: Sequence[float]) -> float:
    return math.sqrt(sum(value * value for value in vector))


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    if len(a) != len(b):
        raise DimensionMismatch(f"Vector dimensions must match: {len(a)} != {len(b)}")
    norm_a = norm(a)
    norm_b = norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    # rounding can land a hair outside [-1, 1] for (anti)parallel vectors
    return max(-1.0, min(1.0, _dot(a, b) / (norm_a * norm_b)))


def centroid(vectors: Sequence[Sequence[float]]) -> list[float]:
    """Element-wise mean of same-length vectors."""
    if not vectors:
        raise EmptyInput("Cannot compute the centroid of zero vectors")
    dim = len(vectors[0])
    totals = [0.0] * dim
    for vector in vectors:
        if len(vector) != dim:
            raise DimensionMismatch(f"Vector dimensions must match: {dim} != {len(vector)}")
        for idx, value in enumerate(vector):
            totals[idx] += value
    count = len(vectors)
    return [total / count for total in totals]


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return sum(x * y for x, y in zip(a, b))


__all__ = ["decode_vector", "encode_vector", "norm", "cosine_similarity", "centroid"]
