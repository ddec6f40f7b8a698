"""Feature-hashing embedding provider."""

import re
from collections import Counter
from typing import Optional

import numpy as np

TOKEN_PATTERN = re.compile(r"\w+", re.ASCII)

_UINT32 = 1 << 32
_INT32_MAX = (1 << 31) - 1
_ARRAY_INDEX_LIMIT = _UINT32 - 1


def to_int32(value: int) -> int:
    """Wrap an integer to signed 32-bit two's complement."""
    value %= _UINT32
    return value - _UINT32 if value > _INT32_MAX else value


def token_hash(token: str) -> int:
    """Polynomial rolling hash (multiplier 31), wrapped to int32 at every step."""
    h = 0
    for ch in token:
        h = to_int32(h * 31 + ord(ch))
    return h


def tokenize(text: str) -> list[str]:
    """Lowercase and extract maximal runs of ASCII word characters."""
    return TOKEN_PATTERN.findall(text.lower())


def _is_array_index(token: str) -> bool:
    if not token.isdigit() or (len(token) > 1 and token[0] == "0"):
        return False
    return int(token) < _ARRAY_INDEX_LIMIT


def ordered_counts(tokens: list[str]) -> list[tuple[str, int]]:
    """Count tokens, ordered the way buckets are written.

    Integer-like tokens come first in ascending numeric order, then the rest
    in order of first occurrence. The order decides which token wins when two
    share a bucket.
    """
    counts = Counter(tokens)
    numeric = sorted((t for t in counts if _is_array_index(t)), key=int)
    words = [t for t in counts if not _is_array_index(t)]
    return [(t, counts[t]) for t in numeric + words]


class HashingEmbedder:
    """Bag-of-words embedder that hashes tokens into a fixed number of buckets.

    Each distinct token sets its bucket to the token's frequency; a later
    token landing in an occupied bucket overwrites it. The vector is then
    scaled to unit length. Output depends only on the text and dimension,
    so embeddings can be recomputed instead of stored.
    """

    DEFAULT_DIMENSIONS = 100

    def __init__(self, dimensions: int = DEFAULT_DIMENSIONS):
        if dimensions <= 0:
            raise ValueError(f"dimensions must be positive, got {dimensions}")
        self._dimensions = dimensions

    @property
    def dimension(self) -> int:
        """Return the embedding dimension."""
        return self._dimensions

    @property
    def model_name(self) -> str:
        """Return identifier for the embedding scheme used."""
        return f"hashing-bow-{self._dimensions}"

    def embed(self, text: str, dimensions: Optional[int] = None) -> np.ndarray:
        """Embed one text.

        Args:
            text: Any string; text without word characters embeds to zeros
            dimensions: Vector length, defaults to the embedder's dimension

        Returns:
            float64 array of shape (dimensions,)
        """
        size = self._dimensions if dimensions is None else dimensions
        if size <= 0:
            raise ValueError(f"dimensions must be positive, got {size}")

        vector = np.zeros(size, dtype=np.float64)
        for token, count in ordered_counts(tokenize(text)):
            vector[abs(token_hash(token)) % size] = count

        # Components are integer counts, so the dot product is exact.
        norm = np.sqrt(np.dot(vector, vector))
        if norm > 0:
            vector /= norm
        return vector

    def embed_batch(self, texts: list[str]) -> np.ndarray:
        """Generate embeddings for a batch of texts.

        Returns:
            numpy array of shape (len(texts), dimension)
        """
        if not texts:
            return np.zeros((0, self._dimensions), dtype=np.float64)
        return np.vstack([self.embed(text) for text in texts])
