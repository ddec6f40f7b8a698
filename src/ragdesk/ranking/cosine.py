"""Cosine similarity ranking over candidate vectors."""

from typing import Hashable, Optional, Sequence, TypeVar

import numpy as np

K = TypeVar("K", bound=Hashable)


def cosine_similarity(a: Optional[np.ndarray], b: Optional[np.ndarray]) -> float:
    """Compute cosine similarity; zero-length or missing vectors score 0."""
    if a is None or b is None:
        return 0.0
    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))


def score(
    query: np.ndarray,
    candidates: Sequence[tuple[K, Optional[np.ndarray]]],
    limit: Optional[int] = None,
) -> list[tuple[K, float]]:
    """Score candidates against the query, best first.

    Ties keep the candidates' input order. ``limit=None`` keeps everything.
    """
    if limit is not None and limit <= 0:
        return []

    scored = [(key, cosine_similarity(query, vector)) for key, vector in candidates]
    scored.sort(key=lambda item: item[1], reverse=True)
    return scored if limit is None else scored[:limit]


def rank(
    query: np.ndarray,
    candidates: Sequence[tuple[K, Optional[np.ndarray]]],
    limit: int = 5,
) -> list[K]:
    """Return candidate ids ordered by similarity, at most ``limit`` of them."""
    return [key for key, _ in score(query, candidates, limit)]


class CosineRanker:
    """Ranker with a default result limit."""

    def __init__(self, default_limit: int = 5):
        self.default_limit = default_limit

    def rank(
        self,
        query: np.ndarray,
        candidates: Sequence[tuple[K, Optional[np.ndarray]]],
        limit: Optional[int] = None,
    ) -> list[K]:
        return rank(query, candidates, self.default_limit if limit is None else limit)

    def score(
        self,
        query: np.ndarray,
        candidates: Sequence[tuple[K, Optional[np.ndarray]]],
        limit: Optional[int] = None,
    ) -> list[tuple[K, float]]:
        return score(query, candidates, self.default_limit if limit is None else limit)
