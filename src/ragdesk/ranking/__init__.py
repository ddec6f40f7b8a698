"""Similarity ranking."""

from ragdesk.ranking.cosine import CosineRanker, cosine_similarity, rank, score

__all__ = ["CosineRanker", "cosine_similarity", "rank", "score"]
