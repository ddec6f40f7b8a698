"""Embedding providers for vector generation."""

from ragdesk.embedders.hashing import HashingEmbedder, token_hash, tokenize

__all__ = ["HashingEmbedder", "token_hash", "tokenize"]
