"""Chunking strategies for splitting documents."""

from ragdesk.chunkers.sentence_chunker import SentenceChunker

__all__ = ["SentenceChunker"]
