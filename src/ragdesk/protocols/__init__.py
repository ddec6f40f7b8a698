"""Protocol definitions for extensible components."""

from ragdesk.protocols.chunker import ChunkingStrategy
from ragdesk.protocols.embedder import EmbeddingProvider
from ragdesk.protocols.ingester import Ingester

__all__ = ["Ingester", "EmbeddingProvider", "ChunkingStrategy"]
