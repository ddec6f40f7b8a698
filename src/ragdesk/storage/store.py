"""In-memory document store with snapshot/restore."""

import json
import logging
import threading
import uuid
from dataclasses import replace
from typing import Optional

import numpy as np

from ragdesk.chunkers import SentenceChunker
from ragdesk.config import RetrievalConfig
from ragdesk.embedders import HashingEmbedder
from ragdesk.models import Chunk, Document, DocumentSummary, chunk_id
from ragdesk.protocols import ChunkingStrategy, EmbeddingProvider
from ragdesk.ranking import CosineRanker
from ragdesk.storage.snapshot import SnapshotInput, decode_documents, encode_snapshot

logger = logging.getLogger(__name__)


class DocumentStore:
    """Owns documents and their chunks and answers similarity queries.

    All reads and writes go through one lock, so a query never sees a
    document half inserted or half deleted.
    """

    def __init__(
        self,
        config: Optional[RetrievalConfig] = None,
        chunker: Optional[ChunkingStrategy] = None,
        embedder: Optional[EmbeddingProvider] = None,
    ):
        self.config = config or RetrievalConfig()
        self.chunker = chunker or SentenceChunker(self.config.chunk_size)
        self.embedder = embedder or HashingEmbedder(self.config.dimensions)
        self.ranker = CosineRanker(self.config.default_limit)
        self._documents: dict[str, Document] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)

    def __contains__(self, document_id: object) -> bool:
        with self._lock:
            return document_id in self._documents

    @property
    def dimensions(self) -> int:
        return self.embedder.dimension

    def _embed(self, text: str) -> np.ndarray:
        return self.embedder.embed(text, self.dimensions)

    def ingest(self, name: str, content: str, chunk_size: Optional[int] = None) -> str:
        """Chunk, embed and store a document.

        Args:
            name: Display name; need not be unique
            content: Raw text, may be empty
            chunk_size: Overrides the configured chunk target size

        Returns:
            The new document's id, usable for queries immediately
        """
        doc_id = uuid.uuid4().hex
        texts = self.chunker.chunk(content, chunk_size)
        chunks = [
            Chunk(
                id=chunk_id(doc_id, index),
                document_id=doc_id,
                index=index,
                content=text,
                embedding=self._embed(text),
            )
            for index, text in enumerate(texts)
        ]
        doc = Document(id=doc_id, name=name, content=content, chunks=chunks)

        with self._lock:
            self._documents[doc_id] = doc

        logger.debug(f"Ingested {name} as {doc_id}: {len(chunks)} chunks")
        return doc_id

    def delete(self, document_id: str) -> bool:
        """Remove a document and all its chunks. Returns False if unknown."""
        with self._lock:
            removed = self._documents.pop(document_id, None)
        if removed is None:
            return False
        logger.debug(f"Deleted {document_id} ({len(removed.chunks)} chunks)")
        return True

    def get(self, document_id: str) -> Optional[Document]:
        """Return a copy of the document; chunks themselves are immutable."""
        with self._lock:
            doc = self._documents.get(document_id)
            return None if doc is None else replace(doc, chunks=list(doc.chunks))

    def clear(self) -> None:
        with self._lock:
            self._documents = {}

    def chunks(self) -> list[Chunk]:
        """All chunks, in document insertion order then chunk order."""
        with self._lock:
            return [chunk for doc in self._documents.values() for chunk in doc.chunks]

    def search(self, text: str, limit: Optional[int] = None) -> list[tuple[Chunk, float]]:
        """Rank every stored chunk against the text, with scores."""
        query_embedding = self._embed(text)
        with self._lock:
            pool = self.chunks()
            scored = self.ranker.score(
                query_embedding,
                [(position, chunk.embedding) for position, chunk in enumerate(pool)],
                limit,
            )
        return [(pool[position], similarity) for position, similarity in scored]

    def query(self, text: str, limit: Optional[int] = None) -> list[Chunk]:
        """Return the chunks most similar to the text, best first."""
        return [chunk for chunk, _ in self.search(text, limit)]

    def list_documents(self) -> list[DocumentSummary]:
        """Summaries of stored documents, most recently added first."""
        with self._lock:
            docs = list(self._documents.values())
        return [DocumentSummary.of(doc) for doc in reversed(docs)]

    def snapshot(self) -> dict:
        """Serializable copy of every document, chunk and embedding."""
        with self._lock:
            return encode_snapshot(list(self._documents.values()), self.dimensions)

    def snapshot_json(self) -> str:
        return json.dumps(self.snapshot())

    def restore(self, snapshot: SnapshotInput) -> None:
        """Replace all state with the snapshot's contents.

        Raises:
            SnapshotError: The snapshot is malformed; current state is kept.
        """
        with self._lock:
            documents = decode_documents(snapshot, self.dimensions, self._embed)
            self._documents = {doc.id: doc for doc in documents}
        logger.debug(f"Restored {len(documents)} documents")
