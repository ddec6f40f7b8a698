"""Core data models for documents and chunks."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

import numpy as np


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def chunk_id(document_id: str, index: int) -> str:
    """Build the store-unique id of a document's chunk."""
    return f"{document_id}_chunk_{index}"


@dataclass(frozen=True, eq=False)
class Chunk:
    """A fragment of a document's text with its embedding.

    Chunks are immutable once built, including the embedding array.
    """

    id: str
    document_id: str
    index: int
    content: str
    embedding: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        if self.embedding is not None:
            self.embedding.flags.writeable = False


@dataclass
class Document:
    """An uploaded text document and its chunks."""

    id: str
    name: str
    content: str
    chunks: list[Chunk] = field(default_factory=list)
    uploaded_at: datetime = field(default_factory=utc_now)

    @property
    def size_bytes(self) -> int:
        return len(self.content.encode("utf-8"))


@dataclass(frozen=True)
class DocumentSummary:
    """Listing row for a stored document."""

    id: str
    name: str
    chunk_count: int
    size_bytes: int
    uploaded_at: datetime

    @classmethod
    def of(cls, doc: Document) -> "DocumentSummary":
        return cls(
            id=doc.id,
            name=doc.name,
            chunk_count=len(doc.chunks),
            size_bytes=doc.size_bytes,
            uploaded_at=doc.uploaded_at,
        )


@dataclass(frozen=True)
class TextSource:
    """A text file read at the ingest boundary."""

    name: str
    content: str
    size_bytes: int
