"""Data models for ragdesk."""

from ragdesk.models.document import (
    Chunk,
    Document,
    DocumentSummary,
    TextSource,
    chunk_id,
    utc_now,
)

__all__ = ["Document", "Chunk", "DocumentSummary", "TextSource", "chunk_id", "utc_now"]
