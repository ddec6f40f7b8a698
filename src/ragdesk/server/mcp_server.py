"""FastMCP server exposing a document store as tools."""

import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from ragdesk.models import Chunk, DocumentSummary
from ragdesk.storage import DocumentStore, SnapshotStore

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 200


def format_size(size: int) -> str:
    """Human-readable byte count."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def format_documents(summaries: list[DocumentSummary]) -> str:
    if not summaries:
        return "No documents uploaded"

    lines = []
    for s in summaries:
        uploaded = s.uploaded_at.strftime("%Y-%m-%d %H:%M")
        lines.append(
            f"{s.id}  {s.name:<40} {s.chunk_count:>5} chunks "
            f"{format_size(s.size_bytes):>10}  {uploaded}"
        )
    return "\n".join(lines)


def format_results(results: list[tuple[Chunk, float]], names: dict[str, str]) -> str:
    lines = []
    for i, (chunk, similarity) in enumerate(results, 1):
        text = chunk.content[:SNIPPET_LENGTH].replace("\n", " ")
        if len(chunk.content) > SNIPPET_LENGTH:
            text += "..."

        lines.append(f"{i}. [{similarity:.3f}] {names.get(chunk.document_id, chunk.document_id)}")
        lines.append(f"   {text}")
        lines.append("")

    return "\n".join(lines)


def create_mcp_server(
    store: DocumentStore, snapshots: Optional[SnapshotStore] = None
) -> FastMCP:
    """Create an MCP server for a document store.

    The caller owns the store; when ``snapshots`` is given, every
    mutating tool saves a fresh snapshot before returning.

    Args:
        store: The document store to serve
        snapshots: Optional persistence backend

    Returns:
        Configured FastMCP server instance
    """
    mcp = FastMCP(name="ragdesk")

    def persist() -> None:
        if snapshots is not None:
            snapshots.save(store.snapshot())

    @mcp.tool()
    def documents() -> str:
        """List uploaded documents, newest first.

        Returns:
            One line per document with id, name, chunk count, size and upload time
        """
        return format_documents(store.list_documents())

    @mcp.tool()
    def add_document(name: str, content: str) -> str:
        """Upload a plain-text document and index it for recall.

        Args:
            name: Display name for the document
            content: Full document text

        Returns:
            The new document id and its chunk count
        """
        doc_id = store.ingest(name, content)
        persist()
        doc = store.get(doc_id)
        count = len(doc.chunks) if doc else 0
        logger.info(f"Added {name} ({count} chunks)")
        return f"Added {name} as {doc_id} ({count} chunks)"

    @mcp.tool()
    def delete_document(document_id: str) -> str:
        """Delete a document and all of its chunks.

        Args:
            document_id: Id as shown by the documents tool

        Returns:
            Confirmation, or a not-found message
        """
        if not store.delete(document_id):
            return f"No document with id {document_id}"
        persist()
        return f"Deleted {document_id}"

    @mcp.tool()
    def recall(query: str, limit: Optional[int] = None) -> str:
        """Find the document chunks most similar to a query.

        Args:
            query: Text to search for
            limit: Maximum number of chunks to return (default: the store's configured limit)

        Returns:
            Ranked list of chunks with similarity scores
        """
        results = store.search(query, limit)
        if not results:
            return f"No results found for: {query}"

        names = {s.id: s.name for s in store.list_documents()}
        return format_results(results, names)

    return mcp
