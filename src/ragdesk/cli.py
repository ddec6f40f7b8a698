"""CLI entry point for ragdesk."""

import argparse
import json
import logging
import sys
from pathlib import Path

from ragdesk.config import RetrievalConfig
from ragdesk.errors import RagdeskError
from ragdesk.ingesters import get_ingester
from ragdesk.storage import DocumentStore, SnapshotStore

logger = logging.getLogger(__name__)

DEFAULT_DB = "ragdesk.db"


def open_store(db: str, config: RetrievalConfig) -> tuple[DocumentStore, SnapshotStore]:
    """Create the application's store and restore its last saved snapshot."""
    snapshots = SnapshotStore(db)
    snapshots.initialize()

    store = DocumentStore(config)
    saved = snapshots.load()
    if saved is not None:
        store.restore(saved)
        logger.debug(f"Restored {len(store)} documents from {db}")
    return store, snapshots


def add(
    store: DocumentStore,
    snapshots: SnapshotStore,
    sources: list[str],
    chunk_size: int | None = None,
) -> int:
    """Ingest text files and folders.

    Returns:
        Number of documents added
    """
    added = 0
    for source in sources:
        source_path = Path(source)
        ingester = get_ingester(source_path)
        if ingester is None:
            logger.error(f"Cannot process: {source}")
            logger.error("Supported inputs: text files, folders")
            continue

        for text in ingester.ingest(source_path):
            doc_id = store.ingest(text.name, text.content, chunk_size)
            doc = store.get(doc_id)
            logger.info(f"  {text.name} -> {doc_id} ({len(doc.chunks)} chunks)")
            added += 1

    if added:
        snapshots.save(store.snapshot())
    logger.info(f"Added {added} documents")
    return added


def query(store: DocumentStore, text: str, limit: int | None = None) -> None:
    """Print the chunks most similar to the query text."""
    results = store.search(text, limit)
    if not results:
        print(f"No results found for: {text}")
        return

    names = {s.id: s.name for s in store.list_documents()}
    for i, (chunk, similarity) in enumerate(results, 1):
        print(f"{i}. [{similarity:.3f}] {names.get(chunk.document_id, '?')} ({chunk.id})")
        print(f"   {chunk.content}")


def ls(store: DocumentStore) -> None:
    """Print stored documents, newest first."""
    summaries = store.list_documents()
    if not summaries:
        print("No documents uploaded")
        return

    for s in summaries:
        uploaded = s.uploaded_at.strftime("%Y-%m-%d %H:%M")
        print(f"{s.id}  {s.name:<40} {s.chunk_count:>5} chunks {s.size_bytes:>9} B  {uploaded}")


def rm(store: DocumentStore, snapshots: SnapshotStore, document_id: str) -> bool:
    """Delete a document. Returns False if the id is unknown."""
    if not store.delete(document_id):
        logger.error(f"No document with id {document_id}")
        return False
    snapshots.save(store.snapshot())
    logger.info(f"Deleted {document_id}")
    return True


def show(store: DocumentStore, document_id: str) -> bool:
    """Print a document's chunks."""
    doc = store.get(document_id)
    if doc is None:
        logger.error(f"No document with id {document_id}")
        return False

    print(f"{doc.name} ({doc.id})")
    print(f"  Uploaded: {doc.uploaded_at.isoformat()}")
    print(f"  Size: {doc.size_bytes} bytes")
    print(f"  Chunks: {len(doc.chunks)}")
    for chunk in doc.chunks:
        print(f"  [{chunk.index}] {chunk.content}")
    return True


def export(store: DocumentStore, output: str) -> None:
    """Write the store snapshot as JSON."""
    Path(output).write_text(json.dumps(store.snapshot(), indent=2), encoding="utf-8")
    logger.info(f"Exported {len(store)} documents -> {output}")


def import_snapshot(store: DocumentStore, snapshots: SnapshotStore, source: str) -> None:
    """Replace the store with a snapshot JSON file, all or nothing."""
    store.restore(Path(source).read_bytes())
    snapshots.save(store.snapshot())
    logger.info(f"Imported {len(store)} documents from {source}")


def serve(store: DocumentStore, snapshots: SnapshotStore, transport: str = "stdio") -> None:
    """Start the MCP server over the store."""
    # Import here to avoid loading MCP unless needed
    from typing import Literal, cast

    from ragdesk.server import create_mcp_server

    logger.info(f"Serving {len(store)} documents via {transport}")
    mcp = create_mcp_server(store, snapshots)
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ragdesk",
        description="ragdesk - local document retrieval for chat",
    )
    parser.add_argument(
        "--db",
        default=DEFAULT_DB,
        help=f"Snapshot database path (default: {DEFAULT_DB})",
    )
    parser.add_argument(
        "--dimensions",
        type=int,
        default=RetrievalConfig.dimensions,
        help="Embedding dimensions (default: %(default)s)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Upload text files or folders")
    add_parser.add_argument("sources", nargs="+", help="Text files or folders")
    add_parser.add_argument(
        "--chunk-size",
        type=int,
        default=RetrievalConfig.chunk_size,
        help="Target chunk size in characters (default: %(default)s)",
    )

    query_parser = subparsers.add_parser("query", help="Search uploaded documents")
    query_parser.add_argument("text", help="Query text")
    query_parser.add_argument(
        "-n",
        "--limit",
        type=int,
        default=RetrievalConfig.default_limit,
        help="Maximum number of chunks (default: %(default)s)",
    )

    subparsers.add_parser("ls", help="List uploaded documents")

    rm_parser = subparsers.add_parser("rm", help="Delete a document")
    rm_parser.add_argument("id", help="Document id")

    show_parser = subparsers.add_parser("show", help="Show a document's chunks")
    show_parser.add_argument("id", help="Document id")

    export_parser = subparsers.add_parser("export", help="Write a JSON snapshot")
    export_parser.add_argument("output", help="Output JSON path")

    import_parser = subparsers.add_parser("import", help="Replace documents from a JSON snapshot")
    import_parser.add_argument("source", help="Snapshot JSON path")

    serve_parser = subparsers.add_parser("serve", help="Start MCP server")
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        config = RetrievalConfig(
            chunk_size=getattr(args, "chunk_size", RetrievalConfig.chunk_size),
            dimensions=args.dimensions,
        )
        store, snapshots = open_store(args.db, config)

        if args.command == "add":
            ok = add(store, snapshots, args.sources, args.chunk_size) > 0
        elif args.command == "query":
            query(store, args.text, args.limit)
            ok = True
        elif args.command == "ls":
            ls(store)
            ok = True
        elif args.command == "rm":
            ok = rm(store, snapshots, args.id)
        elif args.command == "show":
            ok = show(store, args.id)
        elif args.command == "export":
            export(store, args.output)
            ok = True
        elif args.command == "import":
            import_snapshot(store, snapshots, args.source)
            ok = True
        elif args.command == "serve":
            serve(store, snapshots, args.transport)
            ok = True
        else:
            ok = False
    except (RagdeskError, ValueError, OSError) as e:
        logger.error(f"Error: {e}")
        return 1

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
