"""Snapshot encoding and validation for the document store."""

import json
import math
from datetime import datetime, timezone
from typing import Any, Callable, Union

import numpy as np

from ragdesk.errors import SnapshotError
from ragdesk.models import Chunk, Document, chunk_id

SNAPSHOT_VERSION = 1

SnapshotInput = Union[dict, str, bytes]


def format_timestamp(value: datetime) -> str:
    """Serialize a datetime as ISO-8601 in UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 string or epoch milliseconds into an aware datetime."""
    if isinstance(value, bool):
        raise SnapshotError(f"Invalid uploadedAt: {value!r}")
    if isinstance(value, (int, float)):
        try:
            seconds = value / 1000
            if not math.isfinite(seconds):
                raise ValueError("not a finite number")
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise SnapshotError(f"Invalid uploadedAt: {value!r}") from e
    if not isinstance(value, str):
        raise SnapshotError(f"Invalid uploadedAt: {value!r}")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise SnapshotError(f"Invalid uploadedAt: {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def encode_document(doc: Document) -> dict:
    """Convert a document and its chunks to plain JSON-compatible data."""
    return {
        "id": doc.id,
        "name": doc.name,
        "content": doc.content,
        "uploadedAt": format_timestamp(doc.uploaded_at),
        "chunks": [
            {
                "id": chunk.id,
                "content": chunk.content,
                "embedding": [float(x) for x in chunk.embedding],
                "documentId": chunk.document_id,
            }
            for chunk in doc.chunks
        ],
    }


def encode_snapshot(documents: list[Document], dimensions: int) -> dict:
    return {
        "version": SNAPSHOT_VERSION,
        "dimensions": dimensions,
        "documents": [encode_document(doc) for doc in documents],
    }


def load_snapshot(raw: SnapshotInput) -> dict:
    """Accept a snapshot as a dict or as JSON text/bytes."""
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Snapshot is not valid JSON: {e}") from e
    if isinstance(raw, list):
        # Bare document list, the layout the original browser storage kept
        raw = {"documents": raw}
    if not isinstance(raw, dict):
        raise SnapshotError(f"Snapshot must be an object, got {type(raw).__name__}")
    return raw


def _require(record: dict, key: str, kind: Union[type, tuple], where: str) -> Any:
    if key not in record:
        raise SnapshotError(f"{where}: missing required field '{key}'")
    value = record[key]
    if not isinstance(value, kind):
        kinds = kind if isinstance(kind, tuple) else (kind,)
        expected = " or ".join(k.__name__ for k in kinds)
        raise SnapshotError(
            f"{where}: field '{key}' must be {expected}, got {type(value).__name__}"
        )
    return value


def _decode_embedding(value: Any, dimensions: int, where: str) -> np.ndarray:
    if not isinstance(value, list):
        raise SnapshotError(f"{where}: embedding must be a list")
    if len(value) != dimensions:
        raise SnapshotError(
            f"{where}: embedding has length {len(value)}, expected {dimensions}"
        )
    for x in value:
        if isinstance(x, bool) or not isinstance(x, (int, float)) or not math.isfinite(x):
            raise SnapshotError(f"{where}: embedding contains non-numeric value {x!r}")
    return np.asarray(value, dtype=np.float64)


def decode_documents(
    raw: SnapshotInput,
    dimensions: int,
    embed: Callable[[str], np.ndarray],
) -> list[Document]:
    """Validate a snapshot and rebuild its documents.

    Raises SnapshotError on the first structural problem; nothing is built
    into the store until the whole snapshot has been decoded.
    Chunks saved without an embedding are embedded again with ``embed``.
    """
    data = load_snapshot(raw)

    version = data.get("version", SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise SnapshotError(f"Unsupported snapshot version: {version!r}")

    saved_dimensions = data.get("dimensions", dimensions)
    if saved_dimensions != dimensions:
        raise SnapshotError(
            f"Snapshot dimensions {saved_dimensions!r} do not match store dimensions {dimensions}"
        )

    records = _require(data, "documents", list, "snapshot")

    documents: list[Document] = []
    seen: set[str] = set()
    for position, record in enumerate(records):
        where = f"documents[{position}]"
        if not isinstance(record, dict):
            raise SnapshotError(f"{where}: must be an object")

        doc_id = _require(record, "id", str, where)
        if doc_id in seen:
            raise SnapshotError(f"{where}: duplicate document id '{doc_id}'")
        seen.add(doc_id)

        doc = Document(
            id=doc_id,
            name=_require(record, "name", str, where),
            content=_require(record, "content", str, where),
            uploaded_at=parse_timestamp(
                _require(record, "uploadedAt", (str, int, float), where)
            ),
        )

        for index, item in enumerate(_require(record, "chunks", list, where)):
            chunk_where = f"{where}.chunks[{index}]"
            if not isinstance(item, dict):
                raise SnapshotError(f"{chunk_where}: must be an object")

            owner = item.get("documentId", doc_id)
            if owner != doc_id:
                raise SnapshotError(
                    f"{chunk_where}: documentId '{owner}' does not match '{doc_id}'"
                )

            expected_id = chunk_id(doc_id, index)
            item_id = _require(item, "id", str, chunk_where)
            if item_id != expected_id:
                raise SnapshotError(
                    f"{chunk_where}: id '{item_id}' should be '{expected_id}'"
                )

            content = _require(item, "content", str, chunk_where)
            embedding = item.get("embedding")
            if embedding is None:
                vector = embed(content)
            else:
                vector = _decode_embedding(embedding, dimensions, chunk_where)

            doc.chunks.append(
                Chunk(
                    id=item_id,
                    document_id=doc_id,
                    index=index,
                    content=content,
                    embedding=vector,
                )
            )

        documents.append(doc)

    return documents
