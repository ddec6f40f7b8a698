"""ragdesk - local document retrieval for a chat assistant."""

from ragdesk.config import RetrievalConfig
from ragdesk.errors import RagdeskError, SnapshotError, StorageError
from ragdesk.storage import DocumentStore, SnapshotStore

__version__ = "0.1.0"

__all__ = [
    "DocumentStore",
    "RagdeskError",
    "RetrievalConfig",
    "SnapshotError",
    "SnapshotStore",
    "StorageError",
]
