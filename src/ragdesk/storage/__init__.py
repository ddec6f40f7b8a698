"""Document storage and snapshot persistence."""

from ragdesk.storage.snapshot_store import SnapshotStore
from ragdesk.storage.store import DocumentStore

__all__ = ["DocumentStore", "SnapshotStore"]
