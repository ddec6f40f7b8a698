"""SQLite-backed key-value persistence for store snapshots."""

import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ragdesk.errors import StorageError
from ragdesk.models import utc_now
from ragdesk.storage.schema import SCHEMA

logger = logging.getLogger(__name__)

DEFAULT_KEY = "rag-storage"


class SnapshotStore:
    """Durably saves and reloads serialized document store snapshots."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections."""
        try:
            conn = sqlite3.connect(self.path)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open snapshot database {self.path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"Snapshot database error in {self.path}: {e}") from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create schema if not exists."""
        with self.connection() as conn:
            conn.executescript(SCHEMA)

    def save(self, snapshot: dict, key: str = DEFAULT_KEY) -> None:
        """Store a snapshot under a key, replacing any previous one."""
        value = json.dumps(snapshot)
        with self.connection() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO snapshots (key, value, saved_at) VALUES (?, ?, ?)",
                (key, value, utc_now().isoformat()),
            )
        logger.debug(f"Saved snapshot '{key}' ({len(value)} bytes) to {self.path}")

    def load(self, key: str = DEFAULT_KEY) -> Optional[dict]:
        """Retrieve a snapshot by key, or None if nothing was saved."""
        with self.connection() as conn:
            row = conn.execute(
                "SELECT value FROM snapshots WHERE key = ?", (key,)
            ).fetchone()
        if row is None:
            return None
        try:
            return json.loads(row["value"])
        except json.JSONDecodeError as e:
            raise StorageError(f"Snapshot '{key}' in {self.path} is not valid JSON") from e

    def delete(self, key: str = DEFAULT_KEY) -> bool:
        """Remove a saved snapshot. Returns False if the key was absent."""
        with self.connection() as conn:
            cursor = conn.execute("DELETE FROM snapshots WHERE key = ?", (key,))
            return cursor.rowcount > 0

    def keys(self) -> list[str]:
        """List saved snapshot keys."""
        with self.connection() as conn:
            cursor = conn.execute("SELECT key FROM snapshots ORDER BY key")
            return [row["key"] for row in cursor]
