"""Database schema for snapshot files."""

SCHEMA = """
-- Key-value table: one serialized store snapshot per key
CREATE TABLE IF NOT EXISTS snapshots (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,       -- JSON snapshot
    saved_at TEXT NOT NULL     -- ISO-8601 UTC
);
"""
