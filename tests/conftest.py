"""
Shared test fixtures for ragdesk.
"""

import pytest

from ragdesk.config import RetrievalConfig
from ragdesk.storage import DocumentStore, SnapshotStore


ANIMALS = "Cats are mammals. Dogs are mammals too. Fish live in water."


@pytest.fixture
def animals_text() -> str:
    return ANIMALS


@pytest.fixture
def store() -> DocumentStore:
    """Empty store with default configuration."""
    return DocumentStore()


@pytest.fixture
def animal_store() -> DocumentStore:
    """Store holding the animals text split one sentence per chunk."""
    store = DocumentStore(RetrievalConfig(chunk_size=20))
    store.ingest("animals.txt", ANIMALS)
    return store


@pytest.fixture
def snapshots(tmp_path) -> SnapshotStore:
    snapshot_store = SnapshotStore(tmp_path / "ragdesk.db")
    snapshot_store.initialize()
    return snapshot_store
