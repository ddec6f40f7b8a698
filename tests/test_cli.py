"""
Tests for the ragdesk command line.
"""

import json

import pytest

from ragdesk.cli import build_parser, main
from ragdesk.storage import DocumentStore, SnapshotStore


@pytest.fixture
def db(tmp_path):
    return str(tmp_path / "ragdesk.db")


@pytest.fixture
def animals_file(tmp_path, animals_text):
    path = tmp_path / "animals.txt"
    path.write_text(animals_text, encoding="utf-8")
    return path


def stored(db: str) -> DocumentStore:
    store = DocumentStore()
    store.restore(SnapshotStore(db).load())
    return store


class TestCli:
    def test_parser_defaults(self):
        args = build_parser().parse_args(["query", "hello"])
        assert args.db == "ragdesk.db"
        assert args.limit == 5
        assert args.dimensions == 100

    def test_add_persists(self, db, animals_file):
        assert main(["--db", db, "add", str(animals_file), "--chunk-size", "20"]) == 0
        store = stored(db)
        [summary] = store.list_documents()
        assert summary.name == "animals.txt"
        assert summary.chunk_count == 3

    def test_add_missing_source(self, db, tmp_path):
        assert main(["--db", db, "add", str(tmp_path / "nope.txt")]) == 1

    def test_query(self, db, animals_file, capsys):
        main(["--db", db, "add", str(animals_file), "--chunk-size", "20"])
        capsys.readouterr()

        assert main(["--db", db, "query", "mammals", "-n", "2"]) == 0
        out = capsys.readouterr().out
        assert "1. [0.577] animals.txt" in out
        assert "Cats are mammals" in out
        assert "Fish live in water" not in out

    def test_query_empty_store(self, db, capsys):
        assert main(["--db", db, "query", "anything"]) == 0
        assert "No results found" in capsys.readouterr().out

    def test_ls_and_show(self, db, animals_file, capsys):
        main(["--db", db, "add", str(animals_file)])
        doc_id = stored(db).list_documents()[0].id
        capsys.readouterr()

        assert main(["--db", db, "ls"]) == 0
        assert doc_id in capsys.readouterr().out

        assert main(["--db", db, "show", doc_id]) == 0
        assert "[0] Cats are mammals" in capsys.readouterr().out

        assert main(["--db", db, "show", "unknown"]) == 1

    def test_rm(self, db, animals_file):
        main(["--db", db, "add", str(animals_file)])
        doc_id = stored(db).list_documents()[0].id

        assert main(["--db", db, "rm", doc_id]) == 0
        assert len(stored(db)) == 0
        assert main(["--db", db, "rm", doc_id]) == 1

    def test_export_import(self, db, animals_file, tmp_path):
        main(["--db", db, "add", str(animals_file)])
        exported = tmp_path / "snapshot.json"
        assert main(["--db", db, "export", str(exported)]) == 0

        other_db = str(tmp_path / "other.db")
        assert main(["--db", other_db, "import", str(exported)]) == 0
        assert stored(other_db).snapshot() == json.loads(exported.read_text())

    def test_import_corrupt_keeps_state(self, db, animals_file, tmp_path):
        main(["--db", db, "add", str(animals_file)])
        before = SnapshotStore(db).load()
        bad = tmp_path / "bad.json"
        bad.write_text('{"documents": [{"id": "x"}]}')

        assert main(["--db", db, "import", str(bad)]) == 1
        assert SnapshotStore(db).load() == before

    def test_dimension_mismatch_fails(self, db, animals_file):
        main(["--db", db, "add", str(animals_file)])
        assert main(["--db", db, "--dimensions", "50", "ls"]) == 1
