"""
Unit tests for sentence chunking.
"""

import re

import pytest

from ragdesk.chunkers import SentenceChunker
from ragdesk.protocols import ChunkingStrategy


@pytest.fixture
def chunker() -> SentenceChunker:
    return SentenceChunker()


class TestSentenceChunker:
    """Tests for SentenceChunker.chunk."""

    def test_satisfies_protocol(self, chunker):
        assert isinstance(chunker, ChunkingStrategy)

    def test_empty_text(self, chunker):
        assert chunker.chunk("") == []

    def test_whitespace_only(self, chunker):
        assert chunker.chunk("   \n\t  ") == []

    def test_punctuation_only(self, chunker):
        assert chunker.chunk("...!?!") == []

    def test_no_terminal_punctuation(self, chunker):
        assert chunker.chunk("  just one line without an ending  ") == [
            "just one line without an ending"
        ]

    def test_one_sentence_per_chunk_when_target_is_small(self, chunker, animals_text):
        assert chunker.chunk(animals_text, 20) == [
            "Cats are mammals",
            "Dogs are mammals too",
            "Fish live in water",
        ]

    def test_greedy_join_counts_separator(self, chunker, animals_text):
        # 16 + 2 + 20 = 38 fits in 40, adding the third sentence would not
        assert chunker.chunk(animals_text, 40) == [
            "Cats are mammals. Dogs are mammals too",
            "Fish live in water",
        ]

    def test_exact_fit_is_not_flushed(self, chunker):
        assert chunker.chunk("abcd. efgh.", 10) == ["abcd. efgh"]
        assert chunker.chunk("abcd. efgh.", 9) == ["abcd", "efgh"]

    def test_default_target_keeps_short_text_together(self, chunker, animals_text):
        assert chunker.chunk(animals_text) == [
            "Cats are mammals. Dogs are mammals too. Fish live in water"
        ]

    def test_repeated_punctuation_is_one_boundary(self, chunker):
        assert chunker.chunk("Wait... What?! Really!!!", 5) == ["Wait", "What", "Really"]

    def test_oversized_sentence_is_not_split(self, chunker):
        long_sentence = "word " * 50
        chunks = chunker.chunk(f"Short. {long_sentence}. Tail.", 30)
        assert chunks == ["Short", long_sentence.strip(), "Tail"]

    def test_configured_target_size(self, animals_text):
        assert len(SentenceChunker(target_size=20).chunk(animals_text)) == 3

    def test_size_discipline(self, chunker):
        text = " ".join(
            f"Sentence number {i} has {'some ' * (i % 7)}words." for i in range(60)
        )
        target = 80
        for chunk in chunker.chunk(text, target):
            assert chunk.strip()
            if len(chunk) > target:
                assert ". " not in chunk

    def test_coverage(self, chunker):
        text = "First one.  Second\tone!\n\nThird one?   Fourth"
        chunks = chunker.chunk(text, 15)
        sentences = [s.strip() for s in re.split(r"[.!?]+", text) if s.strip()]
        assert ". ".join(chunks) == ". ".join(sentences)
