"""Sentence-based chunking strategy."""

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

SENTENCE_BOUNDARY = re.compile(r"[.!?]+")


class SentenceChunker:
    """Default chunking: split on sentence punctuation, pack greedily.

    - Splits on runs of '.', '!' and '?'
    - Joins trimmed sentences with ". " until the next one would overflow
    - Never splits inside a sentence, so one long sentence becomes one
      oversized chunk
    """

    DEFAULT_TARGET_SIZE = 500
    SEPARATOR = ". "

    def __init__(self, target_size: int = DEFAULT_TARGET_SIZE):
        self.target_size = target_size

    def chunk(self, text: str, target_size: Optional[int] = None) -> list[str]:
        """Split text into chunk texts.

        Args:
            text: The text content to chunk
            target_size: Soft character limit per chunk; defaults to the
                chunker's configured size

        Returns:
            Ordered chunk texts, none of them blank
        """
        limit = self.target_size if target_size is None else target_size

        sentences = [s.strip() for s in SENTENCE_BOUNDARY.split(text)]
        sentences = [s for s in sentences if s]

        chunks: list[str] = []
        buffer = ""
        for sentence in sentences:
            if not buffer:
                buffer = sentence
            elif len(buffer) + len(self.SEPARATOR) + len(sentence) > limit:
                chunks.append(buffer)
                buffer = sentence
            else:
                buffer += self.SEPARATOR + sentence

        if buffer:
            chunks.append(buffer)

        logger.debug(f"Split {len(sentences)} sentences into {len(chunks)} chunks")
        return chunks
