"""Ingester for a single text file."""

import logging
from pathlib import Path
from typing import Iterator

from ragdesk.models import TextSource
from ragdesk.utils.binary import read_text_source

logger = logging.getLogger(__name__)


class FileIngester:
    """Ingester for one file on the local filesystem."""

    source_type = "file"

    def can_handle(self, source: Path) -> bool:
        """Check if this is an existing regular file."""
        return source.is_file()

    def ingest(self, source: Path) -> Iterator[TextSource]:
        """Yield the file's text, or nothing if it is binary.

        Args:
            source: Path to the file

        Yields:
            At most one TextSource named after the file
        """
        text = read_text_source(source, source.name)
        if text is None:
            logger.warning(f"Skipping {source}: not a text file")
            return
        yield text
