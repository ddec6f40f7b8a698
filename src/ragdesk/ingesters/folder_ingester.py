"""Ingester for local folders."""

import logging
import os
from pathlib import Path
from typing import Iterator

from ragdesk.models import TextSource
from ragdesk.utils.binary import read_text_source

logger = logging.getLogger(__name__)

SKIP_PATTERNS = {
    "__pycache__",
    "node_modules",
    "venv",
    "env",
    "dist",
    "build",
}


class FolderIngester:
    """Ingester for local filesystem folders."""

    source_type = "folder"

    def can_handle(self, source: Path) -> bool:
        """Check if this is an existing directory."""
        return source.is_dir()

    def ingest(self, source: Path) -> Iterator[TextSource]:
        """Yield text files from a folder recursively, in sorted order.

        Args:
            source: Path to the folder

        Yields:
            TextSource objects named by their path relative to the folder
        """
        for root, dirs, files in os.walk(source):
            dirs.sort()
            for filename in sorted(files):
                full_path = Path(root) / filename
                rel_path = full_path.relative_to(source)

                if self._should_skip(rel_path):
                    continue

                try:
                    text = read_text_source(full_path, str(rel_path))
                except OSError as e:
                    logger.warning(f"Skipping {rel_path}: {e}")
                    continue

                if text is None:
                    logger.warning(f"Skipping {rel_path}: not a text file")
                    continue
                yield text

    def _should_skip(self, path: Path) -> bool:
        """Skip hidden files and common build artifacts."""
        return any(part.startswith(".") or part in SKIP_PATTERNS for part in path.parts)
