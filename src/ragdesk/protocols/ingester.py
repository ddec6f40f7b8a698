"""Protocol for input source handlers."""

from pathlib import Path
from typing import Iterator, Protocol, runtime_checkable

from ragdesk.models import TextSource


@runtime_checkable
class Ingester(Protocol):
    """Protocol for input source handlers.

    Implementations read local files and yield only text content; binary
    input is rejected here, before it reaches the document store.
    """

    @property
    def source_type(self) -> str:
        """Return identifier for this source type (e.g., 'file', 'folder')."""
        ...

    def can_handle(self, source: Path) -> bool:
        """Check if this ingester can process the given source."""
        ...

    def ingest(self, source: Path) -> Iterator[TextSource]:
        """Yield text sources found at the given path."""
        ...
