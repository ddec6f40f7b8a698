"""Protocol for text chunking strategies."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class ChunkingStrategy(Protocol):
    """Protocol for text chunking strategies.

    The document store only needs the chunk texts; ids, ordinals and
    back-references are assigned by the store.
    """

    def chunk(self, text: str, target_size: Optional[int] = None) -> list[str]:
        """Split text into ordered, non-empty chunk texts."""
        ...
