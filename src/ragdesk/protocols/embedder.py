"""Protocol for embedding providers."""

from typing import Optional, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Protocol for embedding providers.

    Implementations must be deterministic: the store relies on re-embedding
    a text producing the same vector it produced at ingest time.
    """

    @property
    def dimension(self) -> int:
        """Return the default embedding dimension."""
        ...

    @property
    def model_name(self) -> str:
        """Return identifier for the embedding scheme used."""
        ...

    def embed(self, text: str, dimensions: Optional[int] = None) -> np.ndarray:
        """Embed a single text as a 1-D float64 array."""
        ...

    def embed_batch(self, texts: list[str]) -> np.ndarray:
        """Generate embeddings for a batch of texts.

        Returns: numpy array of shape (len(texts), dimension)
        """
        ...
