"""Retrieval configuration."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RetrievalConfig:
    """Tunable defaults for chunking, embedding and querying.

    Every value can still be overridden per call.
    """

    chunk_size: int = 500
    dimensions: int = 100
    default_limit: int = 5

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.dimensions <= 0:
            raise ValueError(f"dimensions must be positive, got {self.dimensions}")
        if self.default_limit < 0:
            raise ValueError(
                f"default_limit must not be negative, got {self.default_limit}"
            )
