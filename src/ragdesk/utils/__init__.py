"""Utility functions for ragdesk."""

from ragdesk.utils.binary import (
    detect_binary,
    is_binary_content,
    is_binary_extension,
    read_text_source,
)

__all__ = ["detect_binary", "is_binary_content", "is_binary_extension", "read_text_source"]
