"""Text/binary detection at the ingest boundary."""

from pathlib import Path
from typing import Optional

from ragdesk.models import TextSource

# Extensions that never hold plain text
BINARY_EXTENSIONS = {
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp", ".tiff",
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".odt",
    ".zip", ".tar", ".gz", ".rar", ".7z", ".bz2", ".xz",
    ".exe", ".dll", ".so", ".dylib", ".bin", ".pyc", ".class", ".o",
    ".mp3", ".mp4", ".avi", ".mov", ".wav", ".flac", ".mkv", ".webm",
    ".ttf", ".otf", ".woff", ".woff2",
    ".db", ".sqlite", ".sqlite3",
}

TEXT_BYTES = set(range(32, 127)) | {9, 10, 12, 13}


def is_binary_extension(path: str | Path) -> bool:
    """Check if file extension indicates binary content."""
    return Path(path).suffix.lower() in BINARY_EXTENSIONS


def is_binary_content(content: bytes, sample_size: int = 8192) -> bool:
    """Sniff the start of the content for null bytes or mostly non-text bytes.

    Bytes >= 0x80 count as text when the sample decodes as UTF-8.
    """
    if not content:
        return False

    sample = content[:sample_size]
    if b"\x00" in sample:
        return True

    try:
        sample.decode("utf-8")
        return False
    except UnicodeDecodeError as e:
        # A multi-byte sequence cut off by the sample window is still text
        if e.start >= len(sample) - 3 and e.reason == "unexpected end of data":
            return False

    non_text = sum(1 for byte in sample if byte not in TEXT_BYTES)
    return (non_text / len(sample)) > 0.30


def detect_binary(path: str | Path, content: bytes) -> bool:
    """Detect if a file is binary using both extension and content analysis."""
    if is_binary_extension(path):
        return True
    return is_binary_content(content)


def read_text_source(path: Path, name: str) -> Optional[TextSource]:
    """Read a file as UTF-8 text, or return None if it looks binary.

    Raises:
        OSError: The file cannot be read.
    """
    raw = path.read_bytes()
    if detect_binary(path, raw):
        return None
    return TextSource(
        name=name,
        content=raw.decode("utf-8", errors="replace"),
        size_bytes=len(raw),
    )
