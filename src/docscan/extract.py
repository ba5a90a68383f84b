"""Text extraction — turn uploaded bytes into plain text for the evaluator.

Only plain-text formats are handled here; binary document formats are
rejected with UnsupportedFormatError.
"""

from __future__ import annotations

from pathlib import PurePath

PLAIN_TEXT_SUFFIXES = frozenset({
    ".txt", ".text", ".log", ".md", ".csv",
    ".json", ".xml", ".yaml", ".yml",
})


class ExtractError(Exception):
    """Raised when text cannot be extracted from a document."""


class UnsupportedFormatError(ExtractError):
    """Raised for file types with no extractor."""


def is_supported(filename: str) -> bool:
    return PurePath(filename).suffix.lower() in PLAIN_TEXT_SUFFIXES


def extract_text(data: bytes, filename: str) -> str:
    """Return the plain text of *data*, dispatching on *filename*'s suffix."""
    suffix = PurePath(filename).suffix.lower()
    if suffix not in PLAIN_TEXT_SUFFIXES:
        raise UnsupportedFormatError(f"Unsupported file type: {suffix or '(none)'}")
    return data.decode("utf-8", errors="replace")
