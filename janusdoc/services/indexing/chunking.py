from __future__ import annotations

from janusdoc.core.config import settings


def validate_chunking(chunk_size: int, overlap: int) -> None:
    """
    overlap >= chunk_size would make the window stop advancing,
    so this is rejected up front instead of clamped.
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be >= 1")
    if overlap < 0:
        raise ValueError("overlap must be >= 0")
    if overlap >= chunk_size:
        raise ValueError("overlap must be smaller than chunk_size")


def chunk_text(
    text: str,
    chunk_size: int | None = None,
    overlap: int | None = None,
) -> list[str]:
    """
    Split text into overlapping word windows.

        - chunk_size: words per chunk (proxy for tokens), example: 500
        - overlap: words shared by neighbouring chunks, example: 50

    Short text comes back as-is (single chunk, original whitespace kept).
    Long text is re-joined with single spaces; the last window may be shorter.
    """
    if chunk_size is None:
        chunk_size = settings.CHUNK_SIZE_WORDS
    if overlap is None:
        overlap = settings.CHUNK_OVERLAP_WORDS

    validate_chunking(chunk_size, overlap)

    words = text.split()
    if len(words) <= chunk_size:
        return [text]

    chunks: list[str] = []
    start = 0
    while start < len(words):
        end = min(start + chunk_size, len(words))
        chunks.append(" ".join(words[start:end]))

        if end >= len(words):
            break
        start = end - overlap

    return chunks
