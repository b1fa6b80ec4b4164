"""
Word-bounded chunking with overlap between consecutive chunks.

Text is whitespace-tokenized into words and packed into chunks bounded by a
character budget. Every chunk after the first starts with the trailing words
of its predecessor so that each summarization step sees some context from the
previous one.
"""

import logging

from tqdm import tqdm

from ..exceptions import ChunkingError


logger = logging.getLogger(__name__)

CHUNK_SIZE = 5000
CHUNK_OVERLAP = 200


def _joined_length(words: list[str]) -> int:
    """Length of ``" ".join(words)`` without building the string."""
    if not words:
        return 0
    return sum(len(word) for word in words) + len(words) - 1


def chunk_overlapping(
    text: str, chunk_size: int = CHUNK_SIZE, overlap: int = CHUNK_OVERLAP
) -> list[str]:
    """
    Split text into overlapping, word-bounded chunks.

    Args:
        text: Input text to chunk
        chunk_size: Maximum chunk length in characters (words joined by one space)
        overlap: Number of trailing words carried from each sealed chunk into the next

    Returns:
        Ordered list of chunk strings. Empty or whitespace-only text gives an
        empty list; text that never overflows the budget gives one chunk equal
        to the whitespace-normalized input.

    Raises:
        ChunkingError: If input parameters are invalid

    Note:
        Words are never split. A single word longer than ``chunk_size`` becomes
        an oversize chunk of its own. The carried overlap is trimmed from its
        front only when the carried words plus the next word would not fit.
    """
    # Input validation
    if not isinstance(text, str):
        raise ChunkingError(f"text must be a string, got {type(text).__name__}")

    if not isinstance(chunk_size, int) or isinstance(chunk_size, bool):
        raise ChunkingError(
            f"chunk_size must be an integer, got {type(chunk_size).__name__}"
        )

    if chunk_size <= 0:
        raise ChunkingError(f"chunk_size must be positive, got {chunk_size}")

    if not isinstance(overlap, int) or isinstance(overlap, bool):
        raise ChunkingError(f"overlap must be an integer, got {type(overlap).__name__}")

    if overlap < 0:
        raise ChunkingError(f"overlap cannot be negative, got {overlap}")

    words = text.split()
    if not words:
        return []

    chunks = []
    current_chunk: list[str] = []
    current_length = 0

    words_progress = tqdm(
        words,
        desc="Chunking text",
        unit="word",
        disable=len(words) < 50_000,  # Only show for book-sized inputs
        leave=False,
    )

    for word in words_progress:
        added_length = len(word) + (1 if current_chunk else 0)

        if current_chunk and current_length + added_length > chunk_size:
            chunks.append(" ".join(current_chunk))

            carried = current_chunk[len(current_chunk) - overlap:] if overlap else []
            while carried and _joined_length(carried) + 1 + len(word) > chunk_size:
                carried = carried[1:]

            if overlap and len(carried) < min(overlap, len(current_chunk)):
                logger.debug(
                    f"Trimmed overlap to {len(carried)} words to keep chunk {len(chunks)} within {chunk_size} chars"
                )

            current_chunk = carried
            current_length = _joined_length(current_chunk)
            added_length = len(word) + (1 if current_chunk else 0)

        current_chunk.append(word)
        current_length += added_length

    # Add remaining chunk if any
    if current_chunk:
        chunks.append(" ".join(current_chunk))

    logger.debug(f"Split {len(words)} words into {len(chunks)} chunks (size={chunk_size}, overlap={overlap})")
    return chunks
