"""
Utilities for chunk analysis and debugging.
"""


def shared_overlap(previous: str, following: str) -> int:
    """
    Count the words shared between the tail of one chunk and the head of the next.

    Args:
        previous: Earlier chunk
        following: Chunk that comes right after it

    Returns:
        Largest n such that the last n words of ``previous`` equal the first
        n words of ``following``
    """
    prev_words = previous.split()
    next_words = following.split()

    for n in range(min(len(prev_words), len(next_words)), 0, -1):
        if prev_words[-n:] == next_words[:n]:
            return n
    return 0


def analyze_chunks(chunks: list[str]) -> dict:
    """
    Analyze chunk statistics for debugging and optimization.

    Args:
        chunks: List of text chunks

    Returns:
        Dictionary with chunk analysis statistics
    """
    if not chunks:
        return {
            "num_chunks": 0,
            "total_chars": 0,
            "total_words": 0,
            "avg_chunk_size": 0,
            "min_chunk_size": 0,
            "max_chunk_size": 0,
            "size_std": 0,
        }

    chunk_sizes = [len(chunk) for chunk in chunks]
    total_chars = sum(chunk_sizes)
    avg_size = total_chars / len(chunks)

    # Calculate standard deviation
    variance = sum((size - avg_size) ** 2 for size in chunk_sizes) / len(chunks)
    std_dev = variance**0.5

    return {
        "num_chunks": len(chunks),
        "total_chars": total_chars,
        "total_words": sum(len(chunk.split()) for chunk in chunks),
        "avg_chunk_size": round(avg_size, 1),
        "min_chunk_size": min(chunk_sizes),
        "max_chunk_size": max(chunk_sizes),
        "size_std": round(std_dev, 1),
    }


def preview_chunks(chunks: list[str], max_preview: int = 100) -> list[str]:
    """
    Create preview of chunks for debugging (truncated for readability).

    Args:
        chunks: List of text chunks
        max_preview: Maximum characters to show per chunk

    Returns:
        List of truncated chunk previews
    """
    previews = []
    for i, chunk in enumerate(chunks):
        preview = chunk if len(chunk) <= max_preview else chunk[:max_preview] + "..."
        previews.append(f"Chunk {i + 1}: {preview}")

    return previews
