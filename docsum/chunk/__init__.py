"""
Chunking module for splitting extracted document text into overlapping pieces.

Chunks are word-bounded, limited by a character budget, and each chunk after
the first starts with the trailing words of its predecessor.
"""

from .chunkers import CHUNK_OVERLAP, CHUNK_SIZE, chunk_overlapping
from .utils import analyze_chunks, preview_chunks, shared_overlap


__all__ = [
    # Core chunking
    "chunk_overlapping",
    "CHUNK_SIZE",
    "CHUNK_OVERLAP",
    # Utility functions
    "analyze_chunks",
    "preview_chunks",
    "shared_overlap",
]
