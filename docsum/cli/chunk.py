"""
Command-line interface for chunking a document.

Usage:
    python -m docsum chunk --input report.pdf
    python -m docsum chunk --input notes.txt --size 2000 --overlap 50 --output outputs/chunks/notes.json
"""

import argparse
import sys
from pathlib import Path
from typing import Any

from ..chunk import analyze_chunks, chunk_overlapping, preview_chunks
from ..config import get_config
from ..exceptions import DocsumError, ValidationError
from ..extraction import extract_text
from ..logging_config import get_logger, setup_logging
from .common import print_summary_stats, save_json_output


# Set up logger for this module
logger = get_logger(__name__)


def _read_document_text(input_path: Path) -> tuple[str, dict[str, Any]]:
    """Read text from a PDF or plain-text file."""
    if not input_path.is_file():
        raise ValidationError(f"Input file does not exist: {input_path}")

    suffix = input_path.suffix.lower()
    if suffix == ".pdf":
        document = extract_text(input_path)
        return document.text, {"total_pages": document.page_count, "title": document.title}
    if suffix in (".txt", ".md"):
        return input_path.read_text(encoding="utf-8"), {}

    raise ValidationError(f"Unsupported input type '{suffix}'. Use a .pdf or .txt file")


def chunk_file(
    input_path: str,
    chunk_size: int | None = None,
    overlap: int | None = None,
    output_path: str | None = None,
    preview: bool = False,
) -> dict[str, Any]:
    """
    CLI wrapper for chunking one document with progress printing and file I/O.

    Args:
        input_path: PDF or text file to chunk
        chunk_size: Character budget per chunk (default from config)
        overlap: Words carried between chunks (default from config)
        output_path: Optional JSON file to save chunks to
        preview: Whether to show chunk previews

    Returns:
        Dictionary with chunks, statistics and source metadata
    """
    config = get_config()
    chunk_size = chunk_size if chunk_size is not None else config.chunk_size
    overlap = overlap if overlap is not None else config.chunk_overlap

    path = Path(input_path)
    print(f"📥 Input: {path}")
    print(f"✂️  Chunk size: {chunk_size} chars, overlap: {overlap} words")

    text, source_metadata = _read_document_text(path)
    chunks = chunk_overlapping(text, chunk_size=chunk_size, overlap=overlap)

    stats = analyze_chunks(chunks)
    print_summary_stats(stats)

    if preview:
        print()
        for line in preview_chunks(chunks, max_preview=120):
            print(f"👀 {line}")

    output_data = {
        "source": str(path),
        "chunk_size": chunk_size,
        "overlap": overlap,
        "source_metadata": source_metadata,
        "stats": stats,
        "chunks": chunks,
    }

    if output_path:
        save_json_output(output_data, output_path)

    return output_data


def main():
    """Main entry point for chunking CLI."""
    parser = argparse.ArgumentParser(
        description="Split a document into overlapping chunks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Chunk a PDF with the configured defaults (5000 chars, 200 words overlap)
  python -m docsum chunk --input report.pdf --preview

  # Chunk a text file with a smaller budget and save the result
  python -m docsum chunk --input notes.txt --size 2000 --overlap 50 --output outputs/chunks/notes.json
        """,
    )

    parser.add_argument("--input", "-i", required=True, help="PDF or text file to chunk")
    parser.add_argument("--size", type=int, help="Maximum chunk size in characters")
    parser.add_argument("--overlap", type=int, help="Words carried over between consecutive chunks")
    parser.add_argument("--output", "-o", help="JSON file to save the chunks to")
    parser.add_argument("--preview", action="store_true", help="Show previews of the chunks")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: DOCSUM_LOG_LEVEL, or INFO)",
    )

    args = parser.parse_args()
    setup_logging(log_level=args.log_level)

    try:
        result = chunk_file(
            input_path=args.input,
            chunk_size=args.size,
            overlap=args.overlap,
            output_path=args.output,
            preview=args.preview,
        )
        logger.info(f"Chunking completed: {result['stats']['num_chunks']} chunks")
    except DocsumError as e:
        logger.error(f"Chunking failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
