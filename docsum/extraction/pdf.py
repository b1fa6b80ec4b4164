"""
PDF text extraction and preparation for summarization.

Text is read page by page with pdfplumber. Pages are joined with a single
space before chunking, so page boundaries do not influence chunk borders.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import pdfplumber

from ..chunk import CHUNK_OVERLAP, CHUNK_SIZE, chunk_overlapping
from ..exceptions import ExtractionError, ValidationError


logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB


@dataclass(frozen=True)
class ExtractedDocument:
    """Page texts and document-info metadata of one PDF."""

    pages: list[str]
    page_count: int
    title: Optional[str] = None
    author: Optional[str] = None
    creation_date: Optional[str] = None

    @property
    def text(self) -> str:
        return " ".join(self.pages)


@dataclass(frozen=True)
class ProcessedDocument:
    """Chunks ready for summarization plus the source metadata."""

    chunks: list[str]
    metadata: dict = field(default_factory=dict)


def validate_pdf_file(path: Union[str, Path], max_file_size: int = MAX_FILE_SIZE) -> Path:
    """
    Check that a path is an existing PDF within the size limit.

    Raises:
        ValidationError: If the file is missing, not a PDF, or too large
    """
    file_path = Path(path)

    if not file_path.is_file():
        raise ValidationError(f"Input file does not exist: {file_path}")

    if file_path.suffix.lower() != ".pdf":
        raise ValidationError(f"Only PDF files are allowed: {file_path}")

    size = file_path.stat().st_size
    if size > max_file_size:
        raise ValidationError(
            f"File size must be less than {max_file_size // (1024 * 1024)}MB "
            f"({file_path.name} is {size:,} bytes)"
        )

    return file_path


def _metadata_value(info: dict, key: str) -> Optional[str]:
    value = info.get(key)
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    value = str(value).strip()
    return value or None


def extract_text(path: Union[str, Path]) -> ExtractedDocument:
    """
    Extract the text of every page of a PDF.

    Args:
        path: Path to the PDF file

    Returns:
        ExtractedDocument with one string per page

    Raises:
        ExtractionError: If the PDF cannot be opened or parsed
    """
    file_path = Path(path)
    pages = []

    try:
        with pdfplumber.open(file_path) as pdf:
            info = pdf.metadata or {}
            for page in pdf.pages:
                page_text = page.extract_text() or ""
                pages.append(" ".join(page_text.split()))
    except Exception as e:
        logger.error(f"PDF processing error for {file_path}: {e}")
        raise ExtractionError(f"Error processing PDF file {file_path.name}: {e}") from e

    if not any(pages):
        logger.warning(f"No extractable text found in {file_path.name}")

    logger.info(f"Extracted {len(pages)} pages from {file_path.name}")
    return ExtractedDocument(
        pages=pages,
        page_count=len(pages),
        title=_metadata_value(info, "Title"),
        author=_metadata_value(info, "Author"),
        creation_date=_metadata_value(info, "CreationDate"),
    )


def process_pdf(
    path: Union[str, Path],
    chunk_size: int = CHUNK_SIZE,
    overlap: int = CHUNK_OVERLAP,
) -> ProcessedDocument:
    """Extract a PDF and split its text into overlapping chunks."""
    file_path = Path(path)
    document = extract_text(file_path)
    chunks = chunk_overlapping(document.text, chunk_size=chunk_size, overlap=overlap)

    return ProcessedDocument(
        chunks=chunks,
        metadata={
            "file_name": file_path.name,
            "file_size": file_path.stat().st_size,
            "total_pages": document.page_count,
            "title": document.title,
            "author": document.author,
            "creation_date": document.creation_date,
        },
    )
