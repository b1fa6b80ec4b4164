"""
PDF extraction: file validation, page text extraction and chunk preparation.
"""

from .pdf import (
    MAX_FILE_SIZE,
    ExtractedDocument,
    ProcessedDocument,
    extract_text,
    process_pdf,
    validate_pdf_file,
)


__all__ = [
    "extract_text",
    "process_pdf",
    "validate_pdf_file",
    "ExtractedDocument",
    "ProcessedDocument",
    "MAX_FILE_SIZE",
]
