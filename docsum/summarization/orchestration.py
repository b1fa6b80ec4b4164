"""
High-level entry points tying the registry, extraction and the engine together.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Any, Sequence, Union

from ..config import Config
from ..exceptions import ExtractionError
from ..extraction import process_pdf, validate_pdf_file
from ..logging_config import get_logger
from .types import SummarizationOptions, SummarizationResult

if TYPE_CHECKING:
    from ..providers import ProviderRegistry


logger = get_logger(__name__)


def summarize(
    chunks: Sequence[str], options: SummarizationOptions, registry: "ProviderRegistry"
) -> SummarizationResult:
    """
    Summarize chunks with the backend selected by ``options.provider``.

    Args:
        chunks: Ordered chunk sequence
        options: Run options
        registry: ProviderRegistry to resolve the backend from

    Raises:
        ProviderUnavailableError: Before any model call if the provider is not registered
        SummarizationError: If the run fails
    """
    service = registry.get_service(options.provider)
    return service.summarize(list(chunks), options)


def summarize_document(
    pdf_path: Union[str, Path],
    options: SummarizationOptions,
    registry: "ProviderRegistry",
    config: Config,
) -> tuple[SummarizationResult, dict[str, Any]]:
    """
    Extract, chunk and summarize a PDF.

    Returns:
        (result, document metadata with file name/size, page count, title, author)

    Raises:
        ProviderUnavailableError: Before reading the file if the provider is not registered
        ValidationError: If the file is missing, not a PDF, or too large
        ExtractionError: If the PDF cannot be read or has no extractable text
    """
    # Fail fast on provider before touching the file
    registry.get_service(options.provider)

    path = validate_pdf_file(pdf_path, max_file_size=config.max_file_size)
    processed = process_pdf(path, chunk_size=config.chunk_size, overlap=config.chunk_overlap)
    if not processed.chunks:
        raise ExtractionError(f"No extractable text found in {path.name}")

    logger.info(f"Prepared {len(processed.chunks)} chunks from {path.name}")

    result = summarize(processed.chunks, options, registry)
    metadata = dict(processed.metadata)
    metadata["num_chunks"] = len(processed.chunks)
    return result, metadata
