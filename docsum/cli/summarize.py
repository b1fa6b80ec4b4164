"""
Command-line interface for summarizing a PDF.

Usage:
    python -m docsum summarize --input report.pdf
    python -m docsum summarize --input report.pdf --format financial --language French --max-length 400
    python -m docsum summarize --input paper.pdf --template-file prompt.txt --var audience=students
"""

import argparse
import sys
import time
from pathlib import Path
from typing import Any

from ..config import get_config
from ..exceptions import DocsumError, ExtractionError, StorageError, ValidationError
from ..logging_config import get_logger, setup_logging
from ..prompts import CustomPromptTemplate
from ..storage import SummaryMetadata
from ..summarization import SummarizationOptions, summarize_document
from ..utils import truncate
from .common import build_registry, build_summary_store, parse_variables


# Set up logger for this module
logger = get_logger(__name__)


def summarize_pdf(
    input_path: str,
    provider: str | None = None,
    format: str = "paragraph",
    template_file: str | None = None,
    variables: dict[str, str] | None = None,
    language: str | None = None,
    max_length: int | None = None,
    temperature: float | None = None,
    title: str | None = None,
    save: bool = True,
    output_path: str | None = None,
) -> dict[str, Any]:
    """
    CLI wrapper for summarizing one PDF with progress printing and persistence.

    Args:
        input_path: PDF file to summarize
        provider: Provider id (default from config)
        format: Named template to use
        template_file: Optional file holding a custom template (overrides format)
        variables: Values for ``{{key}}`` placeholders in the custom template
        language: Target output language
        max_length: Advisory word ceiling
        temperature: Sampling temperature (default from config)
        title: Title of the stored summary (default: PDF title or file name)
        save: Whether to persist the summary
        output_path: Optional markdown file to write the summary to

    Returns:
        Dictionary with the summary, usage and storage outcome
    """
    config = get_config()
    provider = provider or config.default_provider
    temperature = temperature if temperature is not None else config.default_temperature

    custom_template = None
    if template_file:
        try:
            template_text = Path(template_file).read_text(encoding="utf-8")
        except OSError as e:
            raise ValidationError(f"Cannot read template file {template_file}: {e}") from e
        custom_template = CustomPromptTemplate(
            template=template_text,
            variables=variables or {},
        )

    options = SummarizationOptions(
        provider=provider,
        format=format,
        max_length=max_length,
        language=language,
        temperature=temperature,
        prompt_template=custom_template,
    )

    print(f"🤖 Starting summarization...")
    print(f"📥 Input: {input_path}")
    print(f"🧠 Provider: {provider}")
    print(f"📝 Format: {'custom template' if custom_template else format}")

    start_time = time.time()
    registry = build_registry(config)
    result, document = summarize_document(input_path, options, registry, config)
    elapsed_time = time.time() - start_time

    print(f"\n🎉 Summarization completed!")
    print(f"📦 Chunks: {document['num_chunks']} from {document['total_pages']} pages")
    print(f"⏱️  Total time: {elapsed_time:.2f}s")
    print(f"🔢 Total tokens: {result.tokens_used:,}")
    print(f"\n{result.summary}\n")

    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(result.summary, encoding="utf-8")
        print(f"✅ Summary written to: {output_file}")

    outcome: dict[str, Any] = {
        "summary": result.summary,
        "provider": result.provider,
        "model": result.model,
        "tokens_used": result.tokens_used,
        "processing_time": elapsed_time,
        "document": document,
        "stored_id": None,
        "storage_error": None,
    }

    if not save:
        return outcome

    try:
        stored = build_summary_store(config).save(
            title=title or document.get("title") or Path(input_path).stem,
            content=result.summary,
            format="custom" if custom_template else format,
            metadata=SummaryMetadata(
                file_name=document.get("file_name"),
                file_size=document.get("file_size"),
                page_count=document.get("total_pages"),
                provider=result.provider,
                model=result.model,
                tokens_used=result.tokens_used,
            ),
        )
    except StorageError as e:
        logger.error(f"Summary was generated but could not be saved: {e}")
        print(f"⚠️  Summary was generated but could not be saved: {e}", file=sys.stderr)
        outcome["storage_error"] = str(e)
        return outcome

    print(f"💾 Saved summary {stored.id} ({truncate(stored.title, 60)})")
    outcome["stored_id"] = stored.id
    return outcome


def main():
    """Main entry point for summarization CLI."""
    parser = argparse.ArgumentParser(
        description="Summarize a PDF using LLMs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Summarize with the default provider and paragraph format
  python -m docsum summarize --input report.pdf

  # Financial report format, in French, under 400 words
  python -m docsum summarize --input report.pdf --format financial --language French --max-length 400

  # Custom template with a placeholder value
  python -m docsum summarize --input paper.pdf --template-file prompt.txt --var audience=students

  # Use Anthropic and do not store the result
  python -m docsum summarize --input report.pdf --provider anthropic --no-save
        """,
    )

    parser.add_argument("--input", "-i", required=True, help="PDF file to summarize")
    parser.add_argument("--provider", "-p", help="Provider id (default: DOCSUM_DEFAULT_PROVIDER or openai)")
    parser.add_argument("--format", "-f", default="paragraph", help="Template id to use (default: paragraph)")
    parser.add_argument("--template-file", help="File containing a custom template (overrides --format)")
    parser.add_argument(
        "--var",
        action="append",
        metavar="KEY=VALUE",
        help="Value for a {{KEY}} placeholder in the custom template (repeatable)",
    )
    parser.add_argument("--language", "-l", help="Language to write the summary in")
    parser.add_argument("--max-length", type=int, help="Advisory maximum summary length in words")
    parser.add_argument("--temperature", "-t", type=float, help="Sampling temperature (default: 0.3)")
    parser.add_argument("--title", help="Title for the stored summary")
    parser.add_argument("--no-save", action="store_true", help="Do not store the summary")
    parser.add_argument("--output", "-o", help="Also write the summary to this markdown file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: DOCSUM_LOG_LEVEL, or INFO)",
    )

    args = parser.parse_args()

    setup_logging(log_level=args.log_level)

    try:
        result = summarize_pdf(
            input_path=args.input,
            provider=args.provider,
            format=args.format,
            template_file=args.template_file,
            variables=parse_variables(args.var),
            language=args.language,
            max_length=args.max_length,
            temperature=args.temperature,
            title=args.title,
            save=not args.no_save,
            output_path=args.output,
        )
    except ValueError as e:
        parser.error(str(e))
    except ExtractionError as e:
        logger.error(f"Could not read the document: {e}")
        sys.exit(1)
    except DocsumError as e:
        logger.error(f"Summarization failed: {e}")
        sys.exit(1)

    if result["storage_error"]:
        sys.exit(1)


if __name__ == "__main__":
    main()
