"""
docsum Summarization Module

Sequential, context-carrying summarization of chunked documents.

Main Functions:
- summarize: Resolve a provider from the registry and summarize chunks
- summarize_document: Extract, chunk and summarize a PDF
- SummarizationRun: The per-run state machine used by every chat backend

Usage Example:
    from docsum.config import Config
    from docsum.providers import ProviderRegistry
    from docsum.summarization import SummarizationOptions, summarize

    registry = ProviderRegistry.from_config(Config.from_env())
    result = summarize(
        ["first chunk ...", "second chunk ..."],
        SummarizationOptions(provider="openai", format="academic", language="German"),
        registry,
    )
    print(result.summary, result.tokens_used)
"""

from .engine import SummarizationRun
from .orchestration import summarize, summarize_document
from .types import (
    ChatMessage,
    Completion,
    RunState,
    SummarizationOptions,
    SummarizationResult,
)


__all__ = [
    "summarize",
    "summarize_document",
    "SummarizationRun",
    "RunState",
    "ChatMessage",
    "Completion",
    "SummarizationOptions",
    "SummarizationResult",
]
