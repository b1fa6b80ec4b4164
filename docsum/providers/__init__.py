"""
Summarization backends and the registry that selects between them.
"""

from .base import ChatSummarizationService, SummarizationService
from .registry import KNOWN_PROVIDERS, ProviderRegistry


__all__ = [
    "SummarizationService",
    "ChatSummarizationService",
    "ProviderRegistry",
    "KNOWN_PROVIDERS",
]
