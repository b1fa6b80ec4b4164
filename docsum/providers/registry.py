"""
Provider registry mapping provider ids to summarization backends.

The registry is built once at startup and passed explicitly to whatever needs
it. Each backend's availability is probed at construction; backends that fail
the probe are not registered.
"""

from typing import Iterable, Mapping, Optional

from ..config import Config
from ..exceptions import ProviderUnavailableError
from ..logging_config import get_logger
from ..prompts import PromptTemplate
from .base import SummarizationService


logger = get_logger(__name__)

KNOWN_PROVIDERS = ("openai", "anthropic", "google")


class ProviderRegistry:
    """Provider id -> backend mapping, read-only after construction."""

    def __init__(self, services: Iterable[SummarizationService] = ()):
        self._services: dict[str, SummarizationService] = {}

        for service in services:
            provider = service.get_provider()
            if service.is_available():
                self._services[provider] = service
                logger.debug(f"Registered provider '{provider}' (model: {service.model})")
            else:
                logger.debug(f"Provider '{provider}' is not available, skipping registration")

    @classmethod
    def from_config(
        cls, config: Config, templates: Optional[Mapping[str, PromptTemplate]] = None
    ) -> "ProviderRegistry":
        """Build the registry from every backend the configuration knows about."""
        from .anthropic_provider import AnthropicService
        from .openai_provider import OpenAIService

        return cls([
            OpenAIService(
                api_key=config.openai_api_key,
                model=config.openai_model,
                max_tokens=config.openai_max_tokens,
                templates=templates,
            ),
            AnthropicService(
                api_key=config.anthropic_api_key,
                model=config.anthropic_model,
                max_tokens=config.anthropic_max_tokens,
                templates=templates,
            ),
        ])

    def get_available_providers(self) -> set[str]:
        return set(self._services)

    def is_available(self, provider: str) -> bool:
        return provider in self._services

    def get_service(self, provider: str) -> SummarizationService:
        """
        Look up a registered backend.

        Raises:
            ProviderUnavailableError: If the provider was never registered or
                failed its availability probe
        """
        service = self._services.get(provider)
        if service is None:
            raise ProviderUnavailableError(provider)
        return service

    def services(self) -> list[SummarizationService]:
        return list(self._services.values())
