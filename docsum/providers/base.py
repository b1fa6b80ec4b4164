"""
Backend contract for summarization providers.

Every backend offers three operations: ``summarize``, ``is_available`` and
``get_provider``. ``ChatSummarizationService`` implements ``summarize`` on top
of a single chat-completion primitive so concrete providers only translate
messages to and from their vendor API.
"""

from abc import ABC, abstractmethod
from typing import Mapping, Optional, Sequence

from ..exceptions import ConfigurationError
from ..logging_config import get_logger
from ..prompts import PromptTemplate, compose_instruction
from ..summarization.engine import SummarizationRun
from ..summarization.types import ChatMessage, Completion, SummarizationOptions, SummarizationResult


logger = get_logger(__name__)


class SummarizationService(ABC):
    """A summarization backend that can be registered with a ``ProviderRegistry``."""

    model: str

    @abstractmethod
    def summarize(self, chunks: Sequence[str], options: SummarizationOptions) -> SummarizationResult:
        """Summarize an ordered chunk sequence into one result."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the backend is usable (e.g. a credential is configured)."""

    @abstractmethod
    def get_provider(self) -> str:
        """Provider id of this backend."""

    def check_credentials(self) -> tuple[bool, Optional[str]]:
        """Verify the configured credential against the vendor API."""
        return self.is_available(), None


class ChatSummarizationService(SummarizationService):
    """
    Base class for chat-completion backends.

    Args:
        model: Model id used for every call
        max_tokens: Completion token ceiling per call
        templates: Template registry used to resolve named formats
    """

    def __init__(
        self,
        model: str,
        max_tokens: int,
        templates: Optional[Mapping[str, PromptTemplate]] = None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.templates = templates

    @abstractmethod
    def complete(self, messages: list[ChatMessage], temperature: float, max_tokens: int) -> Completion:
        """Issue one chat completion call."""

    def summarize(self, chunks: Sequence[str], options: SummarizationOptions) -> SummarizationResult:
        if not self.is_available():
            raise ConfigurationError(f"{self.get_provider()} API key is not configured")

        instruction = compose_instruction(
            format=options.format,
            custom_template=options.prompt_template,
            language=options.language,
            max_length=options.max_length,
            templates=self.templates,
        )

        run = SummarizationRun(
            complete=self.complete,
            instruction=instruction,
            options=options,
            provider=self.get_provider(),
            model=self.model,
            max_tokens=self.max_tokens,
        )
        return run.execute(chunks)
