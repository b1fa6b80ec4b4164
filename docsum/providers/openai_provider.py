"""
OpenAI chat-completions backend.
"""

from typing import Mapping, Optional

try:
    from openai import OpenAI
except ImportError:
    raise ImportError("OpenAI package not installed. Run: pip install openai") from None

from ..logging_config import get_logger
from ..prompts import PromptTemplate
from ..summarization.types import ChatMessage, Completion
from .base import ChatSummarizationService


logger = get_logger(__name__)


def _model_supports_temperature(model: str) -> bool:
    """Check if model supports temperature parameter."""
    # o1, o3, o4 models don't support temperature
    return not model.startswith(("o1", "o3", "o4"))


class OpenAIService(ChatSummarizationService):
    """Summarization backend using the OpenAI chat completions API."""

    provider = "openai"

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4-turbo-preview",
        max_tokens: int = 4000,
        templates: Optional[Mapping[str, PromptTemplate]] = None,
        client: Optional[OpenAI] = None,
    ):
        super().__init__(model=model, max_tokens=max_tokens, templates=templates)
        self.api_key = api_key
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def is_available(self) -> bool:
        return bool(self.api_key)

    def get_provider(self) -> str:
        return self.provider

    def complete(self, messages: list[ChatMessage], temperature: float, max_tokens: int) -> Completion:
        request_params = {
            "model": self.model,
            "messages": [m.to_dict() for m in messages],
            "max_tokens": max_tokens,
        }
        if _model_supports_temperature(self.model):
            request_params["temperature"] = temperature

        response = self.client.chat.completions.create(**request_params)

        content = response.choices[0].message.content if response.choices else None
        tokens = response.usage.total_tokens if response.usage else 0
        return Completion(text=(content or "").strip(), tokens_used=tokens or 0)

    def check_credentials(self) -> tuple[bool, Optional[str]]:
        if not self.is_available():
            return False, "OPENAI_API_KEY is not set"
        try:
            self.client.models.list()
        except Exception as e:
            logger.debug(f"OpenAI credential check failed: {e}")
            return False, "Invalid OpenAI API key"
        return True, None
