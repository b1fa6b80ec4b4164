"""
Anthropic Messages API backend.

The Messages API takes the system instruction as a separate parameter and
requires the conversation to open with a user turn, so assistant context
that precedes the first user turn is folded into that user turn.
"""

from typing import Any, Mapping, Optional

try:
    import anthropic
except ImportError:
    raise ImportError("anthropic package not installed. Run: pip install anthropic") from None

from ..logging_config import get_logger
from ..prompts import PromptTemplate
from ..summarization.types import ChatMessage, Completion
from .base import ChatSummarizationService


logger = get_logger(__name__)

# Messages API accepts 0..1, narrower than the 0..2 allowed in the config
MAX_TEMPERATURE = 1.0


def to_anthropic_messages(messages: list[ChatMessage]) -> tuple[str, list[dict[str, Any]]]:
    """
    Split chat messages into a system string and Messages API turns.

    Returns:
        (system_content, chat_messages)
    """
    system_parts = []
    leading_context = []
    chat_messages: list[dict[str, Any]] = []

    for message in messages:
        if message.role == "system":
            system_parts.append(message.content)
        elif message.role == "assistant" and not chat_messages:
            leading_context.append(message.content)
        elif message.role == "user" and leading_context and not chat_messages:
            content = "\n\n".join(leading_context + [message.content])
            chat_messages.append({"role": "user", "content": content})
            leading_context = []
        else:
            chat_messages.append({"role": message.role, "content": message.content})

    return "\n\n".join(system_parts), chat_messages


class AnthropicService(ChatSummarizationService):
    """Summarization backend using Anthropic Claude models."""

    provider = "anthropic"

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "claude-3-opus-20240229",
        max_tokens: int = 4000,
        templates: Optional[Mapping[str, PromptTemplate]] = None,
        client: Optional["anthropic.Anthropic"] = None,
    ):
        super().__init__(model=model, max_tokens=max_tokens, templates=templates)
        self.api_key = api_key
        self._client = client

    @property
    def client(self) -> "anthropic.Anthropic":
        if self._client is None:
            self._client = anthropic.Anthropic(api_key=self.api_key)
        return self._client

    def is_available(self) -> bool:
        return bool(self.api_key)

    def get_provider(self) -> str:
        return self.provider

    def complete(self, messages: list[ChatMessage], temperature: float, max_tokens: int) -> Completion:
        system_content, chat_messages = to_anthropic_messages(messages)

        if temperature > MAX_TEMPERATURE:
            logger.warning(
                f"Temperature {temperature} is above the Anthropic maximum, using {MAX_TEMPERATURE}"
            )
            temperature = MAX_TEMPERATURE

        kwargs: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": chat_messages,
        }
        if system_content:
            kwargs["system"] = system_content

        response = self.client.messages.create(**kwargs)

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        usage = response.usage
        tokens = (usage.input_tokens + usage.output_tokens) if usage else 0
        return Completion(text=text.strip(), tokens_used=tokens)

    def check_credentials(self) -> tuple[bool, Optional[str]]:
        if not self.is_available():
            return False, "ANTHROPIC_API_KEY is not set"
        try:
            self.client.models.list(limit=1)
        except Exception as e:
            logger.debug(f"Anthropic credential check failed: {e}")
            return False, "Invalid Anthropic API key"
        return True, None
