"""
Value types exchanged between the summarization engine and its backends.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..prompts import DEFAULT_FORMAT, CustomPromptTemplate


DEFAULT_TEMPERATURE = 0.3


class RunState(Enum):
    """Lifecycle of a single summarization run."""

    IDLE = "idle"
    RUNNING = "running"
    RECONCILING = "reconciling"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class ChatMessage:
    """One conversational turn sent to a model (system, user or assistant)."""

    role: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class Completion:
    """A model response: completion text plus tokens billed for the call."""

    text: str
    tokens_used: int = 0


@dataclass(frozen=True)
class SummarizationOptions:
    """
    Per-run settings.

    ``max_length`` is advisory and only passed into the instruction.
    ``prompt_template`` overrides ``format`` when given.
    """

    provider: str = "openai"
    format: str = DEFAULT_FORMAT
    max_length: Optional[int] = None
    language: Optional[str] = None
    temperature: float = DEFAULT_TEMPERATURE
    prompt_template: Optional[CustomPromptTemplate] = None


@dataclass(frozen=True)
class SummarizationResult:
    """Output of one successful run."""

    summary: str
    provider: str
    model: str
    tokens_used: int = 0
