"""
Shared helpers for prompt handling and token accounting.

Placeholder substitution for ``{{variable}}`` templates and a tiktoken-based
prompt size estimate used for pre-call logging.
"""

import re
from typing import Any, Iterable, Mapping

try:
    import tiktoken
except ImportError:
    raise ImportError("tiktoken package not installed. Run: pip install tiktoken") from None


PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z0-9_.-]+)\s*\}\}")

# Fallback encoding for models tiktoken does not know (e.g. non-OpenAI models)
DEFAULT_ENCODING = "cl100k_base"

# Per-message framing overhead in the chat format
TOKENS_PER_MESSAGE = 4


def substitute_variables(template: str, variables: Mapping[str, str] | None) -> str:
    """
    Replace ``{{key}}`` placeholders in a template.

    Placeholders without a matching variable are left verbatim.
    """
    if not variables:
        return template

    def _replace(match: re.Match) -> str:
        key = match.group(1)
        if key in variables:
            return str(variables[key])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, template)


def find_placeholders(template: str) -> list[str]:
    """Return placeholder names in order of first appearance."""
    seen = []
    for name in PLACEHOLDER_PATTERN.findall(template):
        if name not in seen:
            seen.append(name)
    return seen


def _get_encoding(model: str | None):
    if model:
        try:
            return tiktoken.encoding_for_model(model)
        except KeyError:
            pass
    return tiktoken.get_encoding(DEFAULT_ENCODING)


def estimate_token_count(messages: Iterable[Mapping[str, Any]], model: str | None = None) -> int:
    """Estimate prompt tokens for a list of chat messages."""
    encoding = _get_encoding(model)
    total = 0
    for message in messages:
        total += TOKENS_PER_MESSAGE + len(encoding.encode(str(message.get("content", ""))))
    return total


def truncate(text: str, max_length: int = 200) -> str:
    """Shorten text for console previews."""
    return text if len(text) <= max_length else text[:max_length] + "..."
