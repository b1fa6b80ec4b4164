"""
Compose the system instruction that steers a summarization run.

The instruction is built from a format body (a custom template, a named
template, or the default "paragraph" template), an optional language
directive, an optional length directive and fixed markdown guidance.
"""

import logging
from typing import Mapping, Optional

from ..utils import substitute_variables
from .templates import DEFAULT_FORMAT, SYSTEM_TEMPLATES, CustomPromptTemplate, PromptTemplate


logger = logging.getLogger(__name__)

INSTRUCTION_PREAMBLE = "You are an expert at summarizing documents."
MARKDOWN_GUIDANCE = (
    "Use markdown formatting for better readability, including headers, "
    "lists, and emphasis where appropriate."
)
RECONCILIATION_DIRECTIVE = "Provide a final coherent summary."


def resolve_format_body(
    format: Optional[str] = None,
    custom_template: Optional[CustomPromptTemplate] = None,
    templates: Optional[Mapping[str, PromptTemplate]] = None,
) -> str:
    """
    Pick the format-specific body of the instruction.

    A custom template always wins; its ``{{key}}`` placeholders are filled
    from its variables and unmatched ones are left as they are. Otherwise the
    named format is looked up in ``templates`` (system templates when not
    given). Unknown formats fall back to the default format with a warning.
    """
    if custom_template is not None and custom_template.template:
        return substitute_variables(custom_template.template, custom_template.variables)

    registry = templates if templates is not None else SYSTEM_TEMPLATES
    template_key = format or DEFAULT_FORMAT
    template = registry.get(template_key)

    if template is None:
        logger.warning(f"Template '{template_key}' not found, falling back to {DEFAULT_FORMAT} format")
        template = registry.get(DEFAULT_FORMAT) or SYSTEM_TEMPLATES[DEFAULT_FORMAT]

    return template.template


def compose_instruction(
    format: Optional[str] = None,
    custom_template: Optional[CustomPromptTemplate] = None,
    language: Optional[str] = None,
    max_length: Optional[int] = None,
    templates: Optional[Mapping[str, PromptTemplate]] = None,
) -> str:
    """
    Build the full system instruction for a summarization run.

    Args:
        format: Named template key (default: "paragraph")
        custom_template: Optional custom template overriding the named format
        language: Target output language; adds a language directive when set
        max_length: Advisory word ceiling; adds a length directive when set
        templates: Template registry to look formats up in

    Returns:
        Instruction text for the system turn
    """
    parts = [INSTRUCTION_PREAMBLE, resolve_format_body(format, custom_template, templates)]

    if language:
        parts.append(f"Provide the summary in {language}.")
    if max_length:
        parts.append(f"Keep the summary under {max_length} words.")

    parts.append(MARKDOWN_GUIDANCE)
    return " ".join(parts)


def compose_reconciliation_instruction(instruction: str) -> str:
    """System instruction for the final merge call."""
    return f"{instruction} {RECONCILIATION_DIRECTIVE}"
