"""
Prompt templates and instruction composition.

System templates ship with the package; user templates are persisted by
``TemplateStore``. ``compose_instruction`` turns a format choice plus
language/length options into the system instruction for a run.
"""

from .composer import (
    INSTRUCTION_PREAMBLE,
    MARKDOWN_GUIDANCE,
    RECONCILIATION_DIRECTIVE,
    compose_instruction,
    compose_reconciliation_instruction,
    resolve_format_body,
)
from .store import TemplateStore
from .templates import (
    DEFAULT_FORMAT,
    SYSTEM_TEMPLATES,
    CustomPromptTemplate,
    PromptOption,
    PromptTemplate,
)


__all__ = [
    "compose_instruction",
    "compose_reconciliation_instruction",
    "resolve_format_body",
    "INSTRUCTION_PREAMBLE",
    "MARKDOWN_GUIDANCE",
    "RECONCILIATION_DIRECTIVE",
    "TemplateStore",
    "PromptTemplate",
    "PromptOption",
    "CustomPromptTemplate",
    "SYSTEM_TEMPLATES",
    "DEFAULT_FORMAT",
]
